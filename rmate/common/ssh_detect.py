"""
SSH session inspection for `--host auto`.

The address of the machine the user is sitting at is the client end of the
SSH connection that produced the current shell. OpenSSH exports it in
`SSH_CONNECTION` (and the older `SSH_CLIENT`).
"""

from __future__ import annotations

import ipaddress
import logging
from typing import Mapping

from rmate.common.errors import ConfigError

logger = logging.getLogger(__name__)

__all__ = ["SSH_ENV_VARIABLES", "sshClientAddress_detect"]

# Checked in order; both start with the client address.
SSH_ENV_VARIABLES: tuple[str, ...] = ("SSH_CONNECTION", "SSH_CLIENT")


def sshClientAddress_detect(environ: Mapping[str, str], verbose: bool = False) -> str:
    """
    Detect the SSH client address of the current login session.

    Args:
        environ:
            Process environment mapping.
        verbose:
            Emit diagnostics about which variable was used.

    Returns:
        Client IP address as a string.

    Raises:
        ConfigError:
            Raised when no SSH session information is available or the
            address found is not a valid IP address.
    """
    for variable in SSH_ENV_VARIABLES:
        value: str = environ.get(variable, "").strip()
        if not value:
            continue
        address: str = value.split()[0]
        addressFormat_validate(variable, address)
        if verbose:
            logger.info("Detected SSH client address %s from %s", address, variable)
        return address

    raise ConfigError(
        "Cannot resolve host 'auto': not in an SSH session "
        f"({' and '.join(SSH_ENV_VARIABLES)} are unset)"
    )


def addressFormat_validate(variable: str, address: str) -> None:
    """
    Check that an address taken from the environment is an IP address.

    Args:
        variable:
            Environment variable the address came from.
        address:
            Candidate address. IPv6 zone ids (`fe80::1%eth0`) are accepted.

    Raises:
        ConfigError:
            Raised when the address does not parse.
    """
    try:
        ipaddress.ip_address(address.split("%", 1)[0])
    except ValueError as exc:
        raise ConfigError(
            f"Cannot resolve host 'auto': {variable} holds invalid address '{address}'"
        ) from exc
