"""Local machine identity used to label files on the editor side."""

from __future__ import annotations

import logging
import socket

logger = logging.getLogger(__name__)

__all__ = ["hostname_get"]


def hostname_get(verbose: bool = False) -> str:
    """
    Look up the local hostname.

    The hostname is cosmetic, so lookup failure yields an empty string
    instead of aborting the invocation.

    Args:
        verbose:
            Log lookup failures.

    Returns:
        Hostname, or `""` when it cannot be determined.
    """
    try:
        return socket.gethostname()
    except OSError as exc:
        if verbose:
            logger.info("Could not determine local hostname: %s", exc)
        return ""
