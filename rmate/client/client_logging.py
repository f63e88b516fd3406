"""
Client logging policy.

Every diagnostic goes to stderr, stamped with the rmate version, so that
usage and version text on stdout stay clean.
"""

from __future__ import annotations

import logging
import sys

from rmate import __version__

__all__ = ["LOG_FORMAT", "logging_setup"]

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s: %(message)s"


def logging_setup(verbose: bool, log_format: str = LOG_FORMAT) -> None:
    """
    Configure root logging for one invocation.

    Args:
        verbose:
            `--verbose` was given; lowers the threshold from WARNING to DEBUG.
        log_format:
            Base format; `%(asctime)s` is suffixed with the version.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=log_format.replace("%(asctime)s", f"%(asctime)s [v{__version__}]"),
        handlers=[logging.StreamHandler(sys.stderr)],
    )
