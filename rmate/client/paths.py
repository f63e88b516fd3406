"""
Target selection: which file is edited and how it is labelled.

Canonicalization is a single capability with one backend per platform family,
so callers never branch on the operating system themselves.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Protocol

from rmate.common.types import STDIN_SENTINEL, UNTITLED_NAME, TargetMode, TargetSelection

logger = logging.getLogger(__name__)

__all__ = [
    "Canonicalizer",
    "PosixCanonicalizer",
    "WindowsCanonicalizer",
    "canonicalizer_select",
    "displayName_build",
    "targetSelection_resolve",
]


class Canonicalizer(Protocol):
    """Turns a user-supplied path into its canonical absolute form."""

    def canonicalize(self, path: str) -> str | None:
        """
        Canonicalize an existing path.

        Args:
            path:
                Path as given on the command line.

        Returns:
            Canonical absolute path, or `None` when the path does not exist or
            cannot be resolved.
        """
        ...


class PosixCanonicalizer:
    """Resolves symlinks and relative segments with `realpath(3)` semantics."""

    def canonicalize(self, path: str) -> str | None:
        if not os.path.exists(path):
            return None
        try:
            return os.path.realpath(path)
        except (OSError, ValueError):
            return None


class WindowsCanonicalizer:
    """Resolves through `Path.resolve`, which follows reparse points."""

    def canonicalize(self, path: str) -> str | None:
        try:
            return str(Path(path).resolve(strict=True))
        except (OSError, RuntimeError, ValueError):
            return None


def canonicalizer_select(os_name: str | None = None) -> Canonicalizer:
    """
    Pick the canonicalization backend for a platform.

    Args:
        os_name:
            Value of `os.name` to select for; the running platform when omitted.

    Returns:
        Canonicalizer backend.
    """
    if (os_name or os.name) == "nt":
        return WindowsCanonicalizer()
    return PosixCanonicalizer()


def displayName_build(hostname: str, label: str) -> str:
    """Return the `<hostname>:<label>` display name."""
    return f"{hostname}:{label}"


def targetSelection_resolve(
    argument: str,
    hostname: str,
    name_override: str | None = None,
    canonicalizer: Canonicalizer | None = None,
    verbose: bool = False,
) -> TargetSelection:
    """
    Decide what is sent to the editor and how it is labelled.

    A path that does not exist yet is valid input: the editor may be creating
    a new file. The display name always uses the argument as given, not its
    canonical form.

    Args:
        argument:
            File argument from the command line, or `-` for stdin.
        hostname:
            Local hostname for the display label.
        name_override:
            Explicit display name from `--name`.
        canonicalizer:
            Canonicalization backend; chosen for the running platform when omitted.
        verbose:
            Log the selection.

    Returns:
        Immutable target selection.
    """
    if argument == STDIN_SENTINEL:
        selection = TargetSelection(
            mode=TargetMode.STDIN,
            display_name=name_override or displayName_build(hostname, UNTITLED_NAME),
        )
    else:
        canonicalizer = canonicalizer or canonicalizer_select()
        resolved_path: str | None = canonicalizer.canonicalize(argument)
        if resolved_path is None and verbose:
            logger.info("%s does not exist yet or cannot be resolved", argument)
        selection = TargetSelection(
            mode=TargetMode.FILE,
            display_name=name_override or displayName_build(hostname, argument),
            resolved_path=resolved_path,
        )

    if verbose:
        logger.info(
            "Target %s (%s) resolved to %s",
            selection.display_name,
            selection.mode.value,
            selection.resolved_path or "<none>",
        )
    return selection
