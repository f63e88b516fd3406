"""
Client CLI parsing and usage/version text.

This module contains only argument parsing for the rmate client. Validation
of the parsed values belongs to the config resolver.
"""

from __future__ import annotations

import argparse
from typing import NoReturn, Sequence

from rmate import __date__, __version__
from rmate.common.errors import UsageError

__all__ = ["ArgumentParser", "parser_build", "arguments_parse", "usage_format", "version_format"]

USAGE = (
    "%(prog)s [options] file-path  edit specified file\n"
    "   or: %(prog)s [options] -          read text from stdin"
)


class ArgumentParser(argparse.ArgumentParser):
    """Argument parser that raises `UsageError` instead of exiting."""

    def error(self, message: str) -> NoReturn:
        """
        Report a malformed command line.

        Args:
            message:
                argparse diagnostic.

        Raises:
            UsageError:
                Always.
        """
        raise UsageError(message)


def parser_build(prog: str = "rmate") -> ArgumentParser:
    """
    Build the client argument parser.

    Help and version are plain flags so the caller decides what they print
    and which exit status they produce.

    Args:
        prog:
            Program name shown in usage text.

    Returns:
        Configured parser.
    """
    parser: ArgumentParser = ArgumentParser(
        prog=prog,
        usage=USAGE,
        description="Open a file in TextMate.",
        add_help=False,
    )

    parser.add_argument(
        "-H",
        "--host",
        type=str,
        default=None,
        help="Connect to HOST. Use 'auto' to detect the host from SSH.",
    )
    parser.add_argument(
        "-p", "--port", type=str, default=None, help="Port number to use for connection."
    )
    parser.add_argument(
        "-w", "--wait", action="store_true", help="Wait for file to be closed by TextMate."
    )
    parser.add_argument(
        "-l",
        "--line",
        type=str,
        default=None,
        help="Place caret on line number after loading file.",
    )
    parser.add_argument(
        "-m", "--name", type=str, default=None, help="The display name shown in TextMate."
    )
    parser.add_argument(
        "-t", "--type", type=str, default=None, help="Treat file as having specified type."
    )
    parser.add_argument(
        "-f", "--force", action="store_true", help="Open even if file is not writable."
    )
    parser.add_argument(
        "-c",
        "--config",
        type=str,
        default=None,
        help="Read host and port defaults from this YAML file (below RMATE_HOST/RMATE_PORT).",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging messages.")
    parser.add_argument("-h", "--help", action="store_true", help="Display usage information.")
    parser.add_argument("--version", action="store_true", help="Show version and exit.")
    parser.add_argument("files", nargs="*", metavar="file", help=argparse.SUPPRESS)

    return parser


def arguments_parse(
    argv: Sequence[str] | None = None, parser: ArgumentParser | None = None
) -> argparse.Namespace:
    """
    Parse client command-line arguments.

    Options and file arguments may be interleaved (`rmate a.txt -w`).

    Args:
        argv:
            Arguments without the program name; `sys.argv[1:]` when omitted.
        parser:
            Parser to use; a default one is built when omitted.

    Returns:
        Parsed client CLI namespace.

    Raises:
        UsageError:
            Raised on unknown options or options missing their value.
    """
    parser = parser or parser_build()
    return parser.parse_intermixed_args(argv)


def usage_format(parser: ArgumentParser) -> str:
    """Return the full usage text."""
    return parser.format_help()


def version_format(prog: str = "rmate") -> str:
    """Return the version line printed by `--version`."""
    return f"{prog} {__version__} ({__date__})"
