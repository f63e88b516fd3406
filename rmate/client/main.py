"""rmate client main entry point"""

import logging
import os
import sys
from pathlib import Path
from typing import Mapping, NoReturn, Optional, Sequence

from rmate.client.bootstrap import connectionConfig_load, protocolEngine_handoff, target_resolve
from rmate.client.client_cli import arguments_parse, parser_build, usage_format, version_format
from rmate.client.client_logging import logging_setup
from rmate.client.network import ClientNetwork
from rmate.common.errors import ConfigError, TransportError, UsageError
from rmate.protocol.engine import NullProtocolEngine, ProtocolEngine

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
# Help and version also exit with this status, matching historical rmate clients.
EXIT_FAILURE = 1


def client_run(
    argv: Optional[Sequence[str]] = None,
    environ: Optional[Mapping[str, str]] = None,
    engine: Optional[ProtocolEngine] = None,
    prog: str = "rmate",
) -> int:
    """
    Run one rmate invocation

    Args:
        argv: Command-line arguments without the program name
        environ: Environment mapping, os.environ when omitted
        engine: Protocol engine receiving the connection
        prog: Program name for usage and version text

    Returns:
        Process exit status
    """
    environ = os.environ if environ is None else environ
    parser = parser_build(prog)

    try:
        args = arguments_parse(argv, parser)
    except UsageError as e:
        print(f"{prog}: {e}", file=sys.stderr)
        print(usage_format(parser), file=sys.stderr, end="")
        return EXIT_FAILURE

    if args.version:
        print(version_format(prog))
        return EXIT_FAILURE
    if args.help or not args.files:
        print(usage_format(parser), end="")
        return EXIT_FAILURE

    logging_setup(args.verbose)

    try:
        config = connectionConfig_load(args, environ)
    except ConfigError as e:
        logger.error("%s", e)
        return EXIT_FAILURE

    target, config = target_resolve(config)

    network = ClientNetwork(host=config.host, port=config.port, verbose=config.verbose)
    try:
        return protocolEngine_handoff(network, target, config, engine or NullProtocolEngine())
    except TransportError as e:
        logger.error("%s", e)
        return EXIT_FAILURE


def programName_get(argv0: str) -> str:
    """Program name for usage text; `python -m rmate` reports as rmate"""
    name = Path(argv0).name
    if not name or name == "__main__.py":
        return "rmate"
    return name


def main() -> NoReturn:
    """Main entry point"""
    try:
        status = client_run(sys.argv[1:], prog=programName_get(sys.argv[0]))
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        sys.exit(EXIT_FAILURE)

    sys.exit(status)


if __name__ == "__main__":
    main()
