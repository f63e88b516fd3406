"""Client bootstrap helpers for config, target, and transport wiring."""

from __future__ import annotations

import argparse
import dataclasses
import logging
from typing import Mapping

from rmate.client.identity import hostname_get
from rmate.client.network import ClientNetwork
from rmate.client.paths import Canonicalizer, targetSelection_resolve
from rmate.common.config import ConfigLoader, ConnectionConfig
from rmate.common.types import TargetSelection
from rmate.protocol.engine import ProtocolEngine, ProtocolHandoff

logger = logging.getLogger(__name__)


def connectionConfig_load(args: argparse.Namespace, environ: Mapping[str, str]) -> ConnectionConfig:
    """
    Read the `--config` file, if one is named, and resolve the connection config.

    Args:
        args: Parsed CLI args.
        environ: Process environment mapping.

    Returns:
        Resolved config.

    Raises:
        UsageError: No file argument.
        ConfigError: Invalid port, host, flag value or config file.
    """
    rc_data = ConfigLoader.configFile_load(args.config, verbose=bool(args.verbose))
    return ConfigLoader.connectionConfig_resolve(args, environ, rc_data)


def target_resolve(
    config: ConnectionConfig, canonicalizer: Canonicalizer | None = None
) -> tuple[TargetSelection, ConnectionConfig]:
    """
    Resolve the target and fill in the config's display name.

    Args:
        config: Resolved config.
        canonicalizer: Optional canonicalization backend.

    Returns:
        Target selection and a config whose display name is always set.
    """
    hostname: str = hostname_get(verbose=config.verbose)
    target: TargetSelection = targetSelection_resolve(
        config.file_argument,
        hostname,
        name_override=config.display_name,
        canonicalizer=canonicalizer,
        verbose=config.verbose,
    )
    if config.display_name is None:
        config = dataclasses.replace(config, display_name=target.display_name)
    return target, config


def protocolEngine_handoff(
    network: ClientNetwork,
    target: TargetSelection,
    config: ConnectionConfig,
    engine: ProtocolEngine,
) -> int:
    """
    Dial the server and hand the connection to the protocol engine.

    The connection is closed when this returns or raises.

    Args:
        network: Client network transport.
        target: Resolved target.
        config: Resolved config.
        engine: Protocol engine to run the session.

    Returns:
        Exit status reported by the engine.

    Raises:
        TransportError: Connection could not be established.
    """
    with network:
        connection = network.connection_establish()
        handoff = ProtocolHandoff(connection=connection, target=target, config=config)
        return engine.session_run(handoff)
