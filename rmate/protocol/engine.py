"""
Handoff contract between the bootstrap and a protocol engine.

The bootstrap owns the socket: it opens it before the handoff and closes it
after `session_run` returns or raises.
"""

from __future__ import annotations

import logging
import socket
from dataclasses import dataclass
from typing import Protocol

from rmate.common.config import ConnectionConfig
from rmate.common.types import TargetSelection

logger = logging.getLogger(__name__)

__all__ = ["ProtocolHandoff", "ProtocolEngine", "NullProtocolEngine"]


@dataclass(frozen=True)
class ProtocolHandoff:
    """Everything a protocol engine needs to run one edit session."""

    connection: socket.socket
    target: TargetSelection
    config: ConnectionConfig


class ProtocolEngine(Protocol):
    """Runs an edit session over an already connected socket."""

    def session_run(self, handoff: ProtocolHandoff) -> int:
        """
        Run the session.

        Args:
            handoff:
                Connected socket plus resolved target and configuration.

        Returns:
            Process exit status.
        """
        ...


class NullProtocolEngine:
    """Engine that accepts the handoff and ends the session immediately."""

    def session_run(self, handoff: ProtocolHandoff) -> int:
        if handoff.config.verbose:
            logger.info(
                "Handoff of %s to %s:%s (wait=%s, force=%s); no protocol engine attached",
                handoff.target.display_name,
                handoff.config.host,
                handoff.config.port,
                handoff.config.wait,
                handoff.config.force,
            )
        return 0
