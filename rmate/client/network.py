"""
TCP client transport for rmate.

This module owns the connection lifecycle to the rmate server. It dials and
closes; protocol bytes are the protocol engine's concern.
"""

from __future__ import annotations

import logging
import socket
from types import TracebackType

from rmate.common.errors import TransportError

logger = logging.getLogger(__name__)


class ClientNetwork:
    """
    TCP transport used by the rmate client.

    A single connection attempt is made; failures are terminal. The instance
    is a context manager so the socket is closed on every exit path.
    """

    def __init__(
        self,
        host: str,
        port: int,
        verbose: bool = False,
    ) -> None:
        """
        Initialize client network transport configuration.

        Args:
            host:
                Server host name or address.
            port:
                Server port.
            verbose:
                Log connection lifecycle events.
        """
        self.host: str = host
        self.port: int = port
        self.verbose: bool = verbose

        self.socket: socket.socket | None = None
        self.is_connected: bool = False

    def __enter__(self) -> ClientNetwork:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.connection_close()

    def connection_establish(self) -> socket.socket:
        """
        Open the TCP connection to the server.

        Returns:
            Connected socket, in blocking mode.

        Raises:
            TransportError:
                Raised on DNS failure, refused connection or timeout.
        """
        existing: socket.socket | None = self.socket
        if self.is_connected and existing is not None:
            return existing

        if self.verbose:
            logger.info("Connecting to %s:%s", self.host, self.port)
        try:
            connection: socket.socket = socket.create_connection((self.host, self.port))
        except OSError as exc:
            self.socket_cleanup()
            raise TransportError(self.host, self.port, exc) from exc

        self.socket = connection
        self.is_connected = True
        if self.verbose:
            logger.info("Connected to server %s:%s", self.host, self.port)
        return connection

    def socket_cleanup(self) -> None:
        """
        Close and reset socket handle.

        This helper suppresses close errors because the caller is already in
        an error-recovery path.
        """
        if self.socket is None:
            return
        try:
            self.socket.close()
        except OSError:
            pass
        self.socket = None
        self.is_connected = False

    def connection_close(self) -> None:
        """
        Close connection to server.

        This method is idempotent.
        """
        if self.socket is None:
            return
        self.is_connected = False
        try:
            self.socket.close()
        except OSError as exc:
            logger.error("Error closing socket: %s", exc)
        finally:
            self.socket = None
        if self.verbose:
            logger.info("Connection to %s:%s closed", self.host, self.port)

    def connectionStatus_check(self) -> bool:
        """
        Check connection status.

        Returns:
            `True` when connected, else `False`.
        """
        return self.is_connected and self.socket is not None
