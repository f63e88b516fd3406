"""Pytest configuration and shared fixtures for rmate tests

This module provides common fixtures and test utilities used across
the unit tests.
"""

import argparse
import logging
import socket
from typing import Callable, Dict, Generator, List, Tuple

import pytest

from rmate.client.client_cli import arguments_parse


@pytest.fixture
def environ() -> Dict[str, str]:
    """Empty environment mapping, so host machine variables never leak in"""
    return {}


@pytest.fixture
def parse_args() -> Callable[..., argparse.Namespace]:
    """Parse a command line given as separate arguments"""

    def _parse(*argv: str) -> argparse.Namespace:
        return arguments_parse(list(argv))

    return _parse


@pytest.fixture
def listening_server() -> Generator[Tuple[str, int], None, None]:
    """Loopback TCP listener on an ephemeral port

    Yields:
        (host, port) accepting connections until the test ends
    """
    server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    server.bind(("127.0.0.1", 0))
    server.listen(4)
    try:
        yield "127.0.0.1", server.getsockname()[1]
    finally:
        server.close()


@pytest.fixture
def closed_port() -> int:
    """Port that was just released, so connecting to it is refused"""
    scratch = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    scratch.bind(("127.0.0.1", 0))
    port = scratch.getsockname()[1]
    scratch.close()
    return port


@pytest.fixture
def dial_recorder(monkeypatch) -> List[Tuple[str, int]]:
    """Record TCP dials instead of performing them

    Returns:
        List that receives every (host, port) passed to socket.create_connection
    """
    dials: List[Tuple[str, int]] = []

    def _record(address, timeout=None, *args, **kwargs):
        dials.append(address)
        raise ConnectionRefusedError("dial recorded by test")

    monkeypatch.setattr(socket, "create_connection", _record)
    return dials


@pytest.fixture(autouse=True)
def setup_logging(caplog):
    """Setup logging for tests"""
    caplog.set_level(logging.DEBUG)
