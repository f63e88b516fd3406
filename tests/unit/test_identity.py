"""Unit tests for local hostname lookup."""

from __future__ import annotations

import socket

from rmate.client.identity import hostname_get


class TestHostnameGet:
    """Tests for the cosmetic hostname lookup."""

    def test_returns_hostname(self, monkeypatch) -> None:
        monkeypatch.setattr(socket, "gethostname", lambda: "devbox")
        assert hostname_get() == "devbox"

    def test_failure_returns_empty_string(self, monkeypatch, caplog) -> None:
        def _fail() -> str:
            raise OSError("lookup failed")

        monkeypatch.setattr(socket, "gethostname", _fail)

        assert hostname_get(verbose=True) == ""
        assert "Could not determine local hostname" in caplog.text

    def test_failure_silent_without_verbose(self, monkeypatch, caplog) -> None:
        def _fail() -> str:
            raise OSError("lookup failed")

        monkeypatch.setattr(socket, "gethostname", _fail)

        assert hostname_get() == ""
        assert caplog.records == []
