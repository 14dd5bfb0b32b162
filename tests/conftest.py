"""Shared fixtures for the axectl test suite."""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import pytest

from axectl.transport import AxeOSTransport

SCENARIO_PAYLOAD = {
    "hashrate": 450.2,
    "temp": 58.1,
    "vrTemp": 61.0,
    "power": 14.3,
    "voltage": 5100,
    "current": 2800,
    "wifiStatus": "connected",
    "uptimeSeconds": 8130,
}


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep the developer's env and ~/.config out of the tests."""
    for var in ("BITAXE_URL", "AXECTL_TIMEOUT", "AXECTL_CONFIG", "LOGURU_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))


@pytest.fixture()
def sample_payload():
    """Factory fixture returning AxeOS system/info JSON bytes with overrides.

    Pass ``drop=[...]`` to remove keys.
    """

    def _make(drop: list[str] | None = None, **overrides):
        data = dict(SCENARIO_PAYLOAD)
        data.update(overrides)
        for key in drop or []:
            data.pop(key, None)
        return json.dumps(data).encode()

    return _make


@pytest.fixture()
def mock_transport():
    """MagicMock of AxeOSTransport with fetch/send."""
    transport = MagicMock(spec=AxeOSTransport)
    transport.base_url = "http://192.168.1.50"
    transport.fetch.return_value = b"{}"
    transport.send.return_value = None
    return transport
