"""Shared test fixtures."""

import tempfile

import pytest


@pytest.fixture
def mock_launch(monkeypatch):
    """Mock process.launch for tests."""
    from mcp_launch import process

    calls = []
    codes = []

    def fake_launch(args, env):
        calls.append((args, env))
        if codes:
            return codes.pop(0)
        return 0

    monkeypatch.setattr(process, "launch", fake_launch)

    return type("MockLaunch", (), {"calls": calls, "codes": codes})()


@pytest.fixture
def tempdir(tmp_path, monkeypatch):
    """Point tempfile.gettempdir() at tmp_path."""
    monkeypatch.setattr(tempfile, "tempdir", str(tmp_path))
    return tmp_path
