"""Tests for process.py — child launch and exit-code forwarding."""

import os
import signal

from mcp_launch.process import LAUNCH_FAILED, exit_code, launch


def test_exit_code_passthrough():
    assert exit_code(0) == 0
    assert exit_code(7) == 7


def test_exit_code_signal():
    assert exit_code(-signal.SIGTERM) == 128 + signal.SIGTERM
    assert exit_code(-9) == 137


def test_launch_returns_child_exit_code():
    assert launch(["sh", "-c", "exit 7"], dict(os.environ)) == 7


def test_launch_success():
    assert launch(["true"], dict(os.environ)) == 0


def test_launch_uses_given_env(tmp_path, monkeypatch):
    monkeypatch.setenv("PARENT_ONLY", "leaked")
    out = tmp_path / "out.txt"
    env = {"PATH": os.environ.get("PATH", "/usr/bin:/bin"), "PROBE": "resolved"}
    code = launch(["sh", "-c", f'printf "%s|%s" "$PROBE" "${{PARENT_ONLY:-unset}}" > {out}'], env)
    assert code == 0
    assert out.read_text() == "resolved|unset"


def test_launch_missing_command(capsys):
    code = launch(["definitely-not-a-real-command-xyz"], dict(os.environ))
    assert code == LAUNCH_FAILED == 1
    assert "ERROR: Failed to start definitely-not-a-real-command-xyz" in capsys.readouterr().err


def test_launch_not_executable(tmp_path):
    script = tmp_path / "script.sh"
    script.write_text("#!/bin/sh\nexit 0\n")
    os.chmod(script, 0o644)
    assert launch([str(script)], dict(os.environ)) == 1


def test_launch_child_killed_by_signal():
    code = launch(["sh", "-c", "kill -TERM $$"], dict(os.environ))
    assert code == 128 + signal.SIGTERM


def test_launch_restores_sigterm_handler():
    before = signal.getsignal(signal.SIGTERM)
    launch(["true"], dict(os.environ))
    assert signal.getsignal(signal.SIGTERM) is before
