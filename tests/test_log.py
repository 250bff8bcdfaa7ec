"""Tests for log.py — timestamped output."""

import re


def test_info(capsys):
    from mcp_launch.log import info

    info("test message")
    out = capsys.readouterr().out
    assert re.match(r"\[\d{2}:\d{2}:\d{2}\] test message\n", out)


def test_header(capsys):
    from mcp_launch.log import header

    header("environment")
    out = capsys.readouterr().out
    assert "── environment " in out
    assert "─" in out


def test_footer(capsys):
    from mcp_launch.log import footer

    footer("ready")
    out = capsys.readouterr().out
    assert "── ready " in out


def test_step(capsys):
    from mcp_launch.log import step

    step("GA_PROPERTY_ID: 123")
    out = capsys.readouterr().out
    assert "  GA_PROPERTY_ID: 123" in out


def test_success(capsys):
    from mcp_launch.log import success

    success("launched")
    out = capsys.readouterr().out
    assert "✓ launched" in out


def test_warning(capsys):
    from mcp_launch.log import warning

    warning("no credentials")
    captured = capsys.readouterr()
    assert "WARNING: no credentials" in captured.err
    assert captured.out == ""


def test_error(capsys):
    from mcp_launch.log import error

    error("something broke")
    err = capsys.readouterr().err
    assert "ERROR: something broke" in err
