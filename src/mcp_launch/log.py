"""Timestamped console output."""

import sys
from datetime import datetime


def _timestamp() -> str:
    return datetime.now().strftime("%H:%M:%S")


def _rule(title: str) -> str:
    return f"── {title} " + "─" * max(0, 45 - len(title))


def info(msg: str) -> None:
    print(f"[{_timestamp()}] {msg}", flush=True)


def header(title: str) -> None:
    info(_rule(title))


def footer(title: str) -> None:
    info(_rule(title))


def step(msg: str) -> None:
    info(f"  {msg}")


def success(msg: str) -> None:
    info(f"  ✓ {msg}")


def warning(msg: str) -> None:
    print(f"[{_timestamp()}] WARNING: {msg}", file=sys.stderr, flush=True)


def error(msg: str) -> None:
    print(f"[{_timestamp()}] ERROR: {msg}", file=sys.stderr, flush=True)
