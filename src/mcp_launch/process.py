"""Child process launch — the single mock seam for CLI tests."""

import signal
import subprocess

from mcp_launch import log

LAUNCH_FAILED = 1


def exit_code(returncode: int) -> int:
    """Map a Popen returncode to a shell-style exit status (128+N for signals)."""
    if returncode < 0:
        return 128 - returncode
    return returncode


def launch(args: list[str], env: dict[str, str]) -> int:
    """Run one child with inherited stdio and exactly `env`. Returns its exit code.

    SIGTERM received while the child runs is forwarded to it. Ctrl-C already
    reaches the child through the process group, so the parent just keeps waiting.
    """
    try:
        proc = subprocess.Popen(args, env=env)
    except OSError as e:
        log.error(f"Failed to start {args[0]}: {e}")
        return LAUNCH_FAILED

    def _forward(signum, frame):
        log.info(f"Received signal {signum}, forwarding to pid {proc.pid}")
        proc.send_signal(signum)

    original_sigterm = signal.getsignal(signal.SIGTERM)
    signal.signal(signal.SIGTERM, _forward)
    try:
        try:
            returncode = proc.wait()
        except KeyboardInterrupt:
            returncode = proc.wait()
    finally:
        signal.signal(signal.SIGTERM, original_sigterm)

    code = exit_code(returncode)
    log.info(f"{args[0]} exited with code {code}")
    return code
