"""Run shell commands for the correction loop."""

from __future__ import annotations

import logging
import os
import signal
import subprocess

logger = logging.getLogger(__name__)


def capture_output(script: str, timeout: float = 3) -> str:
    """Run ``script`` through the shell and return stdout and stderr combined.

    The shell runs in its own session so a timeout kills everything it
    started, not just the shell itself.

    Args:
        script: Command line to run
        timeout: Seconds to wait before giving up

    Returns:
        Captured output; whatever was produced before a timeout
    """
    proc = subprocess.Popen(
        script,
        shell=True,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        stdin=subprocess.DEVNULL,
        start_new_session=True,
    )
    try:
        stdout, _ = proc.communicate(timeout=timeout)
    except subprocess.TimeoutExpired:
        logger.warning(f"Command timed out after {timeout} seconds: {script}")
        _kill_group(proc)
        stdout, _ = proc.communicate()
    return _decode(stdout)


def run_command(script: str) -> int:
    """Run a correction attached to the terminal and return its exit status."""
    return subprocess.run(script, shell=True).returncode


def _kill_group(proc: subprocess.Popen) -> None:
    try:
        os.killpg(proc.pid, signal.SIGKILL)
    except ProcessLookupError:
        pass


def _decode(data: bytes | None) -> str:
    return data.decode(errors="replace") if data else ""
