"""Shell history reading and command execution."""

from .history import get_last_command
from .runner import capture_output, run_command

__all__ = ["get_last_command", "capture_output", "run_command"]
