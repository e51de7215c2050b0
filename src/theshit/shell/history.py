"""Recover the last command from the user's shell history file."""

from __future__ import annotations

import logging
from collections import deque
from pathlib import Path

from theshit.errors import NoCommandError

logger = logging.getLogger(__name__)

# Lines mentioning these are our own invocations, not the failed command
IGNORED_MARKERS = ("shit",)


def history_file(shell: str, home: str | Path) -> Path:
    """Pick the history file for the user's shell."""
    name = ".zsh_history" if "zsh" in shell else ".bash_history"
    return Path(home) / name


def parse_line(line: str, zsh: bool = False) -> str:
    """Extract the command text from a single history line.

    zsh extended history lines look like ``: 1700000000:0;git status``.
    """
    if zsh:
        _, sep, command = line.rpartition(";")
        if sep:
            line = command
    return line.strip()


def get_last_command(
    shell: str,
    home: str | Path,
    limit: int = 9999,
    ignored: tuple[str, ...] = IGNORED_MARKERS,
) -> str:
    """Return the most recent usable command from shell history.

    Args:
        shell: Value of ``SHELL``
        home: User's home directory
        limit: Number of trailing history lines to examine
        ignored: Commands containing any of these are skipped

    Raises:
        NoCommandError: If no history file exists or nothing usable is in it
    """
    if not home:
        raise NoCommandError("HOME is not set")

    path = history_file(shell, home)
    zsh = path.name == ".zsh_history"
    try:
        with open(path, encoding="utf-8", errors="replace") as f:
            lines = deque(f, maxlen=limit)
    except OSError as e:
        raise NoCommandError(f"Cannot read {path}: {e}") from e

    for line in reversed(lines):
        command = parse_line(line, zsh=zsh)
        if command and not any(marker in command for marker in ignored):
            logger.debug(f"Last command from {path}: {command!r}")
            return command

    raise NoCommandError(f"No previous command found in {path}")
