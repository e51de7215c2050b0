"""Core correction loop tying history, execution and the dispatcher together."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from theshit.config import Settings
from theshit.rules.base import Command
from theshit.rules.dispatcher import Dispatcher
from theshit.shell.runner import capture_output, run_command

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

MAX_RECURSIVE_ATTEMPTS = 10


@dataclass
class Attempt:
    """One correction that was offered and, if accepted, run."""

    command: Command
    correction: str
    accepted: bool = True
    returncode: int | None = None

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0


class Corrector:
    """Main orchestrator: finds a fix for a failed command and runs it."""

    def __init__(
        self,
        settings: Settings | None = None,
        dispatcher: Dispatcher | None = None,
        capture: Callable[[str, float], str] = capture_output,
        run: Callable[[str], int] = run_command,
    ) -> None:
        self.settings = settings or Settings()
        self.dispatcher = dispatcher or Dispatcher.from_settings(self.settings)
        self._capture = capture
        self._run = run

    def correct(self, script: str, output: str | None = None) -> list[str]:
        """Return candidate corrections for ``script``.

        Args:
            script: The failed command
            output: Its output; captured by re-running it when omitted
        """
        if output is None:
            output = self._capture(script, self.settings.wait_command)
        return self.dispatcher.evaluate(Command(script, output))

    def fix(
        self,
        script: str,
        output: str | None = None,
        confirm: Callable[[str], bool] | None = None,
        recursive: bool = False,
    ) -> list[Attempt]:
        """Correct and run ``script``, optionally retrying on the result.

        Args:
            script: The failed command
            output: Its output; captured by re-running it when omitted
            confirm: Asked before each correction runs; None runs without asking
            recursive: Keep correcting while the correction itself fails

        Returns:
            Attempts in order; empty when there was nothing to fix
        """
        if output is None:
            output = self._capture(script, self.settings.wait_command)
        command = Command(script, output)
        max_attempts = MAX_RECURSIVE_ATTEMPTS if recursive else 1
        attempts: list[Attempt] = []

        while len(attempts) < max_attempts:
            corrections = self.dispatcher.evaluate(command)
            if not corrections:
                break

            correction = corrections[0]
            if confirm is not None and not confirm(correction):
                attempts.append(Attempt(command=command, correction=correction, accepted=False))
                break

            returncode = self._run(correction)
            attempts.append(Attempt(command=command, correction=correction, returncode=returncode))
            logger.info(f"Ran {correction!r}, exit status {returncode}")

            if returncode == 0 or not recursive:
                break

            command = Command(correction, self._capture(correction, self.settings.wait_command))

        return attempts
