"""Command value and the rule abstraction."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


DEFAULT_PRIORITY = 1000


@dataclass(frozen=True)
class Command:
    """A failed shell invocation and the output it produced."""

    script: str
    output: str = ""
    parts: tuple[str, ...] = field(init=False)

    def __post_init__(self) -> None:
        """Tokenize the script on whitespace."""
        object.__setattr__(self, "parts", tuple(self.script.split()))

    @property
    def rest(self) -> tuple[str, ...]:
        """All tokens after the command name."""
        return self.parts[1:]


@dataclass
class Rule:
    """A single correction rule.

    ``match`` decides whether the rule applies to a command and
    ``get_new_command`` produces candidate commands, most preferred first.
    ``get_new_command`` is only called after ``match`` returned True.
    """

    name: str
    match: Callable[[Command], bool]
    get_new_command: Callable[[Command], list[str]]
    priority: int = DEFAULT_PRIORITY
    enabled: bool = True
    description: str = ""

    def matches(self, command: Command) -> bool:
        """Check if this rule applies to the command."""
        return bool(self.match(command))
