"""Dispatcher - picks the single rule that corrects a failed command."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from theshit.fuzzy.index import ExecutableIndex
from theshit.fuzzy.matcher import FuzzyMatcher
from theshit.rules.builtin import build_rules

if TYPE_CHECKING:
    from collections.abc import Iterable

    from theshit.config import Settings
    from theshit.rules.base import Command, Rule

logger = logging.getLogger(__name__)


class Dispatcher:
    """Evaluates rules in priority order and returns the first match's fixes."""

    def __init__(self, rules: Iterable[Rule]) -> None:
        """Initialize the dispatcher.

        Args:
            rules: Rules in registration order. Rules sharing a priority keep
                this order.
        """
        self._registered: list[Rule] = list(rules)
        self._rules = self._sort(self._registered)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        index: ExecutableIndex | None = None,
    ) -> Dispatcher:
        """Build a dispatcher with the built-in catalog.

        Args:
            settings: Startup configuration
            index: Executable catalog to share; built from
                ``settings.search_path`` when omitted
        """
        if index is None:
            index = ExecutableIndex(settings.search_path)
        matcher = FuzzyMatcher(index, max_suggestions=settings.num_close_matches)
        return cls(build_rules(matcher))

    @staticmethod
    def _sort(rules: list[Rule]) -> list[Rule]:
        # sorted() is stable, so equal priorities keep registration order
        return sorted(rules, key=lambda r: r.priority)

    def first_match(self, command: Command) -> Rule | None:
        """Return the rule that would fire for ``command``, if any."""
        for rule in self._rules:
            if rule.matches(command):
                logger.debug(f"Matched rule: {rule.name}")
                return rule
        return None

    def evaluate(self, command: Command) -> list[str]:
        """Return corrected commands for ``command``, best first.

        An empty list means nothing to fix.
        """
        rule = self.first_match(command)
        if rule is None:
            logger.debug(f"No rule matched: {command.script!r}")
            return []
        return list(rule.get_new_command(command))

    def matching_rules(self, command: Command) -> list[Rule]:
        """All rules that match, in evaluation order, for diagnostics."""
        return [rule for rule in self._rules if rule.matches(command)]

    def explain(self, command: Command) -> dict[str, Any]:
        """Describe which rule fires and which others it shadows."""
        matching = self.matching_rules(command)
        fired = matching[0] if matching else None
        return {
            "command": command.script,
            "rule_matched": fired.name if fired else None,
            "corrections": list(fired.get_new_command(command)) if fired else [],
            "all_matching_rules": [
                {"name": r.name, "priority": r.priority} for r in matching
            ],
        }

    def add_rule(self, rule: Rule) -> None:
        """Register a rule after the existing ones."""
        self._registered.append(rule)
        self._rules = self._sort(self._registered)

    def list_rules(self) -> list[Rule]:
        """List rules in evaluation order."""
        return self._rules.copy()
