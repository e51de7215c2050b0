"""Edit-distance ranking of executable names against a mistyped command."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from rapidfuzz.distance import Levenshtein

if TYPE_CHECKING:
    from collections.abc import Sequence

    from theshit.fuzzy.index import ExecutableIndex

MATCH_DISTANCE = 2
SUGGEST_DISTANCE = 3
MAX_SUGGESTIONS = 3


def levenshtein_distance(a: str, b: str) -> int:
    """Unit-cost insert/delete/substitute distance between two strings."""
    return Levenshtein.distance(a, b)


@dataclass(frozen=True)
class CandidateMatch:
    """An executable name close to the query."""

    name: str
    distance: int


class FuzzyMatcher:
    """Finds executables whose names are close to a failed command name."""

    def __init__(self, index: ExecutableIndex, max_suggestions: int = MAX_SUGGESTIONS) -> None:
        """Initialize the matcher.

        Args:
            index: Executable catalog to search
            max_suggestions: Cap on the number of corrected commands produced

        Raises:
            ValueError: If max_suggestions is below 1
        """
        if max_suggestions < 1:
            raise ValueError(f"max_suggestions must be at least 1, got {max_suggestions}")
        self.index = index
        self.max_suggestions = max_suggestions

    def find_similar(self, query: str, max_distance: int = MATCH_DISTANCE) -> list[CandidateMatch]:
        """Rank indexed names within ``max_distance`` edits of ``query``.

        Ties keep the index's discovery order.
        """
        matches = []
        for name in self.index:
            distance = Levenshtein.distance(query, name, score_cutoff=max_distance)
            if distance <= max_distance:
                matches.append(CandidateMatch(name=name, distance=distance))
        return sorted(matches, key=lambda m: m.distance)

    def has_match(self, query: str) -> bool:
        """Check whether any name is close enough to be worth suggesting."""
        return bool(self.find_similar(query, MATCH_DISTANCE))

    def suggest(self, query: str, rest: Sequence[str] = ()) -> list[str]:
        """Build corrected commands, one per close name, best first.

        Args:
            query: The mistyped command name
            rest: Remaining tokens, appended unchanged

        Returns:
            Up to ``max_suggestions`` command strings
        """
        matches = self.find_similar(query, SUGGEST_DISTANCE)[: self.max_suggestions]
        return [" ".join([m.name, *rest]) for m in matches]
