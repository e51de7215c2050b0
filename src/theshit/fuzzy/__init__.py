"""Executable discovery and edit-distance ranking of command names."""

from .index import ExecutableIndex
from .matcher import CandidateMatch, FuzzyMatcher, levenshtein_distance

__all__ = ["ExecutableIndex", "CandidateMatch", "FuzzyMatcher", "levenshtein_distance"]
