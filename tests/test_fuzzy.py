"""Tests for executable discovery and fuzzy matching."""

import os
from pathlib import Path

import pytest

from theshit.fuzzy.index import ExecutableIndex
from theshit.fuzzy.matcher import CandidateMatch, FuzzyMatcher, levenshtein_distance

from conftest import StaticIndex, make_executable


class TestLevenshtein:
    """Test the edit distance."""

    @pytest.mark.parametrize(
        "a,b,expected",
        [
            ("", "", 0),
            ("git", "git", 0),
            ("gti", "git", 2),
            ("light", "lighter", 2),
            ("kitten", "sitting", 3),
            ("", "abc", 3),
            ("ls", "sl", 2),
            ("pyton", "python", 1),
        ],
    )
    def test_known_distances(self, a: str, b: str, expected: int) -> None:
        """Test distances for known pairs."""
        assert levenshtein_distance(a, b) == expected

    @pytest.mark.parametrize("a,b", [("gti", "git"), ("abc", ""), ("docker", "dokcer"), ("x", "xyz")])
    def test_symmetric(self, a: str, b: str) -> None:
        """Test that distance does not depend on argument order."""
        assert levenshtein_distance(a, b) == levenshtein_distance(b, a)


class TestExecutableIndex:
    """Test search path scanning."""

    def test_finds_executables(self, bin_dir: Path) -> None:
        """Test that executable files are indexed."""
        make_executable(bin_dir, "lighter")
        make_executable(bin_dir, "git")

        index = ExecutableIndex(str(bin_dir))

        assert set(index.names) == {"lighter", "git"}
        assert "git" in index

    def test_skips_non_executable(self, bin_dir: Path) -> None:
        """Test that files without the owner-execute bit are skipped."""
        make_executable(bin_dir, "readme", mode=0o644)
        make_executable(bin_dir, "tool")

        index = ExecutableIndex(str(bin_dir))

        assert index.names == ("tool",)

    def test_skips_hidden(self, bin_dir: Path) -> None:
        """Test that dotfiles are skipped."""
        make_executable(bin_dir, ".hidden")

        assert ExecutableIndex(str(bin_dir)).names == ()

    def test_skips_directories(self, bin_dir: Path) -> None:
        """Test that subdirectories are not commands."""
        (bin_dir / "subdir").mkdir()

        assert ExecutableIndex(str(bin_dir)).names == ()

    def test_includes_symlinks(self, bin_dir: Path, tmp_path: Path) -> None:
        """Test that symlinks to executables are indexed."""
        target = make_executable(tmp_path, "real-tool")
        os.symlink(target, bin_dir / "tool")

        assert ExecutableIndex(str(bin_dir)).names == ("tool",)

    def test_skips_broken_symlinks(self, bin_dir: Path, tmp_path: Path) -> None:
        """Test that dangling symlinks do not raise."""
        os.symlink(tmp_path / "missing", bin_dir / "ghost")

        assert ExecutableIndex(str(bin_dir)).names == ()

    def test_missing_directories_are_skipped(self, bin_dir: Path, tmp_path: Path) -> None:
        """Test that absent directories degrade to a smaller index."""
        make_executable(bin_dir, "tool")
        search_path = os.pathsep.join([str(tmp_path / "nope"), "", str(bin_dir)])

        assert ExecutableIndex(search_path).names == ("tool",)

    def test_empty_search_path(self) -> None:
        """Test that no search path gives an empty index."""
        index = ExecutableIndex(None)

        assert index.names == ()
        assert len(index) == 0

    def test_first_directory_wins(self, tmp_path: Path) -> None:
        """Test that a name is kept once, from the first directory."""
        first = tmp_path / "first"
        second = tmp_path / "second"
        first.mkdir()
        second.mkdir()
        make_executable(second, "tool")
        make_executable(second, "other")
        make_executable(first, "tool")

        index = ExecutableIndex(os.pathsep.join([str(first), str(second)]))

        assert index.names[0] == "tool"
        assert sorted(index.names) == ["other", "tool"]

    def test_custom_separator(self, tmp_path: Path) -> None:
        """Test a semicolon separated search path."""
        a = tmp_path / "a"
        a.mkdir()
        make_executable(a, "tool")

        assert ExecutableIndex(f"{a};{tmp_path / 'b'}", separator=";").names == ("tool",)

    def test_built_once(self, bin_dir: Path) -> None:
        """Test that the scan is cached for later lookups."""
        make_executable(bin_dir, "tool")
        index = ExecutableIndex(str(bin_dir))

        assert not index.loaded
        assert index.names == ("tool",)
        assert index.loaded

        make_executable(bin_dir, "newer")

        assert index.names == ("tool",)


class TestFuzzyMatcher:
    """Test candidate ranking."""

    def test_find_similar_sorted_by_distance(self) -> None:
        """Test ascending distance order."""
        matcher = FuzzyMatcher(StaticIndex(["lighter", "light2", "ls"]))

        matches = matcher.find_similar("light", max_distance=2)

        assert matches == [
            CandidateMatch(name="light2", distance=1),
            CandidateMatch(name="lighter", distance=2),
        ]

    def test_ties_keep_index_order(self) -> None:
        """Test that equal distances keep discovery order, not alphabetical."""
        matcher = FuzzyMatcher(StaticIndex(["gzt", "gat", "gbt"]))

        matches = matcher.find_similar("git", max_distance=1)

        assert [m.name for m in matches] == ["gzt", "gat", "gbt"]

    def test_threshold(self) -> None:
        """Test that names beyond the threshold are dropped."""
        matcher = FuzzyMatcher(StaticIndex(["lighthouse"]))

        assert matcher.find_similar("light", max_distance=3) == []
        assert not matcher.has_match("light")

    def test_suggest_appends_rest_unchanged(self) -> None:
        """Test that only the command name is replaced."""
        matcher = FuzzyMatcher(StaticIndex(["git"]))

        assert matcher.suggest("gti", ("commit", "-m", "'x  y'")) == ["git commit -m 'x  y'"]

    def test_suggest_capped(self) -> None:
        """Test that at most three suggestions are produced."""
        matcher = FuzzyMatcher(StaticIndex(["aa", "ab", "ac", "ad", "ae"]))

        assert matcher.suggest("a") == ["aa", "ab", "ac"]

    def test_suggest_uses_wider_threshold(self) -> None:
        """Test that suggestions allow three edits."""
        matcher = FuzzyMatcher(StaticIndex(["lightest"]))

        assert not matcher.has_match("light")
        assert matcher.suggest("light") == ["lightest"]

    def test_custom_limit(self) -> None:
        """Test a configured suggestion cap."""
        matcher = FuzzyMatcher(StaticIndex(["aa", "ab", "ac"]), max_suggestions=1)

        assert matcher.suggest("a") == ["aa"]

    @pytest.mark.parametrize("limit", [0, -1])
    def test_limit_must_be_positive(self, limit: int) -> None:
        """Test that a cap below one is rejected."""
        with pytest.raises(ValueError, match="max_suggestions"):
            FuzzyMatcher(StaticIndex(["aa"]), max_suggestions=limit)
