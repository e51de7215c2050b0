"""Shared fixtures."""

import os
from pathlib import Path

import pytest

from theshit.fuzzy.index import ExecutableIndex
from theshit.fuzzy.matcher import FuzzyMatcher
from theshit.rules.builtin import build_rules
from theshit.rules.dispatcher import Dispatcher


def make_executable(directory: Path, name: str, mode: int = 0o755) -> Path:
    """Create a file with the given permission bits."""
    path = directory / name
    path.write_text("#!/bin/sh\n")
    os.chmod(path, mode)
    return path


class StaticIndex(ExecutableIndex):
    """Executable index with a fixed catalog instead of a PATH scan."""

    def __init__(self, names: list[str]) -> None:
        super().__init__("")
        self._fixed = list(names)

    def _scan(self) -> list[str]:
        return self._fixed


@pytest.fixture
def dispatcher_for():
    """Factory building the built-in dispatcher over a fixed catalog."""

    def build(names: list[str] | None = None) -> Dispatcher:
        matcher = FuzzyMatcher(StaticIndex(names or []))
        return Dispatcher(build_rules(matcher))

    return build


@pytest.fixture
def bin_dir(tmp_path: Path) -> Path:
    """Directory for fake executables."""
    directory = tmp_path / "bin"
    directory.mkdir()
    return directory
