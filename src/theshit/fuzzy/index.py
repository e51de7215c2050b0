"""Catalog of executable names found on the search path."""

from __future__ import annotations

import logging
import os
import stat

logger = logging.getLogger(__name__)


class ExecutableIndex:
    """Lazily built, memoized list of executable names on a search path.

    The scan runs on first access and its result is reused for the lifetime
    of the object. Unreadable or missing directories are skipped, so the
    index degrades to a smaller (possibly empty) catalog instead of failing.
    """

    def __init__(self, search_path: str | None = None, separator: str = os.pathsep) -> None:
        """Initialize the index.

        Args:
            search_path: Directory list such as the value of ``PATH``
            separator: Separator between directories in ``search_path``
        """
        self.search_path = search_path or ""
        self.separator = separator
        self._names: tuple[str, ...] | None = None
        self._members: frozenset[str] = frozenset()

    @property
    def loaded(self) -> bool:
        """Whether the search path has been scanned yet."""
        return self._names is not None

    @property
    def names(self) -> tuple[str, ...]:
        """Executable names in discovery order."""
        return self.load()

    def load(self) -> tuple[str, ...]:
        """Scan the search path once and return the cached names."""
        if self._names is None:
            self._names = tuple(self._scan())
            self._members = frozenset(self._names)
            logger.debug(f"Loaded {len(self._names)} system commands")
        return self._names

    def __contains__(self, name: object) -> bool:
        self.load()
        return name in self._members

    def __iter__(self):
        return iter(self.names)

    def __len__(self) -> int:
        return len(self.names)

    def directories(self) -> list[str]:
        """Directories of the search path, in order, without empty entries."""
        return [d for d in self.search_path.split(self.separator) if d]

    def _scan(self) -> list[str]:
        """Walk every search path directory collecting executable names."""
        found: list[str] = []
        seen: set[str] = set()

        for directory in self.directories():
            try:
                entries = list(os.scandir(directory))
            except OSError as e:
                logger.debug(f"Skipping {directory}: {e}")
                continue

            for entry in entries:
                if entry.name.startswith(".") or entry.name in seen:
                    continue
                if self._is_executable(entry):
                    seen.add(entry.name)
                    found.append(entry.name)

        return found

    @staticmethod
    def _is_executable(entry: os.DirEntry) -> bool:
        """Regular files and symlinks whose owner-execute bit is set."""
        try:
            if not (entry.is_file(follow_symlinks=False) or entry.is_symlink()):
                return False
            mode = os.stat(entry.path).st_mode
        except OSError:
            return False
        return bool(mode & stat.S_IXUSR)
