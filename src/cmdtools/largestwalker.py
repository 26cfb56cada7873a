from __future__ import annotations

import logging
import os
from collections.abc import Generator
from typing import Callable

from .largestmatcher import FilenameMatcher
from .largestmodel import UNBOUNDED
from .largestmodel import Fatal
from .largestmodel import FileCandidate
from .largestmodel import Found
from .largestmodel import Skipped
from .largestmodel import TraversalStats
from .largestmodel import WalkConfig
from .largestmodel import WalkResult

StatsObserver = Callable[[TraversalStats], None]


class DirectoryWalker:
    """Depth-limited walk of a directory tree that yields matching files."""

    logger = logging.getLogger(__name__)

    def __init__(
        self,
        config: WalkConfig,
        *,
        matcher: FilenameMatcher | None = None,
        observer: StatsObserver | None = None,
    ) -> None:
        """
        Initialize a new DirectoryWalker.

        Args:
            config: The root, mask and depth limit of the walk.

        Keyword Args:
            matcher: The filename filter. Defaults to one built from config.mask.
            observer: Called with the current stats after every file and
                directory visited. Must not modify them.
        """
        self._config = config
        self._matcher = matcher or FilenameMatcher(config.mask)
        self._observer = observer
        self.stats = TraversalStats()

    @property
    def root(self) -> str:
        """Return the absolute path of the walk root."""
        return os.path.abspath(self._config.root)

    def walk(self) -> Generator[WalkResult, None, None]:
        """
        Walk the tree depth first, resetting the stats.

        Yields:
            Found for each matching regular file, Skipped for each entry that
            could not be accessed, and a single Fatal (ending the walk) if the
            root itself cannot be listed.
        """
        self.stats = TraversalStats()
        root = self.root

        if not os.path.isdir(root):
            reason = "not a directory" if os.path.exists(root) else "does not exist"
            yield Fatal(root, reason)
            return

        # Stack of (directory path, depth below root)
        pending: list[tuple[str, int]] = [(root, 0)]

        while pending:
            dirpath, depth = pending.pop()

            try:
                entries = self._list_directory(dirpath)

            except OSError as error:
                if depth == 0:
                    yield Fatal(root, self._reason(error))
                    return

                yield self._skip(dirpath, error)
                continue

            self.stats.current_depth = depth
            self.stats.max_depth_seen = max(self.stats.max_depth_seen, depth)
            self._notify()

            subdirectories: list[str] = []
            for entry in entries:
                try:
                    is_directory = entry.is_dir(follow_symlinks=False)
                    is_file = not is_directory and entry.is_file()

                except OSError as error:
                    yield self._skip(entry.path, error)
                    continue

                if is_directory:
                    if self._can_descend(depth):
                        subdirectories.append(entry.path)

                elif is_file:
                    self.stats.files_scanned += 1
                    if self._matcher.matches(entry.name):
                        yield self._build_result(entry)
                    self._notify()

            # Reversed so that the first listed subdirectory is walked first
            pending.extend((path, depth + 1) for path in reversed(subdirectories))

        self.logger.debug(
            "Walked %s: %d files scanned, %d inaccessible",
            root,
            self.stats.files_scanned,
            self.stats.inaccessible_count,
        )

    def _list_directory(self, dirpath: str) -> list[os.DirEntry[str]]:
        """
        Return the entries of a directory.

        Raises:
            OSError
        """
        with os.scandir(dirpath) as iterator:
            return list(iterator)

    def _can_descend(self, depth: int) -> bool:
        """True if directories found at the given depth are to be listed."""
        max_depth = self._config.max_depth
        return max_depth == UNBOUNDED or depth < max_depth

    def _build_result(self, entry: os.DirEntry[str]) -> Found | Skipped:
        """Size a matching file. A file that cannot be sized is inaccessible."""
        try:
            size = entry.stat().st_size

        except OSError as error:
            return self._skip(entry.path, error)

        return Found(FileCandidate(entry.path, size))

    def _skip(self, path: str, error: OSError) -> Skipped:
        """Count an inaccessible entry."""
        self.stats.inaccessible_count += 1
        self._notify()

        reason = self._reason(error)
        if self._config.verbose:
            self.logger.warning("Cannot access '%s': %s", path, reason)
        else:
            self.logger.debug("Cannot access '%s': %s", path, reason)

        return Skipped(path, reason)

    def _notify(self) -> None:
        if self._observer is not None:
            self._observer(self.stats)

    @staticmethod
    def _reason(error: OSError) -> str:
        return error.strerror or str(error)
