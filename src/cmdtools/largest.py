from __future__ import annotations

import logging
import os
import time
from typing import TextIO

from .largestconfig import LargestConfig
from .largestformat import format_line
from .largestmodel import Fatal
from .largestmodel import FileCandidate
from .largestmodel import Found
from .largestmodel import TraversalStats
from .largestprogress import ProgressReporter
from .largestselector import TopKSelector
from .largestwalker import DirectoryWalker


class RootDirectoryError(ValueError):
    """The root of the walk is missing, not a directory, or unreadable."""


class Largest:
    """Find the largest files below a directory."""

    logger = logging.getLogger(__name__)

    def __init__(self, config: LargestConfig) -> None:
        """
        Initialize a new Largest.

        Args:
            config: The configuration to use for this run.
        """
        self._config = config
        self._root = os.path.abspath(config.root)
        self.stats = TraversalStats()

    def run(self, *, stream: TextIO | None = None) -> None:
        """Walk the tree and print the results."""
        results = self.find()
        self.report(results, stream=stream)

    def find(self) -> list[FileCandidate]:
        """
        Walk the tree and return the largest files, largest first.

        Raises:
            RootDirectoryError: If the root cannot be walked. Nothing is
                reported in that case.
        """
        self.logger.debug("Searching %s for '%s'", self._root, self._config.mask)
        tic = time.perf_counter()

        selector = TopKSelector(self._config.count)
        progress = ProgressReporter(
            enabled=self._config.show_progress,
            in_place=self._config.in_place,
        )

        walker = DirectoryWalker(self._config.walk_config, observer=progress.update)

        # Walker diagnostics share stderr with the in place progress line
        DirectoryWalker.logger.addFilter(progress.clear_before_log)
        try:
            with progress:
                for result in walker.walk():
                    if isinstance(result, Fatal):
                        raise RootDirectoryError(
                            f"Cannot walk '{result.path}': {result.reason}"
                        )

                    if isinstance(result, Found):
                        selector.offer(result.candidate)

        finally:
            DirectoryWalker.logger.removeFilter(progress.clear_before_log)

        self.stats = walker.stats

        toc = time.perf_counter()
        self.logger.debug("Search finished in %s seconds", toc - tic)
        self.logger.debug("Scanned %s files", self.stats.files_scanned)

        if self.stats.inaccessible_count:
            self.logger.warning(
                "%d inaccessible entries skipped", self.stats.inaccessible_count
            )

        return selector.results()

    def report(
        self,
        results: list[FileCandidate],
        *,
        stream: TextIO | None = None,
    ) -> None:
        """Print one line per result."""
        for candidate in results:
            line = format_line(
                candidate,
                self._root,
                bare=self._config.bare,
                relative=self._config.relative,
            )
            print(line, file=stream)
