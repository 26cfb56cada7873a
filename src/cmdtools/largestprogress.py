from __future__ import annotations

import logging
import sys
import time
from typing import TYPE_CHECKING
from typing import Callable
from typing import TextIO

from .largestmodel import TraversalStats

if TYPE_CHECKING:
    from types import TracebackType

HIDE_CURSOR = "\033[?25l"
SHOW_CURSOR = "\033[?25h"
MIN_INTERVAL_SECONDS = 0.1


def render_stats(stats: TraversalStats) -> str:
    """Return the one line progress summary of a walk."""
    return (
        f"Files: {stats.files_scanned}"
        f"  Depth: {stats.current_depth}/{stats.max_depth_seen}"
        f"  Inaccessible: {stats.inaccessible_count}"
    )


class ProgressReporter:
    """
    Throttled progress line for a directory walk.

    Use as a context manager so the line is cleared and the cursor restored
    however the walk ends:

        with ProgressReporter() as progress:
            walker = DirectoryWalker(config, observer=progress.update)
            ...
    """

    def __init__(
        self,
        *,
        enabled: bool = True,
        in_place: bool = True,
        stream: TextIO | None = None,
        interval: float = MIN_INTERVAL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize a new ProgressReporter.

        Keyword Args:
            enabled: When False every method is a no-op.
            in_place: Overwrite a single line. When False each update is
                printed on a new line.
            stream: Where to render. Defaults to stderr.
            interval: The minimum number of seconds between two renders.
            clock: Monotonic time source in seconds.
        """
        self.enabled = enabled
        self.in_place = in_place
        self._stream = stream or sys.stderr
        self._interval = interval
        self._clock = clock
        self._last_render: float | None = None
        self._line_length = 0
        self.last_stats: TraversalStats | None = None

    def __enter__(self) -> ProgressReporter:
        """Hide the cursor when updating in place."""
        if self.enabled and self.in_place:
            self._write(HIDE_CURSOR)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        """Clear the progress line and restore the cursor."""
        self.close()

    def update(self, stats: TraversalStats) -> None:
        """Render the stats unless the last render was too recent."""
        if not self.enabled:
            return

        now = self._clock()
        if self._last_render is not None and now - self._last_render < self._interval:
            return

        self._last_render = now
        self.last_stats = stats.snapshot()
        line = render_stats(self.last_stats)

        if self.in_place:
            padding = " " * max(self._line_length - len(line), 0)
            self._write(f"\r{line}{padding}")
            self._line_length = len(line) + len(padding)
        else:
            self._write(f"{line}\n")

    def clear_line(self) -> None:
        """Blank the in place line so other stderr output starts on a clean line."""
        if not self.enabled or not self.in_place or not self._line_length:
            return

        self._write(f"\r{' ' * self._line_length}\r")
        self._line_length = 0
        self._last_render = None

    def clear_before_log(self, record: logging.LogRecord) -> bool:
        """Logging filter that clears the progress line before a record is emitted."""
        self.clear_line()
        return True

    def close(self) -> None:
        """Clear the in place line, if any, and show the cursor again."""
        if not self.enabled or not self.in_place:
            return

        self._write(f"\r{' ' * self._line_length}\r{SHOW_CURSOR}")
        self._line_length = 0

    def _write(self, text: str) -> None:
        self._stream.write(text)
        self._stream.flush()
