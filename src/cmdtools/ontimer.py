from __future__ import annotations

import argparse
import dataclasses
import logging
import subprocess
import sys
import time
from datetime import datetime
from typing import Callable
from typing import TextIO

DEFAULT_OUTPUT = "time"
DEFAULT_BAR_LENGTH = 50
MIN_BAR_LENGTH = 5
MAX_BAR_LENGTH = 300
SPINNER_CHARS = "|/-\\"
FILL_CHAR = "."
BAR_INTERVAL_SECONDS = 0.125
TIMER_INTERVAL_SECONDS = 1.0
SECONDS_PER_DAY = 24 * 3600

HIDE_CURSOR = "\033[?25l"
SHOW_CURSOR = "\033[?25h"

# Output mode -> (show timer, show progress bar)
OUTPUT_MODES: dict[str, tuple[bool, bool]] = {
    "time": (True, False),
    "t": (True, False),
    "progress": (False, True),
    "p": (False, True),
    "both": (True, True),
    "b": (True, True),
    "none": (False, False),
    "n": (False, False),
}

logger = logging.getLogger(__name__)


def parse_time_argument(text: str, *, delay: bool) -> int:
    """
    Parse a clock time or a delay into seconds.

    Clock times are `hh`, `hh:mm` or `hh:mm:ss` and return the seconds since
    midnight. Delays are `ss`, `mm:ss` or `hh:mm:ss` and return their length.
    The leading unit of a delay may exceed its usual range (`90` is 1:30).

    Raises:
        ValueError: If the text is malformed or out of range.
    """
    parts = text.split(":")
    if not 1 <= len(parts) <= 3:
        raise ValueError(f"Invalid time/duration format: {text}")

    try:
        values = [int(part) for part in parts]
    except ValueError:
        raise ValueError(f"Invalid time/duration format: {text}") from None

    if any(value < 0 for value in values):
        raise ValueError("Invalid values. All components must be non-negative.")

    if delay:
        hours, minutes, seconds = ([0, 0] + values)[-3:]
        if any(value > 59 for value in values[1:]):
            raise ValueError("Invalid values. Minutes/Seconds must be 0-59.")

        total = hours * 3600 + minutes * 60 + seconds
        if total <= 0:
            raise ValueError("Duration must be positive.")

        return total

    hours, minutes, seconds = (values + [0, 0])[:3]
    if hours > 23 or minutes > 59 or seconds > 59:
        raise ValueError("Invalid values. Hours: 0-23, Minutes/Seconds: 0-59.")

    return hours * 3600 + minutes * 60 + seconds


def seconds_until(target: int, now: datetime) -> int:
    """Return the seconds from now until the next occurrence of a time of day."""
    current = now.hour * 3600 + now.minute * 60 + now.second
    difference = target - current
    if difference < 0:
        difference += SECONDS_PER_DAY

    return difference


def format_remaining(seconds: int) -> str:
    """Return seconds as hh:mm:ss. Hours are not wrapped."""
    hours, rest = divmod(seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def render_bar(ratio: float, length: int, tick: int) -> str:
    """Return a progress bar with a spinner at its head while incomplete."""
    filled = int(min(max(ratio, 0.0), 1.0) * length)
    bar = "#" * filled

    if filled < length:
        bar += SPINNER_CHARS[tick % len(SPINNER_CHARS)]
        bar += FILL_CHAR * (length - filled - 1)

    return f"[{bar}]"


@dataclasses.dataclass(frozen=True)
class TimerConfig:
    """Configuration for a single `on` run."""

    seconds: int
    show_timer: bool = True
    show_bar: bool = False
    bar_length: int = DEFAULT_BAR_LENGTH
    in_place: bool = True
    command: str = ""

    @classmethod
    def from_args(
        cls,
        args: argparse.Namespace,
        *,
        now: datetime | None = None,
    ) -> TimerConfig:
        """
        Build a config from parsed command line arguments.

        Keyword Args:
            now: The current time, used to resolve clock times. Defaults to
                the local time.

        Raises:
            ValueError: If the output mode, bar length or time is invalid.
        """
        mode = args.output
        if mode not in OUTPUT_MODES:
            raise ValueError(
                f"Invalid output mode: {mode}. Use: time, progress, both, none (or t, p, b, n)"
            )

        try:
            bar_length = int(args.length)
        except (TypeError, ValueError):
            raise ValueError(
                f"Invalid progress bar length: {args.length}. Must be a number."
            ) from None

        if not MIN_BAR_LENGTH <= bar_length <= MAX_BAR_LENGTH:
            raise ValueError(
                f"Progress bar length must be between {MIN_BAR_LENGTH} and {MAX_BAR_LENGTH}"
            )

        seconds = parse_time_argument(args.time, delay=args.delay)
        if not args.delay:
            seconds = seconds_until(seconds, now or datetime.now())

        show_timer, show_bar = OUTPUT_MODES[mode]
        config = cls(
            seconds=seconds,
            show_timer=show_timer,
            show_bar=show_bar,
            bar_length=bar_length,
            in_place=not args.no_clear,
            command=" ".join(args.command),
        )
        logger.debug("Loaded config %s", config)
        return config

    @property
    def has_output(self) -> bool:
        """True if either the timer or the progress bar is displayed."""
        return self.show_timer or self.show_bar

    @property
    def interval(self) -> float:
        """Return the seconds between two updates of the display."""
        return BAR_INTERVAL_SECONDS if self.show_bar else TIMER_INTERVAL_SECONDS


class Countdown:
    """Wait for a number of seconds, displaying a countdown and/or progress bar."""

    logger = logging.getLogger(__name__)

    def __init__(
        self,
        config: TimerConfig,
        *,
        stream: TextIO | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._config = config
        self._stream = stream or sys.stdout
        self._clock = clock
        self._sleep = sleep
        self._line_length = 0

    def render_line(self, remaining: int, ratio: float, tick: int) -> str:
        """Return the display line for the current state of the countdown."""
        parts: list[str] = []
        if self._config.show_bar:
            parts.append(render_bar(ratio, self._config.bar_length, tick))

        if self._config.show_timer:
            parts.append(f"Remaining: {format_remaining(remaining)}")

        return " ".join(parts)

    def wait(self) -> None:
        """Block until the configured number of seconds has passed."""
        seconds = self._config.seconds
        self.logger.debug("Waiting %d seconds", seconds)

        if not self._config.has_output:
            self._sleep(seconds)
            return

        if not self._config.in_place:
            self._count_down(seconds)
            return

        self._write(HIDE_CURSOR)
        try:
            self._count_down(seconds)

        finally:
            self._write(f"\r{' ' * self._line_length}\r{SHOW_CURSOR}")

    def _count_down(self, seconds: int) -> None:
        start = self._clock()
        end = start + seconds
        tick = 0

        now = start
        while now < end:
            line = self.render_line(int(end - now), (now - start) / seconds, tick)

            if self._config.in_place:
                padding = " " * max(self._line_length - len(line), 0)
                self._write(f"\r{line}{padding}")
                self._line_length = len(line) + len(padding)
            else:
                self._write(f"{line}\n")

            self._sleep(self._config.interval)
            tick += 1
            now = self._clock()

    def _write(self, text: str) -> None:
        self._stream.write(text)
        self._stream.flush()


def execute_command(command: str) -> int:
    """Run a command through the shell and return its exit code."""
    logger.debug("Executing command: %s", command)
    completed = subprocess.run(command, shell=True)
    return completed.returncode


def run(config: TimerConfig, *, countdown: Countdown | None = None) -> int:
    """Wait as configured, then run the command if there is one."""
    (countdown or Countdown(config)).wait()

    if not config.command:
        return 0

    return execute_command(config.command)
