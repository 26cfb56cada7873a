from __future__ import annotations

import argparse
from datetime import datetime
from io import StringIO
from unittest.mock import MagicMock
from unittest.mock import patch

import pytest

from cmdtools.ontimer import HIDE_CURSOR
from cmdtools.ontimer import SHOW_CURSOR
from cmdtools.ontimer import Countdown
from cmdtools.ontimer import TimerConfig
from cmdtools.ontimer import execute_command
from cmdtools.ontimer import format_remaining
from cmdtools.ontimer import parse_time_argument
from cmdtools.ontimer import render_bar
from cmdtools.ontimer import run
from cmdtools.ontimer import seconds_until


@pytest.mark.parametrize(
    "text, expected",
    [
        ("7", 7 * 3600),
        ("12:30", 12 * 3600 + 30 * 60),
        ("23:59:59", 23 * 3600 + 59 * 60 + 59),
        ("0", 0),
    ],
)
def test_parse_clock_time(text: str, expected: int) -> None:
    assert parse_time_argument(text, delay=False) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("20", 20),
        ("90", 90),
        ("1:30", 90),
        ("120:00", 7200),
        ("26:00:00", 26 * 3600),
        ("0:0:1", 1),
    ],
)
def test_parse_delay(text: str, expected: int) -> None:
    assert parse_time_argument(text, delay=True) == expected


@pytest.mark.parametrize(
    "text, delay",
    [
        ("24", False),
        ("12:60", False),
        ("12:00:60", False),
        ("-1", False),
        ("noon", False),
        ("1:2:3:4", False),
        ("", False),
        ("0", True),
        ("0:00", True),
        ("1:60", True),
        ("1:60:00", True),
        ("1:00:60", True),
        ("-5", True),
        ("5s", True),
    ],
)
def test_parse_time_argument_rejects(text: str, delay: bool) -> None:
    with pytest.raises(ValueError):
        parse_time_argument(text, delay=delay)


def test_seconds_until_later_today() -> None:
    now = datetime(2024, 1, 1, 12, 0, 0)

    assert seconds_until(12 * 3600 + 30 * 60, now) == 1800


def test_seconds_until_wraps_to_tomorrow() -> None:
    now = datetime(2024, 1, 1, 12, 0, 0)

    assert seconds_until(11 * 3600, now) == 23 * 3600


@pytest.mark.parametrize(
    "seconds, expected",
    [(0, "00:00:00"), (59, "00:00:59"), (3661, "01:01:01"), (26 * 3600, "26:00:00")],
)
def test_format_remaining(seconds: int, expected: str) -> None:
    assert format_remaining(seconds) == expected


def test_render_bar() -> None:
    assert render_bar(0.0, 5, 0) == "[|....]"
    assert render_bar(0.4, 5, 1) == "[##/..]"
    assert render_bar(0.99, 5, 3) == "[####\\]"
    assert render_bar(1.0, 5, 2) == "[#####]"
    assert render_bar(1.5, 5, 2) == "[#####]"


def _namespace(**overrides: object) -> argparse.Namespace:
    values = {
        "time": "10",
        "delay": True,
        "no_clear": False,
        "output": "time",
        "length": 50,
        "command": [],
    }
    values.update(overrides)
    return argparse.Namespace(**values)


def test_config_from_args_delay() -> None:
    config = TimerConfig.from_args(
        _namespace(time="1:30", output="b", length=20, command=["echo", "hi"])
    )

    assert config == TimerConfig(
        seconds=90,
        show_timer=True,
        show_bar=True,
        bar_length=20,
        in_place=True,
        command="echo hi",
    )
    assert config.interval == 0.125


def test_config_from_args_clock_time() -> None:
    now = datetime(2024, 1, 1, 21, 0, 0)

    config = TimerConfig.from_args(
        _namespace(time="21:30", delay=False, output="progress", no_clear=True),
        now=now,
    )

    assert config.seconds == 1800
    assert config.show_timer is False
    assert config.show_bar is True
    assert config.in_place is False


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"output": "loud"}, "Invalid output mode"),
        ({"length": 4}, "between 5 and 300"),
        ({"length": 301}, "between 5 and 300"),
        ({"length": "abc"}, "Must be a number"),
        ({"length": "7.5"}, "Must be a number"),
        ({"time": "1:99"}, "0-59"),
    ],
)
def test_config_from_args_rejects(overrides: dict[str, object], message: str) -> None:
    with pytest.raises(ValueError, match=message):
        TimerConfig.from_args(_namespace(**overrides))


class FakeTime:
    """Clock whose time only moves when sleep is called."""

    def __init__(self) -> None:
        self.now = 100.0
        self.sleeps: list[float] = []

    def clock(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


def test_countdown_no_clear_prints_lines() -> None:
    fake = FakeTime()
    stream = StringIO()
    config = TimerConfig(seconds=3, in_place=False)

    Countdown(config, stream=stream, clock=fake.clock, sleep=fake.sleep).wait()

    assert stream.getvalue().splitlines() == [
        "Remaining: 00:00:03",
        "Remaining: 00:00:02",
        "Remaining: 00:00:01",
    ]
    assert fake.sleeps == [1.0, 1.0, 1.0]


def test_countdown_bar_in_place_restores_cursor() -> None:
    fake = FakeTime()
    stream = StringIO()
    config = TimerConfig(seconds=1, show_timer=False, show_bar=True, bar_length=8)

    Countdown(config, stream=stream, clock=fake.clock, sleep=fake.sleep).wait()

    output = stream.getvalue()
    assert output.startswith(HIDE_CURSOR)
    assert "\r[|.......]" in output
    assert "\r[####|...]" in output
    assert output.endswith(f"\r{' ' * 10}\r{SHOW_CURSOR}")
    assert len(fake.sleeps) == 8


def test_countdown_restores_cursor_on_interrupt() -> None:
    stream = StringIO()
    config = TimerConfig(seconds=5)
    sleep = MagicMock(side_effect=KeyboardInterrupt)

    with pytest.raises(KeyboardInterrupt):
        Countdown(config, stream=stream, clock=lambda: 0.0, sleep=sleep).wait()

    assert stream.getvalue().endswith(SHOW_CURSOR)


def test_countdown_without_output_only_sleeps() -> None:
    stream = StringIO()
    sleep = MagicMock()
    config = TimerConfig(seconds=42, show_timer=False, show_bar=False)

    Countdown(config, stream=stream, sleep=sleep).wait()

    sleep.assert_called_once_with(42)
    assert stream.getvalue() == ""


def test_countdown_zero_seconds_renders_nothing() -> None:
    stream = StringIO()
    config = TimerConfig(seconds=0, in_place=False)

    Countdown(config, stream=stream, sleep=MagicMock()).wait()

    assert stream.getvalue() == ""


def test_execute_command_returns_exit_code() -> None:
    with patch("subprocess.run") as mock_run:
        mock_run.return_value.returncode = 3
        result = execute_command("make build")

    assert result == 3
    mock_run.assert_called_once_with("make build", shell=True)


def test_run_executes_command_after_wait() -> None:
    config = TimerConfig(seconds=1, command="echo done")
    countdown = MagicMock()

    with patch("cmdtools.ontimer.execute_command", return_value=0) as mock_execute:
        result = run(config, countdown=countdown)

    assert result == 0
    assert countdown.wait.call_count == 1
    mock_execute.assert_called_once_with("echo done")


def test_run_without_command() -> None:
    countdown = MagicMock()

    with patch("cmdtools.ontimer.execute_command") as mock_execute:
        result = run(TimerConfig(seconds=1), countdown=countdown)

    assert result == 0
    assert mock_execute.call_count == 0
