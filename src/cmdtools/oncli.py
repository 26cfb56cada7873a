from __future__ import annotations

import argparse
import logging

from cmdtools.ontimer import DEFAULT_BAR_LENGTH
from cmdtools.ontimer import DEFAULT_OUTPUT
from cmdtools.ontimer import TimerConfig
from cmdtools.ontimer import run

LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

EPILOG = """\
time is hh, hh:mm or hh:mm:ss for a clock time. With --delay it is ss, mm:ss
or hh:mm:ss, where the leading unit may exceed its usual range (90 becomes
1:30, 120:00 becomes 2:00:00).

examples:
  on 12:30 ls -l          run at 12:30 with a countdown
  on -d 20 ls             run after 20 seconds with a countdown
  on -o p 21:30           show a progress bar until 21:30
  on -o n 12:30 ls -l     run at 12:30 with no output
"""

logger = logging.getLogger(__name__)


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="on",
        description="Display a countdown or progress bar, then optionally run a command.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-d",
        "--delay",
        help="Interpret time as a duration instead of a clock time.",
        default=False,
        action="store_true",
    )
    parser.add_argument(
        "-c",
        "--no-clear",
        help="Print a new line on each update instead of updating in place.",
        default=False,
        action="store_true",
    )
    parser.add_argument(
        "-o",
        "--output",
        metavar="MODE",
        help=f"Output mode: time, progress, both, none (or t, p, b, n). Default: {DEFAULT_OUTPUT}",
        default=DEFAULT_OUTPUT,
    )
    parser.add_argument(
        "-l",
        "--length",
        metavar="NUM",
        help=f"Progress bar length, 5 to 300. Default: {DEFAULT_BAR_LENGTH}",
        default=str(DEFAULT_BAR_LENGTH),
    )
    parser.add_argument(
        "--debug",
        help="Enable debug logging.",
        default=False,
        action="store_true",
    )
    parser.add_argument(
        "time",
        help="The clock time or delay to wait for.",
    )
    parser.add_argument(
        "command",
        nargs=argparse.REMAINDER,
        help="Optional command, with its arguments, to run when the time is reached.",
    )
    return parser.parse_args(args)


def main(*, cli_args: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(cli_args)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
    )

    try:
        config = TimerConfig.from_args(args)

    except ValueError as error:
        logger.error("%s", error)
        return 1

    try:
        return run(config)

    except KeyboardInterrupt:
        logger.info("Cancelled")
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
