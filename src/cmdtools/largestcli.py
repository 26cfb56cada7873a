from __future__ import annotations

import argparse
import logging
import signal
from types import FrameType

from cmdtools.largest import Largest
from cmdtools.largest import RootDirectoryError
from cmdtools.largestconfig import DEFAULT_COUNT
from cmdtools.largestconfig import LargestConfig

LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger(__name__)


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="largest",
        description="List the largest files in a directory and its subdirectories.",
    )
    parser.add_argument(
        "directory",
        nargs="?",
        default=None,
        help="The directory to search. Default: current directory.",
    )
    parser.add_argument(
        "mask",
        nargs="?",
        default="*",
        help="File mask to filter filenames, supports * and ?. Default: *",
    )
    parser.add_argument(
        "-n",
        dest="count",
        metavar="NUM",
        default=str(DEFAULT_COUNT),
        help=f"Number of largest files to list. Default: {DEFAULT_COUNT}, -1 lists all files.",
    )
    parser.add_argument(
        "-d",
        dest="depth",
        metavar="NUM",
        default="-1",
        help="Depth of subdirectories to search. Default: -1 (no limit).",
    )
    parser.add_argument(
        "-b",
        dest="bare",
        help="Display only file paths without file sizes.",
        default=False,
        action="store_true",
    )
    parser.add_argument(
        "-r",
        dest="relative",
        help="Display paths relative to the directory.",
        default=False,
        action="store_true",
    )
    parser.add_argument(
        "-p",
        dest="progress",
        help="Show progress while searching.",
        default=False,
        action="store_true",
    )
    parser.add_argument(
        "-c",
        "--no-clear",
        dest="no_clear",
        help="Print progress on new lines instead of updating in place.",
        default=False,
        action="store_true",
    )
    parser.add_argument(
        "-v",
        dest="verbose",
        help="Report inaccessible files and directories.",
        default=False,
        action="store_true",
    )
    parser.add_argument(
        "--debug",
        help="Enable debug logging.",
        default=False,
        action="store_true",
    )
    return parser.parse_args(args)


def _raise_system_exit(signum: int, frame: FrameType | None) -> None:
    """Turn a termination signal into a normal exit so cleanup runs."""
    raise SystemExit(128 + signum)


def main(*, cli_args: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(cli_args)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
    )
    previous_handler = signal.signal(signal.SIGTERM, _raise_system_exit)

    config = LargestConfig.from_args(args)
    largest = Largest(config)

    try:
        largest.run()

    except RootDirectoryError as error:
        logger.error("%s", error)
        return 1

    except KeyboardInterrupt:
        logger.info("Cancelled")
        return 130

    finally:
        if previous_handler is not None:
            signal.signal(signal.SIGTERM, previous_handler)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
