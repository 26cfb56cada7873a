from __future__ import annotations

import logging
import random
import shutil
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from string import ascii_lowercase

from cmdtools import largestcli

BASE_DIR: Path = Path(__file__).resolve().parent
TEST_DIR: Path = BASE_DIR / "smoketest_tree"
DIRECTORY_COUNT = 200
MAX_DEPTH = 6
FILE_COUNT_RANGE: tuple[int, int] = (0, 50)
FILE_SIZE_RANGE: tuple[int, int] = (0, 2_000_000)
EXTENSIONS = (".txt", ".log", ".bin", ".iso")

logger = logging.getLogger(__name__)


def _name() -> str:
    """Create a random eight character name."""
    return "".join(random.choices(ascii_lowercase, k=8))


def build_smoketest_tree() -> int:
    """Create a random directory tree filled with files. Returns the file count."""
    directories = [TEST_DIR]
    file_count = 0

    for _ in range(DIRECTORY_COUNT):
        parent = random.choice(directories)
        if len(parent.relative_to(TEST_DIR).parts) >= MAX_DEPTH:
            continue

        directory = parent / _name()
        logger.debug("Creating %s", directory)
        directory.mkdir(parents=True, exist_ok=True)
        directories.append(directory)

    for directory in directories:
        for _ in range(random.randint(*FILE_COUNT_RANGE)):
            filename = _name() + random.choice(EXTENSIONS)
            size = random.randint(*FILE_SIZE_RANGE)
            with open(directory / filename, "wb") as file_out:
                file_out.truncate(size)
            file_count += 1

    return file_count


def destroy_smoketest_tree() -> None:
    """Delete the tree for the smoketest."""
    logger.debug("Deleting %s", TEST_DIR)
    shutil.rmtree(TEST_DIR, ignore_errors=True)


@contextmanager
def smoketest_tree() -> Generator[None, None, None]:
    """Build the tree for the duration of the context."""
    file_count = build_smoketest_tree()
    logger.info("Created %d files in %s", file_count, TEST_DIR)
    try:
        yield None
    finally:
        destroy_smoketest_tree()


def main() -> int:
    """Run largest against a random tree, once unbounded and once filtered."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")

    with smoketest_tree():
        largestcli.main(cli_args=["-n", "10", "-p", "-r", str(TEST_DIR)])
        largestcli.main(cli_args=["-n", "5", "-d", "2", "-p", "-c", str(TEST_DIR), "*.ISO"])

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
