from __future__ import annotations

import argparse
import dataclasses
import logging
import os

from .largestmodel import UNBOUNDED
from .largestmodel import WalkConfig

DEFAULT_COUNT = 50
DEFAULT_MASK = "*"

logger = logging.getLogger(__name__)


def normalize_count(value: str | int | None) -> int:
    """
    Return the number of results to keep.

    Non-numeric values and anything that is neither positive nor -1 (all files)
    fall back to the default of 50.
    """
    try:
        count = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        logger.debug("Invalid result count %r, using %d", value, DEFAULT_COUNT)
        return DEFAULT_COUNT

    if count == UNBOUNDED or count > 0:
        return count

    logger.debug("Result count %d out of range, using %d", count, DEFAULT_COUNT)
    return DEFAULT_COUNT


def normalize_depth(value: str | int | None) -> int:
    """Return the max depth, with -1 (unbounded) for invalid or negative values."""
    try:
        depth = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        logger.debug("Invalid depth %r, using unbounded", value)
        return UNBOUNDED

    return max(depth, UNBOUNDED)


@dataclasses.dataclass(frozen=True)
class LargestConfig:
    """Configuration for a single `largest` run."""

    root: str
    mask: str = DEFAULT_MASK
    count: int = DEFAULT_COUNT
    max_depth: int = UNBOUNDED
    bare: bool = False
    relative: bool = False
    show_progress: bool = False
    in_place: bool = True
    verbose: bool = False

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> LargestConfig:
        """Build a config from parsed command line arguments."""
        config = cls(
            root=args.directory or os.getcwd(),
            mask=args.mask or DEFAULT_MASK,
            count=normalize_count(args.count),
            max_depth=normalize_depth(args.depth),
            bare=args.bare,
            relative=args.relative,
            show_progress=args.progress,
            in_place=not args.no_clear,
            verbose=args.verbose,
        )
        logger.debug("Loaded config %s", config)
        return config

    @property
    def walk_config(self) -> WalkConfig:
        """Return the subset of the config that drives the directory walk."""
        return WalkConfig(
            root=self.root,
            mask=self.mask,
            max_depth=self.max_depth,
            verbose=self.verbose,
        )
