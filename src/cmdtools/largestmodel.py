from __future__ import annotations

import dataclasses
from typing import Union

UNBOUNDED = -1


@dataclasses.dataclass(frozen=True)
class FileCandidate:
    """A regular file found during a walk, sized at discovery time."""

    path: str
    size: int


@dataclasses.dataclass
class TraversalStats:
    """Running counters of a single walk."""

    files_scanned: int = 0
    inaccessible_count: int = 0
    current_depth: int = 0
    max_depth_seen: int = 0

    def snapshot(self) -> TraversalStats:
        """Return a copy that is not affected by further updates."""
        return dataclasses.replace(self)


@dataclasses.dataclass(frozen=True)
class WalkConfig:
    """Parameters of a single walk. A max_depth of -1 is unbounded."""

    root: str
    mask: str = "*"
    max_depth: int = UNBOUNDED
    verbose: bool = False


@dataclasses.dataclass(frozen=True)
class Found:
    """A matching file was discovered."""

    candidate: FileCandidate


@dataclasses.dataclass(frozen=True)
class Skipped:
    """An entry could not be accessed. The walk continues."""

    path: str
    reason: str


@dataclasses.dataclass(frozen=True)
class Fatal:
    """The root of the walk could not be accessed. The walk is over."""

    path: str
    reason: str


WalkResult = Union[Found, Skipped, Fatal]
