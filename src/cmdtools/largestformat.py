from __future__ import annotations

import os

from .largestmodel import FileCandidate

SIZE_SUFFIXES = ("BY", "KB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB")


def format_size(size: int) -> str:
    """
    Return a human readable size using powers of 1000.

    Sizes below 1000 are shown in bytes. Larger sizes are truncated to a whole
    number of the largest unit that keeps them below 1000, right aligned to
    three digits (e.g. `  1 KB`, `999 MB`).
    """
    if size < 1000:
        return f"{size} bytes"

    index = 0
    while size >= 1000 and index < len(SIZE_SUFFIXES) - 1:
        size //= 1000
        index += 1

    return f"{size:>3} {SIZE_SUFFIXES[index]}"


def format_path(path: str, root: str, relative: bool) -> str:
    """Return the path relative to root if requested, otherwise unchanged."""
    if relative:
        return os.path.relpath(path, root)

    return path


def format_line(
    candidate: FileCandidate,
    root: str,
    *,
    bare: bool = False,
    relative: bool = False,
) -> str:
    """Return the output line for a single result."""
    path = format_path(candidate.path, root, relative)
    if bare:
        return path

    return f"{format_size(candidate.size)} {path}"
