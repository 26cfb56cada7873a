from __future__ import annotations

import os

import pytest

from cmdtools.largestformat import format_line
from cmdtools.largestformat import format_path
from cmdtools.largestformat import format_size
from cmdtools.largestmodel import FileCandidate


@pytest.mark.parametrize(
    "size, expected",
    [
        (0, "0 bytes"),
        (7, "7 bytes"),
        (999, "999 bytes"),
        (1000, "  1 KB"),
        (1999, "  1 KB"),
        (54_321, " 54 KB"),
        (999_999, "999 KB"),
        (1_000_000, "  1 MB"),
        (123_456_789, "123 MB"),
        (10**9, "  1 GB"),
        (10**12, "  1 TB"),
        (10**15, "  1 PB"),
        (10**18, "  1 EB"),
        (10**21, "  1 ZB"),
        (10**24, "  1 YB"),
        (10**27, "1000 YB"),
    ],
)
def test_format_size(size: int, expected: str) -> None:
    assert format_size(size) == expected


def test_format_path_relative() -> None:
    root = os.path.join(os.sep, "data")
    path = os.path.join(root, "sub", "file.bin")

    assert format_path(path, root, relative=True) == os.path.join("sub", "file.bin")
    assert format_path(path, root, relative=False) == path


def test_format_line() -> None:
    root = os.path.join(os.sep, "data")
    candidate = FileCandidate(os.path.join(root, "big.iso"), 4_700_000_000)

    assert format_line(candidate, root) == f"  4 GB {candidate.path}"
    assert format_line(candidate, root, bare=True) == candidate.path
    assert format_line(candidate, root, bare=True, relative=True) == "big.iso"
    assert format_line(candidate, root, relative=True) == "  4 GB big.iso"
