from __future__ import annotations

import logging
import re

WILDCARD = "*"


def translate_mask(mask: str) -> str:
    """
    Translate a wildcard mask into a regular expression.

    `*` matches any run of characters and `?` matches exactly one. Every other
    character is matched literally.
    """
    parts: list[str] = []
    for char in mask:
        if char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        else:
            parts.append(re.escape(char))

    return "".join(parts)


class FilenameMatcher:
    """Case-insensitive wildcard filter for filenames."""

    logger = logging.getLogger(__name__)

    def __init__(self, mask: str = WILDCARD) -> None:
        self.mask = mask
        self._pattern: re.Pattern[str] | None = None
        self._match_all = mask == WILDCARD

        if not self._match_all:
            try:
                self._pattern = re.compile(
                    translate_mask(mask),
                    re.IGNORECASE | re.DOTALL,
                )
            except re.error as error:
                self.logger.debug("Using substring match for '%s': %s", mask, error)

    def matches(self, filename: str) -> bool:
        """True if the whole filename matches the mask."""
        if self._match_all:
            return True

        if self._pattern is None:
            return self.mask in filename

        return self._pattern.fullmatch(filename) is not None


def matches(filename: str, mask: str) -> bool:
    """True if the filename matches the wildcard mask."""
    return FilenameMatcher(mask).matches(filename)
