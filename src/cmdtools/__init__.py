from __future__ import annotations

from .largest import Largest
from .largest import RootDirectoryError
from .largestconfig import LargestConfig
from .largestmatcher import FilenameMatcher
from .largestselector import TopKSelector
from .largestwalker import DirectoryWalker
from .ontimer import Countdown
from .ontimer import TimerConfig

__all__ = [
    "Countdown",
    "DirectoryWalker",
    "FilenameMatcher",
    "Largest",
    "LargestConfig",
    "RootDirectoryError",
    "TimerConfig",
    "TopKSelector",
]
