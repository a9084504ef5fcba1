"""Datatypes shared by the slot buffer, classifier, and renderers."""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass

VISIBILITY_DEFAULT = "default"
VISIBILITY_ALMOST_ALL = "almost-all"
VISIBILITY_ALL = "all"
VISIBILITY_MODES: tuple[str, ...] = (VISIBILITY_DEFAULT, VISIBILITY_ALMOST_ALL, VISIBILITY_ALL)

TIME_MTIME = "mtime"
TIME_CTIME = "ctime"
TIME_ATIME = "atime"
TIME_SOURCES: tuple[str, ...] = (TIME_MTIME, TIME_CTIME, TIME_ATIME)


@dataclass(frozen=True)
class FileRecord:
    """One listed entry: display name, ``lstat`` metadata, and origin flag."""

    name: str
    status: os.stat_result
    is_command_arg: bool = False

    @property
    def is_dir(self) -> bool:
        return stat.S_ISDIR(self.status.st_mode)

    def timestamp(self, time_source: str) -> float:
        if time_source == TIME_CTIME:
            return self.status.st_ctime
        if time_source == TIME_ATIME:
            return self.status.st_atime
        return self.status.st_mtime


@dataclass(frozen=True)
class ListingOptions:
    """Configuration chosen once at startup and threaded through a session."""

    visibility: str = VISIBILITY_DEFAULT
    long_format: bool = False
    time_source: str = TIME_MTIME


__all__ = [
    "VISIBILITY_DEFAULT",
    "VISIBILITY_ALMOST_ALL",
    "VISIBILITY_ALL",
    "VISIBILITY_MODES",
    "TIME_MTIME",
    "TIME_CTIME",
    "TIME_ATIME",
    "TIME_SOURCES",
    "FileRecord",
    "ListingOptions",
]
