"""Short and long listing renderers.

Long-format widths come from a first pass over the records of one directory
so every row of that directory's block lines up.
"""

from __future__ import annotations

import grp
import pwd
import stat
import time
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache

from .types import TIME_MTIME, FileRecord, ListingOptions

SECONDS_PER_YEAR = 365.2425 * 24 * 60 * 60
TIMESTAMP_WIDTH = 12


@lru_cache(maxsize=256)
def owner_name(uid: int) -> str:
    """User name for ``uid``, or the numeric id when it cannot be resolved."""
    try:
        return pwd.getpwuid(uid).pw_name
    except (KeyError, OverflowError):
        return str(uid)


@lru_cache(maxsize=256)
def group_name(gid: int) -> str:
    """Group name for ``gid``, or the numeric id when it cannot be resolved."""
    try:
        return grp.getgrgid(gid).gr_name
    except (KeyError, OverflowError):
        return str(gid)


def format_mode(st_mode: int) -> str:
    """10-character type and permission string, e.g. ``drwxr-sr-t``."""
    return stat.filemode(st_mode)


def recent_threshold(now: float) -> float:
    return now - SECONDS_PER_YEAR


def format_timestamp(timestamp: float, threshold: float) -> str:
    """``Mon dd HH:MM`` for recent timestamps, ``Mon dd  YYYY`` otherwise."""
    try:
        moment = datetime.fromtimestamp(timestamp)
    except (OverflowError, OSError, ValueError):
        return str(int(timestamp)).rjust(TIMESTAMP_WIDTH)
    day = str(moment.day).rjust(2)
    if timestamp >= threshold:
        return f"{moment:%b} {day} {moment:%H:%M}"
    return f"{moment:%b} {day}  {moment.year}"


@dataclass(frozen=True)
class LongFields:
    mode: str
    nlink: str
    owner: str
    group: str
    size: str


def long_fields(record: FileRecord) -> LongFields:
    status = record.status
    return LongFields(
        mode=format_mode(status.st_mode),
        nlink=str(status.st_nlink),
        owner=owner_name(status.st_uid),
        group=group_name(status.st_gid),
        size=str(status.st_size),
    )


@dataclass
class RenderContext:
    """Column widths and recency threshold for one directory block."""

    nlink_width: int = 0
    owner_width: int = 0
    group_width: int = 0
    size_width: int = 0
    recent_threshold: float = 0.0
    time_source: str = TIME_MTIME


def build_render_context(
    records: Iterable[FileRecord],
    time_source: str = TIME_MTIME,
    now: float | None = None,
) -> RenderContext:
    """Scan ``records`` once and return the widths their rows need."""
    context = RenderContext(
        recent_threshold=recent_threshold(time.time() if now is None else now),
        time_source=time_source,
    )
    for record in records:
        fields = long_fields(record)
        context.nlink_width = max(context.nlink_width, len(fields.nlink))
        context.owner_width = max(context.owner_width, len(fields.owner))
        context.group_width = max(context.group_width, len(fields.group))
        context.size_width = max(context.size_width, len(fields.size))
    return context


def format_long_row(record: FileRecord, context: RenderContext) -> str:
    fields = long_fields(record)
    timestamp = format_timestamp(record.timestamp(context.time_source), context.recent_threshold)
    return " ".join(
        (
            fields.mode,
            fields.nlink.rjust(context.nlink_width),
            fields.owner.ljust(context.owner_width),
            fields.group.ljust(context.group_width),
            fields.size.rjust(context.size_width),
            timestamp,
            record.name,
        )
    )


def render_short(records: Iterable[FileRecord]) -> list[str]:
    return [record.name for record in records]


def render_long(records: Sequence[FileRecord], context: RenderContext) -> list[str]:
    return [format_long_row(record, context) for record in records]


def render_records(
    records: Sequence[FileRecord],
    options: ListingOptions,
    now: float | None = None,
) -> list[str]:
    """Render one directory block (without header) in the configured format."""
    if not options.long_format:
        return render_short(records)
    context = build_render_context(records, options.time_source, now)
    return render_long(records, context)


__all__ = [
    "SECONDS_PER_YEAR",
    "TIMESTAMP_WIDTH",
    "owner_name",
    "group_name",
    "format_mode",
    "recent_threshold",
    "format_timestamp",
    "LongFields",
    "long_fields",
    "RenderContext",
    "build_render_context",
    "format_long_row",
    "render_short",
    "render_long",
    "render_records",
]
