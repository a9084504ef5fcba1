"""Directory listing pipeline.

This package contains the non-CLI pieces:
- per-entry records and listing options
- the slot buffer and its print-order index
- the FIFO traversal queue
- visibility/ordering rules and the short/long renderers
- the traversal session tying them together
"""

from __future__ import annotations

from .types import (
    TIME_ATIME,
    TIME_CTIME,
    TIME_MTIME,
    TIME_SOURCES,
    VISIBILITY_ALL,
    VISIBILITY_ALMOST_ALL,
    VISIBILITY_DEFAULT,
    VISIBILITY_MODES,
    FileRecord,
    ListingOptions,
)
from .classify import compare, order_key, visible
from .slots import ALLOCATE_COUNT, OrderIndex, SlotBuffer
from .traversal import TraversalQueue
from .render import RenderContext, build_render_context, format_long_row, render_records
from .session import TraversalSession, list_paths

__all__ = [
    "TIME_ATIME",
    "TIME_CTIME",
    "TIME_MTIME",
    "TIME_SOURCES",
    "VISIBILITY_ALL",
    "VISIBILITY_ALMOST_ALL",
    "VISIBILITY_DEFAULT",
    "VISIBILITY_MODES",
    "FileRecord",
    "ListingOptions",
    "compare",
    "order_key",
    "visible",
    "ALLOCATE_COUNT",
    "OrderIndex",
    "SlotBuffer",
    "TraversalQueue",
    "RenderContext",
    "build_render_context",
    "format_long_row",
    "render_records",
    "TraversalSession",
    "list_paths",
]
