"""Visibility and ordering rules for directory entries."""

from __future__ import annotations

import os

from .types import VISIBILITY_ALL, VISIBILITY_ALMOST_ALL, FileRecord

EARLIER = -1
EQUAL = 0
LATER = 1


def is_self_or_parent(name: str) -> bool:
    return name in {".", ".."}


def visible(name: str, visibility: str) -> bool:
    """Return whether ``name`` is shown under ``visibility``.

    Default mode hides every dot-name, almost-all hides only ``.`` and
    ``..``, and all-mode hides nothing.
    """
    if visibility == VISIBILITY_ALL:
        return True
    if visibility == VISIBILITY_ALMOST_ALL:
        return not is_self_or_parent(name)
    return not name.startswith(".")


def order_key(record: FileRecord) -> tuple[bool, bytes]:
    """Sort key: directories first, then names compared byte-wise."""
    return (not record.is_dir, os.fsencode(record.name))


def compare(a: FileRecord, b: FileRecord) -> int:
    """Three-way comparison consistent with ``order_key``."""
    key_a = order_key(a)
    key_b = order_key(b)
    if key_a < key_b:
        return EARLIER
    if key_a > key_b:
        return LATER
    return EQUAL


__all__ = ["EARLIER", "EQUAL", "LATER", "is_self_or_parent", "visible", "order_key", "compare"]
