"""Slot buffer holding the records of the directory being listed.

The buffer owns its ``FileRecord`` objects. ``OrderIndex`` only holds
positions into one buffer generation and refuses to be read once the buffer
has changed underneath it.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterator
from typing import cast

from ..errors import AccessError, AllocationError
from .classify import order_key
from .types import FileRecord

logger = logging.getLogger(__name__)

ALLOCATE_COUNT = 100


def resolve_entry_path(name: str, base_dir: str) -> str:
    """Path used for the metadata query of ``name`` listed under ``base_dir``."""
    if not base_dir or os.path.isabs(name):
        return name
    return os.path.join(base_dir, name)


class OrderIndex:
    """Print order over a ``SlotBuffer``, stored as positions into it."""

    def __init__(self, buffer: SlotBuffer, positions: list[int], generation: int) -> None:
        self._buffer = buffer
        self._positions = positions
        self._generation = generation

    @property
    def is_current(self) -> bool:
        return self._generation == self._buffer.generation

    def _check_current(self) -> None:
        if not self.is_current:
            raise RuntimeError("order index is stale; rebuild it with SlotBuffer.order()")

    @property
    def positions(self) -> tuple[int, ...]:
        self._check_current()
        return tuple(self._positions)

    def _retain(self, positions: list[int]) -> None:
        self._check_current()
        self._positions = positions

    def __len__(self) -> int:
        self._check_current()
        return len(self._positions)

    def __iter__(self) -> Iterator[FileRecord]:
        self._check_current()
        for position in self._positions:
            yield self._buffer.record_at(position)

    def records(self) -> list[FileRecord]:
        return list(self)


class SlotBuffer:
    """Growable record store for one directory pass.

    Capacity grows by ``increment`` slots when full and never shrinks. Every
    slot below ``len(buffer)`` holds a valid record; slots above it are empty.
    """

    def __init__(
        self,
        increment: int = ALLOCATE_COUNT,
        stat_func: Callable[[str], os.stat_result] = os.lstat,
    ) -> None:
        if increment <= 0:
            raise ValueError("increment must be >= 1")
        self.increment = increment
        self._stat = stat_func
        self._slots: list[FileRecord | None] = []
        self._count = 0
        self._generation = 0
        self._order: OrderIndex | None = None

    @property
    def capacity(self) -> int:
        return len(self._slots)

    @property
    def generation(self) -> int:
        return self._generation

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[FileRecord]:
        for position in range(self._count):
            yield self.record_at(position)

    def record_at(self, position: int) -> FileRecord:
        if not 0 <= position < self._count:
            raise IndexError(f"slot {position} is not in use")
        return cast(FileRecord, self._slots[position])

    def _new_slots(self, count: int) -> list[FileRecord | None]:
        return [None] * count

    def _grow(self) -> None:
        try:
            self._slots.extend(self._new_slots(self.increment))
        except MemoryError as exc:
            raise AllocationError() from exc
        logger.debug("slot buffer grown to %d slots", len(self._slots))

    def _changed(self) -> None:
        self._generation += 1
        self._order = None

    def reset(self) -> None:
        """Drop every in-use record; capacity is kept for the next pass."""
        for position in range(self._count):
            self._slots[position] = None
        self._count = 0
        self._changed()

    def add(self, name: str, base_dir: str = "", is_command_arg: bool = False) -> FileRecord:
        """Query metadata for ``name`` and append a record for it.

        Raises ``AccessError`` (buffer unchanged) when the metadata query
        fails and ``AllocationError`` when the buffer cannot grow.
        """
        if self._count == self.capacity:
            self._grow()

        path = resolve_entry_path(name, base_dir)
        try:
            status = self._stat(path)
        except OSError as exc:
            raise AccessError(path, exc) from exc

        record = FileRecord(name=name, status=status, is_command_arg=is_command_arg)
        self._slots[self._count] = record
        self._count += 1
        self._changed()
        return record

    def order(self) -> OrderIndex:
        """Build the print order over all in-use records."""
        positions = sorted(range(self._count), key=lambda position: order_key(self.record_at(position)))
        self._order = OrderIndex(self, positions, self._generation)
        return self._order

    @property
    def current_order(self) -> OrderIndex:
        if self._order is None or not self._order.is_current:
            raise RuntimeError("order index has not been built for the current records")
        return self._order

    def extract_directories(self) -> list[str]:
        """Return names of directory records in print order.

        Directories that came straight from the command line are dropped from
        the current order in the same pass; their contents get their own
        block later. Relative order of the remaining records is kept.
        """
        order = self.current_order
        directories: list[str] = []
        kept: list[int] = []
        for position in order.positions:
            record = self.record_at(position)
            if record.is_dir:
                directories.append(record.name)
                if record.is_command_arg:
                    continue
            kept.append(position)
        order._retain(kept)
        return directories


__all__ = ["ALLOCATE_COUNT", "resolve_entry_path", "OrderIndex", "SlotBuffer"]
