"""Exit statuses and error kinds shared by the listing pipeline.

Only allocation failures and command-line misuse end a run early. Access and
open-directory failures are reported per entry and folded into the final
exit status.
"""

from __future__ import annotations

import os

ALLOCATION_FAILURE = 1
CMDLINE_FAILURE = 2
ACCESS_FAILURE = 3
OPENDIRECTORY_FAILURE = 4


def _strerror(cause: OSError) -> str:
    if cause.strerror:
        return cause.strerror
    if cause.errno is not None:
        return os.strerror(cause.errno)
    return str(cause)


class PdirError(Exception):
    """Base class for every error the listing pipeline raises."""

    exit_status = 1


class AllocationError(PdirError):
    """The slot buffer could not grow; the run cannot continue."""

    exit_status = ALLOCATION_FAILURE

    def __str__(self) -> str:
        return "memory exhausted"


class CommandLineError(PdirError):
    exit_status = CMDLINE_FAILURE


class AccessError(PdirError):
    """Metadata lookup failed for ``path``; the entry is skipped."""

    exit_status = ACCESS_FAILURE

    def __init__(self, path: str, cause: OSError) -> None:
        super().__init__(path, cause)
        self.path = path
        self.cause = cause

    def __str__(self) -> str:
        return f"cannot access '{self.path}': {_strerror(self.cause)}"


class OpenDirectoryError(PdirError):
    """Enumeration failed for a queued directory; its contents are skipped."""

    exit_status = OPENDIRECTORY_FAILURE

    def __init__(self, path: str, cause: OSError) -> None:
        super().__init__(path, cause)
        self.path = path
        self.cause = cause

    def __str__(self) -> str:
        return f"cannot open directory '{self.path}': {_strerror(self.cause)}"


class EmptyQueueError(PdirError):
    """``pop`` on an empty traversal queue. Callers guard with ``len()``."""


__all__ = [
    "ALLOCATION_FAILURE",
    "CMDLINE_FAILURE",
    "ACCESS_FAILURE",
    "OPENDIRECTORY_FAILURE",
    "PdirError",
    "AllocationError",
    "CommandLineError",
    "AccessError",
    "OpenDirectoryError",
    "EmptyQueueError",
]
