"""Traversal session: seed from arguments, then drain the directory queue.

The session owns the slot buffer, the queue, and the active options, and is
the only thing that mutates them. Each loop iteration lists exactly one
directory and pushes its subdirectories, so stack depth stays constant no
matter how deep the tree is.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TextIO

from ..about import PROGRAM_NAME
from ..errors import AccessError, OpenDirectoryError, PdirError
from .classify import is_self_or_parent, visible
from .render import render_records
from .slots import SlotBuffer
from .traversal import TraversalQueue
from .types import VISIBILITY_ALL, ListingOptions

logger = logging.getLogger(__name__)


def write_text(stream: TextIO, text: str) -> None:
    """Write ``text`` so undecodable filenames come out as their original bytes.

    Streams backed by a binary buffer get ``os.fsencode`` output; plain text
    streams such as ``io.StringIO`` receive the ``str`` unchanged.
    """
    buffer = getattr(stream, "buffer", None)
    if buffer is None:
        stream.write(text)
        return
    stream.flush()
    buffer.write(os.fsencode(text))
    buffer.flush()


def child_path(directory: str, name: str) -> str:
    """Queue name for ``name`` found in ``directory``; children of ``.`` stay bare."""
    if directory == ".":
        return name
    return os.path.join(directory, name)


@dataclass
class TraversalSession:
    options: ListingOptions = field(default_factory=ListingOptions)
    out: TextIO | None = None
    err: TextIO | None = None
    now: float | None = None
    slots: SlotBuffer = field(default_factory=SlotBuffer)
    queue: TraversalQueue = field(default_factory=TraversalQueue)
    exit_status: int = 0
    wrote_output: bool = False
    directories_seen: int = 0
    visited: set[tuple[int, int]] = field(default_factory=set)

    def _stdout(self) -> TextIO:
        return self.out if self.out is not None else sys.stdout

    def _stderr(self) -> TextIO:
        return self.err if self.err is not None else sys.stderr

    def warn(self, error: PdirError) -> None:
        """Report a recoverable error and remember the first failing status."""
        write_text(self._stderr(), f"{PROGRAM_NAME}: {error}\n")
        if self.exit_status == 0:
            self.exit_status = error.exit_status

    def _fill(self, names: Sequence[str], base_dir: str, is_command_arg: bool) -> None:
        self.slots.reset()
        for name in names:
            try:
                self.slots.add(name, base_dir, is_command_arg=is_command_arg)
            except AccessError as exc:
                logger.debug("skipping %r: %s", name, exc.cause)
                self.warn(exc)

    def _write_block(self, lines: list[str], header: str | None = None) -> None:
        stdout = self._stdout()
        if header is not None:
            if self.wrote_output:
                write_text(stdout, "\n")
            write_text(stdout, f"{header}:\n")
            self.wrote_output = True
        if lines:
            write_text(stdout, "".join(f"{line}\n" for line in lines))
            self.wrote_output = True

    def seed(self, arguments: Sequence[str]) -> None:
        """List non-directory arguments now and queue the directory ones."""
        self._fill(arguments, "", is_command_arg=True)
        order = self.slots.order()
        directories = self.slots.extract_directories()
        self._write_block(render_records(order.records(), self.options, self.now))
        self.queue.extend(directories)

    def _enumerate(self, directory: str) -> list[str]:
        with os.scandir(directory) as entries:
            names = [entry.name for entry in entries]
        if self.options.visibility == VISIBILITY_ALL:
            names = [".", ".."] + names
        return [name for name in names if visible(name, self.options.visibility)]

    def visit(self, directory: str) -> None:
        """List one queued directory and queue the subdirectories it holds."""
        self.directories_seen += 1
        try:
            status = os.lstat(directory)
        except OSError as exc:
            self.warn(OpenDirectoryError(directory, exc))
            return
        identity = (status.st_dev, status.st_ino)
        if identity in self.visited:
            logger.debug("already listed %r", directory)
            return

        try:
            names = self._enumerate(directory)
        except OSError as exc:
            self.warn(OpenDirectoryError(directory, exc))
            return
        self.visited.add(identity)
        logger.debug("listing %r (%d visible entries)", directory, len(names))

        self._fill(names, directory, is_command_arg=False)
        order = self.slots.order()
        subdirectories = [
            child_path(directory, name)
            for name in self.slots.extract_directories()
            if not is_self_or_parent(name)
        ]
        lines = render_records(order.records(), self.options, self.now)

        show_header = (
            self.wrote_output
            or self.directories_seen > 1
            or len(self.queue) > 0
            or bool(subdirectories)
        )
        self._write_block(lines, directory if show_header else None)
        self.queue.extend(subdirectories)

    def run(self) -> int:
        """Drain the queue one directory at a time; return the exit status."""
        while len(self.queue) > 0:
            self.visit(self.queue.pop())
        return self.exit_status


def list_paths(
    arguments: Sequence[str],
    options: ListingOptions | None = None,
    out: TextIO | None = None,
    err: TextIO | None = None,
    now: float | None = None,
) -> int:
    """List ``arguments`` (``.`` when empty) and return the exit status."""
    session = TraversalSession(
        options=options if options is not None else ListingOptions(),
        out=out,
        err=err,
        now=now,
    )
    session.seed(list(arguments) or ["."])
    return session.run()


__all__ = ["write_text", "child_path", "TraversalSession", "list_paths"]
