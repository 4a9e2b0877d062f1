"""Mutable line model for a man page under conversion.

A Document is the single shared resource every rewrite pass works on:
an ordered list of lines, each ending in exactly one newline (the last
line may lack it). Passes edit it in place while scanning it, so the
primitives here validate every index and column and raise
DocumentInvariantError instead of silently corrupting the sequence.

Scans use an explicit Cursor: after an insert or delete at the cursor the
pass decides whether to advance or re-examine the same index.
"""
from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path


class DocumentInvariantError(RuntimeError):
    """Raised when a pass violates a Document invariant (bad index/column)."""


class UnbalancedBlockError(DocumentInvariantError):
    """Raised when a document ends inside an open code block."""


def bare(line: str) -> str:
    """Return *line* without its trailing newline."""
    return line.removesuffix("\n")


class Document:
    """Ordered, index-addressable, mutable sequence of text lines."""

    __slots__ = ("_lines",)

    def __init__(self, lines: Iterable[str] = ()) -> None:
        self._lines: list[str] = list(lines)

    @classmethod
    def from_text(cls, text: str) -> Document:
        """Split *text* into physical lines, keeping each line's newline.

        Only ``\\n`` terminates a line; ``\\r`` and form feeds stay part of
        the line text.
        """
        parts = text.split("\n")
        lines = [part + "\n" for part in parts[:-1]]
        if parts[-1]:
            lines.append(parts[-1])
        return cls(lines)

    @classmethod
    def from_path(cls, path: Path) -> Document:
        """Read a whole file into a Document.

        Undecodable bytes survive the round trip via surrogateescape.
        """
        with open(path, encoding="utf-8", errors="surrogateescape", newline="\n") as f:
            return cls(f.readlines())

    def __len__(self) -> int:
        return len(self._lines)

    def __getitem__(self, index: int) -> str:
        self._check_index(index)
        return self._lines[index]

    def __iter__(self) -> Iterator[str]:
        return iter(self._lines)

    def __repr__(self) -> str:
        return f"Document({len(self._lines)} lines)"

    def lines(self) -> list[str]:
        """Return a copy of the current line sequence."""
        return list(self._lines)

    def render(self) -> str:
        """Concatenate all lines and append the single final newline."""
        return "".join(self._lines) + "\n"

    def cursor(self, start: int = 0) -> Cursor:
        return Cursor(self, start)

    # -- primitives ---------------------------------------------------------

    def insert(self, at: int, line: str) -> None:
        """Insert *line* immediately before position *at*.

        ``at == len(self)`` appends. Everything at or after *at* shifts
        one position later.
        """
        if at < 0 or at > len(self._lines):
            raise DocumentInvariantError(
                f"insert position {at} out of range for {len(self._lines)} lines",
            )
        self._lines.insert(at, line)

    def delete(self, at: int) -> str:
        """Remove and return the line at *at*; later lines shift earlier."""
        self._check_index(at)
        return self._lines.pop(at)

    def replace(self, at: int, line: str) -> None:
        """Overwrite the line at *at* in place."""
        self._check_index(at)
        self._lines[at] = line

    def split(self, at: int, column: int) -> None:
        """Break line *at* at *column*.

        The line keeps ``line[:column]`` plus a newline; a new line holding
        ``line[column:]`` (starting with the character that was at
        *column*) is inserted right after it.
        """
        self._check_index(at)
        line = self._lines[at]
        if column <= 0:
            raise DocumentInvariantError(
                f"split column must be > 0 (line {at + 1}, column {column})",
            )
        if column >= len(line):
            raise DocumentInvariantError(
                f"split column {column} beyond line {at + 1} of length {len(line)}",
            )
        self._lines[at] = line[:column] + "\n"
        self._lines.insert(at + 1, line[column:])

    def _check_index(self, index: int) -> None:
        if index < 0 or index >= len(self._lines):
            raise DocumentInvariantError(
                f"line index {index} out of range for {len(self._lines)} lines",
            )


@dataclass(slots=True)
class Cursor:
    """Scan position over a Document that is being edited.

    The cursor never moves on its own. A pass that deletes the current
    line leaves the cursor where it is so the successor is examined at the
    same index; a pass that inserts lines moves past them explicitly.
    """

    doc: Document
    index: int = 0

    @property
    def done(self) -> bool:
        return self.index >= len(self.doc)

    @property
    def line(self) -> str:
        return self.doc[self.index]

    @property
    def previous(self) -> str | None:
        """The line before the cursor, or None at the top of the document."""
        if self.index == 0:
            return None
        return self.doc[self.index - 1]

    def advance(self, steps: int = 1) -> None:
        self.index += steps

    def move_to(self, index: int) -> None:
        self.index = index
