"""Line classification and splicing helpers shared by the rewrite passes."""
from __future__ import annotations

from dataclasses import dataclass

from man2mdoc.document import Document, bare

# Skip-region opener -> closer. Text between them is preformatted.
_SKIP_CLOSERS: dict[str, str] = {
    ".nf": ".fi",
    ".Bd": ".Ed",
}

_COMMENT_PREFIXES: tuple[str, ...] = ('.\\"', "'\\\"", '\\"', "\\#")

# Punctuation that mdoc wants as separate macro arguments.
TRAILING_DELIMITERS = frozenset(".,:;?!)]")


def is_macro(line: str) -> bool:
    """True for a control line (a formatting directive, not prose)."""
    return line.startswith(".")


def is_comment(line: str) -> bool:
    return line.startswith(_COMMENT_PREFIXES)


def is_blank(line: str) -> bool:
    return not line.strip()


def _request(line: str) -> str:
    """The request name of a control line: ``.Bd -literal`` -> ``.Bd``."""
    return bare(line).split(" ", 1)[0].split("\t", 1)[0]


@dataclass(slots=True)
class SkipTracker:
    """Tracks whether a scan is inside a ``.nf``/``.fi`` or ``.Bd``/``.Ed`` span.

    Feed every line to :meth:`update` in order; it returns True when the
    line is part of a skip region (opener, body or closer) and must be
    left alone.
    """

    closer: str | None = None

    def update(self, line: str) -> bool:
        if not is_macro(line):
            return self.closer is not None
        request = _request(line)
        if self.closer is not None:
            if request == self.closer:
                self.closer = None
            return True
        closer = _SKIP_CLOSERS.get(request)
        if closer is not None:
            self.closer = closer
            return True
        return False


@dataclass(frozen=True, slots=True)
class Isolated:
    """Where an inline span ended up after :func:`isolate_span`."""

    index: int      # line now holding only the span
    suffix: str     # detached delimiters, each preceded by a space


def isolate_span(doc: Document, index: int, start: int, end: int) -> Isolated:
    """Split line *index* so ``line[start:end]`` sits alone on its own line.

    Delimiters directly after the span are detached into ``suffix`` and
    whitespace after them is dropped. Text after that moves to a new
    following line; non-blank text before the span stays on the source
    line and the span moves to the line after it.
    """
    line = doc[index]
    pos = end
    delims: list[str] = []
    while pos < len(line) and line[pos] in TRAILING_DELIMITERS:
        delims.append(line[pos])
        pos += 1
    while pos < len(line) and line[pos] in " \t":
        pos += 1

    if pos < len(line) and line[pos] != "\n":
        doc.split(index, pos)
    if line[:start].strip():
        doc.split(index, start)
        index += 1

    return Isolated(index=index, suffix="".join(f" {d}" for d in delims))
