"""New sentence, new line.

mdoc expects every sentence of running text to start on its own source
line. The break heuristic is deliberately literal: the first period that
is not the first character, not escaped and not the last character of
the line ends a sentence. Abbreviations such as "e.g." are not special
cased.
"""
from __future__ import annotations

import logging

from man2mdoc.config import ConvertConfig
from man2mdoc.document import Document
from man2mdoc.passes.common import SkipTracker, is_comment, is_macro

log = logging.getLogger(__name__)


def sentence_break(line: str) -> tuple[int, int] | None:
    """Locate the first sentence break in *line*.

    Returns ``(end, start)`` where ``line[:end]`` is the first sentence
    (period included) and ``line[start:]`` begins the next one, or None
    when no text follows the period.
    """
    pos = 1
    while True:
        pos = line.find(".", pos)
        if pos < 0:
            return None
        if line[pos - 1] != "\\" and pos + 1 < len(line) and line[pos + 1] != "\n":
            break
        pos += 1

    start = pos + 1
    while start < len(line) and line[start] in " \t":
        start += 1
    if start >= len(line) or line[start] == "\n":
        return None
    return pos + 1, start


def split_paragraphs(doc: Document, config: ConvertConfig) -> int:
    """Split prose lines so each holds one sentence. Returns splits made."""
    skip = SkipTracker()
    splits = 0
    cur = doc.cursor()
    while not cur.done:
        line = cur.line
        if skip.update(line) or not line or is_comment(line) or is_macro(line):
            cur.advance()
            continue
        found = sentence_break(line)
        if found is not None:
            _, start = found
            doc.split(cur.index, start)
            doc.replace(cur.index, line[:start].rstrip() + "\n")
            splits += 1
        # The remainder, if any, is the next line and is examined next.
        cur.advance()
    if splits:
        log.debug("split %d sentences onto their own lines", splits)
    return splits
