"""Rewrite inline page references into ``.Xr`` macro lines.

``See \\fBopen\\fR(2), then`` becomes::

    See
    .Xr open 2 ,
    then
"""
from __future__ import annotations

import logging

from man2mdoc.config import ConvertConfig
from man2mdoc.document import Document
from man2mdoc.passes.common import SkipTracker, is_macro, isolate_span
from man2mdoc.patterns import XREF_RE

log = logging.getLogger(__name__)


def cross_references(doc: Document, config: ConvertConfig) -> int:
    """Replace every ``\\fBname\\fR(sect)`` outside skip regions.

    One reference is handled per step; the remainder of the line lands on
    the next line and is scanned in turn. Returns the number of
    references rewritten.
    """
    skip = SkipTracker()
    rewritten = 0
    cur = doc.cursor()
    while not cur.done:
        line = cur.line
        if skip.update(line) or is_macro(line):
            cur.advance()
            continue
        m = XREF_RE.search(line)
        if m is None:
            cur.advance()
            continue

        name, section = m.group(1), m.group(2)
        placed = isolate_span(doc, cur.index, m.start(), m.end())
        doc.replace(placed.index, f".Xr {name} {section}{placed.suffix}\n")
        log.debug("line %d: .Xr %s %s", placed.index + 1, name, section)
        rewritten += 1
        cur.move_to(placed.index + 1)
    return rewritten
