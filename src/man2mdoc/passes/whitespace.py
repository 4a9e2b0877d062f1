"""Whitespace normalization outside preformatted regions."""
from __future__ import annotations

import re

from man2mdoc.config import ConvertConfig
from man2mdoc.document import Document
from man2mdoc.passes.common import SkipTracker, is_blank, is_macro

_SPACE_RUN_RE = re.compile(r" {2,}")


def extra_spaces(doc: Document, config: ConvertConfig) -> int:
    """Collapse runs of spaces in prose lines. Returns lines changed."""
    skip = SkipTracker()
    changed = 0
    for index in range(len(doc)):
        line = doc[index]
        if skip.update(line) or is_macro(line):
            continue
        collapsed = _SPACE_RUN_RE.sub(" ", line)
        if collapsed != line:
            doc.replace(index, collapsed)
            changed += 1
    return changed


def blank_lines(doc: Document, config: ConvertConfig) -> int:
    """Delete whitespace-only lines outside skip regions. Returns lines removed."""
    skip = SkipTracker()
    removed = 0
    cur = doc.cursor()
    while not cur.done:
        line = cur.line
        if not skip.update(line) and is_blank(line):
            doc.delete(cur.index)
            removed += 1
            continue
        cur.advance()
    return removed
