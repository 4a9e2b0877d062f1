"""One-for-one macro renames and the ``.TH`` title header.

- ``.SH``/``.SS``/``.DT`` become ``.Sh``/``.Ss``/``.Dt``.
- ``.sp`` is dropped; ``.LP`` (and ``.PP``/``.P``) becomes ``.Pp``
  unless it directly follows a heading, where it is dropped.
- ``.TH name section date ...`` becomes ``.Dd``/``.Dt``/``.Os``.
- A leading ``'\\" te`` preprocessor hint is dropped.

Running the pass on its own output changes nothing.
"""
from __future__ import annotations

import logging
from datetime import date

from man2mdoc.config import ConvertConfig
from man2mdoc.document import Cursor, Document, bare

log = logging.getLogger(__name__)

_RENAMES: tuple[tuple[str, str], ...] = (
    (".SH ", ".Sh "),
    (".DT ", ".Dt "),
    (".SS ", ".Ss "),
)
_PARAGRAPH_BREAKS = frozenset({".LP", ".PP", ".P"})
_HEADINGS: tuple[str, ...] = (".Sh ", ".Ss ")
_TE_HINT = "'\\\" te"


def format_dd_date(day: date) -> str:
    """``Oct 19, 2026``; single-digit days are space padded (``Oct  9, 2026``)."""
    return f"{day:%b} {day.day:2d}, {day.year}"


def _newline_of(line: str) -> str:
    return "\n" if line.endswith("\n") else ""


def convert_title(doc: Document, index: int, today: date) -> bool:
    """Turn the ``.TH`` line at *index* into ``.Dd``, ``.Dt`` and ``.Os``.

    Only the first three space-separated fields (request, name, section)
    are kept. A header with fewer fields is left unmodified and False is
    returned.
    """
    line = doc[index]
    spaces = [i for i, ch in enumerate(line) if ch == " "]
    if len(spaces) < 3:
        return False
    doc.replace(index, ".Dt" + line[3:spaces[2]] + "\n")
    doc.insert(index, f".Dd {format_dd_date(today)}\n")
    doc.insert(index + 2, ".Os\n")
    return True


def _rewrite_one(cur: Cursor, today: date) -> int:
    """Rewrite the line at the cursor, moving the cursor as needed."""
    doc = cur.doc
    line = cur.line
    for old, new in _RENAMES:
        if line.startswith(old):
            doc.replace(cur.index, new + line[len(old):])
            cur.advance()
            return 1

    request = bare(line)
    if request == ".sp":
        doc.delete(cur.index)
        return 1
    if request in _PARAGRAPH_BREAKS:
        prev = cur.previous
        if prev is not None and prev.startswith(_HEADINGS):
            doc.delete(cur.index)
        else:
            doc.replace(cur.index, ".Pp" + _newline_of(line))
            cur.advance()
        return 1
    if line.startswith(".TH "):
        if convert_title(doc, cur.index, today):
            cur.advance(3)
            return 1
        log.warning("line %d: .TH has fewer than three fields, left as is", cur.index + 1)

    cur.advance()
    return 0


def simple(doc: Document, config: ConvertConfig) -> int:
    """Run the rename rules over the whole document.

    Returns the number of lines renamed, deleted or expanded.
    """
    today = config.dd_date()
    changed = 0
    while len(doc) and doc[0].startswith(_TE_HINT):
        doc.delete(0)
        changed += 1

    cur = doc.cursor()
    while not cur.done:
        changed += _rewrite_one(cur, today)
    return changed
