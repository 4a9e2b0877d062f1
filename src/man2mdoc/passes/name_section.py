"""Restructure the NAME section into ``.Nm`` and ``.Nd`` lines."""
from __future__ import annotations

import logging
import re

from man2mdoc.config import ConvertConfig
from man2mdoc.document import Document, bare
from man2mdoc.passes.common import is_macro

log = logging.getLogger(__name__)

_NAME_HEADERS = frozenset({".SH NAME", ".Sh NAME"})
_SECTION_HEADER_RE = re.compile(r"^\.S[Hh](?:\s|$)")
# Prefer a spaced "\-"; a name may itself contain an escaped hyphen.
_SPACED_SEP_RE = re.compile(r"\s\\-\s")
_NAME_LIST_RE = re.compile(r"[,\s]+")


def split_name_line(line: str) -> tuple[list[str], str] | None:
    """Split ``"foo, bar \\- does x"`` into ``(["foo", "bar"], "does x")``.

    Returns None when the line has no ``\\-`` separator or no names.
    """
    text = bare(line)
    m = _SPACED_SEP_RE.search(text)
    if m is not None:
        before, after = text[:m.start()], text[m.end():]
    else:
        before, sep, after = text.partition("\\-")
        if not sep:
            return None
    names = [n for n in _NAME_LIST_RE.split(before.strip()) if n]
    if not names:
        return None
    return names, after.strip()


def name_section(doc: Document, config: ConvertConfig) -> int:
    """Expand each ``names \\- description`` line of the first NAME section.

    Returns the number of lines expanded.
    """
    expanded = 0
    in_name = False
    cur = doc.cursor()
    while not cur.done:
        line = cur.line
        if not in_name and bare(line).rstrip() in _NAME_HEADERS:
            in_name = True
            cur.advance()
            continue
        if not in_name:
            cur.advance()
            continue
        if _SECTION_HEADER_RE.match(line):
            break
        parts = None if is_macro(line) else split_name_line(line)
        if parts is None:
            cur.advance()
            continue

        names, description = parts
        at = cur.index
        doc.delete(at)
        for offset, name in enumerate(names):
            doc.insert(at + offset, f".Nm {name}\n")
        doc.insert(at + len(names), f".Nd {description}".rstrip() + "\n")
        log.debug("line %d: NAME entry for %s", at + 1, ", ".join(names))
        expanded += 1
        cur.move_to(at + len(names) + 1)
    return expanded
