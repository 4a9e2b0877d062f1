"""Rewrite configured font-escaped literals into ``.Sy``/``.Va``/``.Dv``/``.Vt``."""
from __future__ import annotations

import logging
import re

from man2mdoc.config import ConvertConfig
from man2mdoc.document import Document
from man2mdoc.passes.common import SkipTracker, is_macro, isolate_span
from man2mdoc.patterns import SubstitutionRule

log = logging.getLogger(__name__)


def _first_match(
    line: str, rules: list[SubstitutionRule],
) -> tuple[SubstitutionRule, re.Match[str]] | None:
    """Leftmost match over all rules; ties go to the earlier rule."""
    best: tuple[SubstitutionRule, re.Match[str]] | None = None
    for rule in rules:
        m = rule.pattern.search(line)
        if m is not None and (best is None or m.start() < best[1].start()):
            best = (rule, m)
    return best


def substitutions(doc: Document, config: ConvertConfig) -> int:
    """Apply every substitution rule to prose lines outside skip regions.

    Taking the leftmost match keeps the text that is split off before a
    span free of other matches.
    """
    rules = list(config.rules())
    if not rules:
        return 0

    skip = SkipTracker()
    rewritten = 0
    cur = doc.cursor()
    while not cur.done:
        line = cur.line
        if skip.update(line) or is_macro(line):
            cur.advance()
            continue
        found = _first_match(line, rules)
        if found is None:
            cur.advance()
            continue

        rule, m = found
        placed = isolate_span(doc, cur.index, m.start(), m.end())
        doc.replace(placed.index, f"{rule.macro} {m.group(1)}{placed.suffix}\n")
        log.debug("line %d: %s %s", placed.index + 1, rule.macro, rule.name)
        rewritten += 1
        cur.move_to(placed.index + 1)
    return rewritten
