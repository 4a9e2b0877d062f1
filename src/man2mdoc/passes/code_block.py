"""Turn indented no-fill examples into ``.Bd -literal`` displays.

man(7) pages mark example code as::

    .in +2
    .nf
    ...
    .fi
    .in -2

which becomes ``.Bd -literal -offset 2n`` ... ``.Ed``.
"""
from __future__ import annotations

import logging

from man2mdoc.config import ConvertConfig
from man2mdoc.document import Document, UnbalancedBlockError, bare

log = logging.getLogger(__name__)

BLOCK_OPEN = ".Bd -literal -offset 2n\n"
BLOCK_CLOSE = ".Ed\n"

_OPEN_PAIR = (".in +2", ".nf")
_CLOSE_PAIR = (".fi", ".in -2")


def _pair_at(doc: Document, index: int, pair: tuple[str, str]) -> bool:
    if index + 1 >= len(doc):
        return False
    return (bare(doc[index]).rstrip(), bare(doc[index + 1]).rstrip()) == pair


def code_blocks(doc: Document, config: ConvertConfig) -> int:
    """Collapse each bracket pair into one display macro.

    Raises:
        UnbalancedBlockError: the document ends inside an open block.
    """
    opened_at: int | None = None
    blocks = 0
    cur = doc.cursor()
    while not cur.done:
        if opened_at is None and _pair_at(doc, cur.index, _OPEN_PAIR):
            doc.delete(cur.index)
            doc.replace(cur.index, BLOCK_OPEN)
            opened_at = cur.index
        elif opened_at is not None and _pair_at(doc, cur.index, _CLOSE_PAIR):
            doc.delete(cur.index)
            doc.replace(cur.index, BLOCK_CLOSE)
            log.debug("code block lines %d-%d", opened_at + 1, cur.index + 1)
            opened_at = None
            blocks += 1
        cur.advance()

    if opened_at is not None:
        raise UnbalancedBlockError(
            f"code block opened at line {opened_at + 1} is never closed "
            f"(expected '.fi' followed by '.in -2')",
        )
    return blocks
