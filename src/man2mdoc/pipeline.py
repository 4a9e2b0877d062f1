"""Run the rewrite passes over a Document in their fixed order."""
from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from man2mdoc.config import ConvertConfig
from man2mdoc.document import Document
from man2mdoc.passes import PASS_ORDER, RewritePass

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PassStat:
    """What one pass did to the document."""

    name: str
    rewrites: int
    lines_after: int
    elapsed_sec: float


@dataclass(frozen=True, slots=True)
class PipelineReport:
    lines_in: int
    lines_out: int
    passes: tuple[PassStat, ...]
    finished_at: str

    @property
    def total_rewrites(self) -> int:
        return sum(p.rewrites for p in self.passes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "lines_in": self.lines_in,
            "lines_out": self.lines_out,
            "total_rewrites": self.total_rewrites,
            "finished_at": self.finished_at,
            "passes": [
                {
                    "name": p.name,
                    "rewrites": p.rewrites,
                    "lines_after": p.lines_after,
                    "elapsed_sec": round(p.elapsed_sec, 6),
                }
                for p in self.passes
            ],
        }


def run_pipeline(
    doc: Document,
    config: ConvertConfig | None = None,
    *,
    passes: Sequence[RewritePass] = PASS_ORDER,
) -> PipelineReport:
    """Apply *passes* to *doc* in order, mutating it in place.

    Errors from a pass propagate unchanged; the document is then in an
    undefined state and must not be emitted.
    """
    cfg = config if config is not None else ConvertConfig()
    lines_in = len(doc)
    stats: list[PassStat] = []
    for rewrite in passes:
        t0 = time.perf_counter()
        count = rewrite.run(doc, cfg)
        elapsed = time.perf_counter() - t0
        stats.append(PassStat(rewrite.name, count, len(doc), elapsed))
        log.debug("%s: %d rewrites, %d lines", rewrite.name, count, len(doc))

    report = PipelineReport(
        lines_in=lines_in,
        lines_out=len(doc),
        passes=tuple(stats),
        finished_at=datetime.now(UTC).isoformat(),
    )
    log.info(
        "Converted %d lines -> %d lines (%d rewrites in %d passes)",
        report.lines_in, report.lines_out, report.total_rewrites, len(stats),
    )
    return report


def convert_text(text: str, config: ConvertConfig | None = None) -> str:
    """Convert a whole man(7) page held in memory and return the mdoc text."""
    doc = Document.from_text(text)
    run_pipeline(doc, config)
    return doc.render()
