"""Rewrite passes: each takes (Document, ConvertConfig) and returns a change count."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeAlias

from man2mdoc.config import ConvertConfig
from man2mdoc.document import Document
from man2mdoc.passes.code_block import code_blocks
from man2mdoc.passes.common import SkipTracker, isolate_span
from man2mdoc.passes.name_section import name_section, split_name_line
from man2mdoc.passes.paragraphs import sentence_break, split_paragraphs
from man2mdoc.passes.simple import convert_title, format_dd_date, simple
from man2mdoc.passes.substitute import substitutions
from man2mdoc.passes.whitespace import blank_lines, extra_spaces
from man2mdoc.passes.xref import cross_references

PassFn: TypeAlias = Callable[[Document, ConvertConfig], int]


@dataclass(frozen=True, slots=True)
class RewritePass:
    name: str
    run: PassFn


# Fixed total order. Code blocks go first so every later pass sees
# .Bd/.Ed skip regions; renames go last so .LP-after-heading removal
# sees headings with blank lines already gone.
PASS_ORDER: tuple[RewritePass, ...] = (
    RewritePass("code_blocks", code_blocks),
    RewritePass("cross_references", cross_references),
    RewritePass("substitutions", substitutions),
    RewritePass("name_section", name_section),
    RewritePass("split_paragraphs", split_paragraphs),
    RewritePass("extra_spaces", extra_spaces),
    RewritePass("blank_lines", blank_lines),
    RewritePass("simple", simple),
)

__all__ = [
    "PASS_ORDER",
    "PassFn",
    "RewritePass",
    "SkipTracker",
    "blank_lines",
    "code_blocks",
    "convert_title",
    "cross_references",
    "extra_spaces",
    "format_dd_date",
    "isolate_span",
    "name_section",
    "sentence_break",
    "simple",
    "split_name_line",
    "split_paragraphs",
    "substitutions",
]
