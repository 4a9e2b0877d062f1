"""Compiled troff font-escape patterns.

Two kinds of pattern drive the inline rewrites:

- the cross-reference pattern, which recognizes the man(7) rendering of
  a page reference, ``\\fBopen\\fR(2)``, and captures name and section;
- substitution rules, one per user-supplied literal, which recognize the
  literal wrapped in a bold or italic font escape and name the mdoc
  macro to emit in its place.

Everything is compiled once, before any pass scans the document.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal, TypeAlias

RuleCategory: TypeAlias = Literal["symbol", "variable", "define", "type"]

# Category order is also the order rules are tried in.
RULE_CATEGORIES: tuple[RuleCategory, ...] = ("symbol", "variable", "define", "type")

CATEGORY_MACROS: dict[RuleCategory, str] = {
    "symbol": ".Sy",
    "variable": ".Va",
    "define": ".Dv",
    "type": ".Vt",
}

# Font escape that opens the span for each category. Symbols and defines
# are set in bold, variables and types in italic.
CATEGORY_FONTS: dict[RuleCategory, str] = {
    "symbol": "B",
    "variable": "I",
    "define": "B",
    "type": "I",
}

# \fR and \fP both return to the previous (roman) font.
_FONT_RESET = r"\\f[RP]"

# Cross reference: "\fBname\fR(3C)"; the section may itself be italic.
XREF_RE = re.compile(
    r"\\fB([.A-Za-z0-9_-]+)" + _FONT_RESET
    + r"\((?:\\fI)?([1-9][A-Z]*)(?:" + _FONT_RESET + r")?\)"
)

_VALID_NAME_RE = re.compile(r"[^\s\\]+")


class RuleConfigError(ValueError):
    """Raised for a malformed substitution name or rules file."""


@dataclass(frozen=True, slots=True)
class SubstitutionRule:
    """A literal name to rewrite into a dedicated mdoc macro."""

    category: RuleCategory
    name: str
    pattern: re.Pattern[str]

    @property
    def macro(self) -> str:
        return CATEGORY_MACROS[self.category]


def font_span_pattern(font: str, name: str) -> str:
    """Regex source for *name* wrapped in ``\\f<font>`` ... ``\\fR``."""
    return r"\\f" + font + "(" + re.escape(name) + ")" + _FONT_RESET


def compile_rule(category: RuleCategory, name: str) -> SubstitutionRule:
    """Compile one substitution rule.

    Raises:
        RuleConfigError: unknown category, or a name that is empty or
            contains whitespace or a backslash.
    """
    if category not in CATEGORY_MACROS:
        raise RuleConfigError(f"unknown substitution category {category!r}")
    if not isinstance(name, str) or not _VALID_NAME_RE.fullmatch(name):
        raise RuleConfigError(f"invalid {category} name {name!r}")
    source = font_span_pattern(CATEGORY_FONTS[category], name)
    try:
        pattern = re.compile(source)
    except re.error as e:
        raise RuleConfigError(f"cannot compile {category} rule {name!r}: {e}") from e
    return SubstitutionRule(category=category, name=name, pattern=pattern)
