"""Conversion configuration: the substitution rules and the .Dd date.

A ConvertConfig is built once at startup, from a JSON rules file and/or
the repeatable ``-s/-v/-D/-t`` command-line options, and handed to every
rewrite pass. Passes only read it.

Rules file format::

    {
      "symbol":   ["O_RDONLY"],
      "variable": ["errno"],
      "define":   ["NULL", "EOF"],
      "type":     ["size_t"]
    }

Every key is optional; unknown keys are rejected.
"""
from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any

from man2mdoc.io_utils import load_json
from man2mdoc.patterns import (
    RULE_CATEGORIES,
    RuleCategory,
    RuleConfigError,
    SubstitutionRule,
    compile_rule,
)

log = logging.getLogger(__name__)


@dataclass(slots=True)
class ConvertConfig:
    """Per-run settings shared by all passes."""

    symbol: list[SubstitutionRule] = field(default_factory=list)
    variable: list[SubstitutionRule] = field(default_factory=list)
    define: list[SubstitutionRule] = field(default_factory=list)
    type: list[SubstitutionRule] = field(default_factory=list)
    today: date | None = None   # .Dd date; None means the current date

    def add_rule(self, category: RuleCategory, name: str) -> SubstitutionRule:
        """Compile *name* and append it to *category*'s rule list."""
        rule = compile_rule(category, name)
        self._bucket(category).append(rule)
        log.debug("Registered %s rule %r", category, name)
        return rule

    def rules(self) -> Iterator[SubstitutionRule]:
        """All rules, category by category, in registration order."""
        for category in RULE_CATEGORIES:
            yield from self._bucket(category)

    def rule_count(self) -> int:
        return sum(len(self._bucket(c)) for c in RULE_CATEGORIES)

    def dd_date(self) -> date:
        return self.today if self.today is not None else date.today()

    def update_from_mapping(self, mapping: Mapping[str, Any]) -> None:
        """Register every name listed under the category keys of *mapping*."""
        unknown = sorted(set(mapping) - set(RULE_CATEGORIES))
        if unknown:
            raise RuleConfigError(f"unknown rule categories: {', '.join(unknown)}")
        for category in RULE_CATEGORIES:
            names = mapping.get(category, [])
            if isinstance(names, str) or not isinstance(names, list):
                raise RuleConfigError(f"{category!r} must be a list of names")
            for name in names:
                self.add_rule(category, name)

    def _bucket(self, category: RuleCategory) -> list[SubstitutionRule]:
        match category:
            case "symbol":
                return self.symbol
            case "variable":
                return self.variable
            case "define":
                return self.define
            case "type":
                return self.type
        raise RuleConfigError(f"unknown substitution category {category!r}")


def load_rules_file(path: Path, config: ConvertConfig | None = None) -> ConvertConfig:
    """Load a JSON rules file into *config* (or a fresh ConvertConfig).

    Raises:
        RuleConfigError: the file is not valid JSON or not a rules object.
        OSError: the file cannot be read.
    """
    cfg = config if config is not None else ConvertConfig()
    try:
        payload = load_json(path)
    except ValueError as e:
        raise RuleConfigError(f"{path}: invalid JSON: {e}") from e
    if not isinstance(payload, dict):
        raise RuleConfigError(f"{path}: expected a JSON object of rule lists")
    cfg.update_from_mapping(payload)
    log.info("Loaded %d substitution rules from %s", cfg.rule_count(), path)
    return cfg
