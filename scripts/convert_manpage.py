#!/usr/bin/env python3
"""Convert a man(7) page to mdoc(7).

Usage:
    python3 scripts/convert_manpage.py page.1m > page.1m.mdoc
    python3 scripts/convert_manpage.py -s O_RDONLY -D NULL -t size_t page.3c
    python3 scripts/convert_manpage.py --rules rules.json --stats run.json page.3c

The converted page goes to stdout (or --output); log messages go to stderr.
Nothing is written when any stage fails.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from man2mdoc.config import ConvertConfig, load_rules_file
from man2mdoc.document import Document, DocumentInvariantError
from man2mdoc.io_utils import save_json, write_text
from man2mdoc.patterns import RuleCategory, RuleConfigError
from man2mdoc.pipeline import run_pipeline

log = logging.getLogger("convert_manpage")

# (flag, substitution category, help)
_RULE_OPTIONS: tuple[tuple[str, RuleCategory, str], ...] = (
    ("-s", "symbol", "Rewrite \\fBNAME\\fR as .Sy NAME (repeatable)."),
    ("-v", "variable", "Rewrite \\fINAME\\fR as .Va NAME (repeatable)."),
    ("-D", "define", "Rewrite \\fBNAME\\fR as .Dv NAME (repeatable)."),
    ("-t", "type", "Rewrite \\fINAME\\fR as .Vt NAME (repeatable)."),
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Convert a man(7) page to mdoc(7).",
    )
    parser.add_argument("input", type=Path, help="man(7) source file")
    for flag, category, help_text in _RULE_OPTIONS:
        parser.add_argument(
            flag,
            dest=category,
            action="append",
            default=[],
            metavar="NAME",
            help=help_text,
        )
    parser.add_argument(
        "--rules",
        type=Path,
        default=None,
        help="JSON file of substitution names, registered before -s/-v/-D/-t.",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write the converted page here instead of stdout.",
    )
    parser.add_argument(
        "--stats",
        type=Path,
        default=None,
        help="Write a JSON report of per-pass rewrite counts.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log each rewrite (DEBUG level).",
    )
    return parser


def build_config(args: argparse.Namespace) -> ConvertConfig:
    """Register rules from --rules, then from the command-line options."""
    config = ConvertConfig()
    if args.rules is not None:
        load_rules_file(args.rules, config)
    for _, category, _ in _RULE_OPTIONS:
        for name in getattr(args, category):
            config.add_rule(category, name)
    return config


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )

    try:
        config = build_config(args)
    except RuleConfigError as exc:
        log.error("Bad substitution rule: %s", exc)
        return 1
    except OSError as exc:
        log.error("Cannot read rules file %s: %s", args.rules, exc)
        return 1

    try:
        doc = Document.from_path(args.input)
    except OSError as exc:
        log.error("Cannot open %s: %s", args.input, exc)
        return 1
    log.debug("Read %d lines from %s", len(doc), args.input)

    try:
        report = run_pipeline(doc, config)
    except DocumentInvariantError as exc:
        log.error("%s: %s", args.input, exc)
        return 1

    text = doc.render()
    try:
        if args.output is not None:
            write_text(text, args.output)
            log.info("Wrote %s", args.output)
        if args.stats is not None:
            payload = {"input": str(args.input), **report.to_dict()}
            save_json(payload, args.stats)
            log.info("Run report: %s", args.stats)
    except OSError as exc:
        log.error("Cannot write %s: %s", exc.filename, exc)
        return 1

    # Nothing reaches stdout unless every file write succeeded.
    if args.output is None:
        sys.stdout.buffer.write(text.encode("utf-8", errors="surrogateescape"))
        sys.stdout.flush()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
