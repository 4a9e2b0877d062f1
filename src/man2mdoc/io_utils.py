"""I/O utilities for JSON rule files, run reports and converted pages.

Provides orjson-accelerated JSON I/O with stdlib fallback.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

_orjson: Any
try:
    import orjson
    _orjson = orjson
except ImportError:
    _orjson = None


def load_json(path: Path) -> Any:
    """Load JSON from a file using orjson (fast) with stdlib fallback."""
    raw = path.read_bytes()
    if _orjson is not None:
        return _orjson.loads(raw)
    return json.loads(raw)


def save_json(obj: Any, path: Path, *, pretty: bool = True) -> None:
    """Save an object as JSON using orjson (fast) with stdlib fallback."""
    path.parent.mkdir(parents=True, exist_ok=True)

    if _orjson is not None:
        opts = (
            _orjson.OPT_INDENT_2 | _orjson.OPT_SORT_KEYS
            if pretty
            else _orjson.OPT_SORT_KEYS
        )
        path.write_bytes(_orjson.dumps(obj, option=opts))
    else:
        with open(path, "w") as f:
            json.dump(
                obj, f, indent=2 if pretty else None,
                sort_keys=True, default=str,
            )


def write_text(text: str, path: Path) -> None:
    """Write converted page text, preserving bytes read via surrogateescape."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", errors="surrogateescape", newline="") as f:
        f.write(text)
