"""Utilities for reading and writing JSONL artifacts."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import orjson


def write_jsonl(path: str | Path, rows: Iterable[Mapping[str, Any]]) -> int:
    """Write mappings to JSON Lines format and return the row count."""
    resolved_path = Path(path)
    resolved_path.parent.mkdir(parents=True, exist_ok=True)

    count = 0
    with resolved_path.open("wb") as handle:
        for row in rows:
            handle.write(orjson.dumps(dict(row)))
            handle.write(b"\n")
            count += 1
    return count


def read_jsonl(path: str | Path) -> list[dict[str, Any]]:
    """Read a JSON Lines file into a list of dictionaries."""
    resolved_path = Path(path)
    with resolved_path.open("rb") as handle:
        return [orjson.loads(line) for line in handle if line.strip()]
