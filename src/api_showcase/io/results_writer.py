"""JSONL export of rendered view models."""

from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any, Iterable


def ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def to_record(item: Any) -> dict:
    if is_dataclass(item) and not isinstance(item, type):
        return asdict(item)
    if isinstance(item, dict):
        return item
    raise TypeError(f"Cannot serialise {type(item).__name__} as a JSON record")


def write_jsonl(path: Path, items: Iterable[Any]) -> int:
    ensure_parent(path)
    count = 0
    with path.open("w", encoding="utf-8") as handle:
        for item in items:
            handle.write(json.dumps(to_record(item), ensure_ascii=False))
            handle.write("\n")
            count += 1
    return count
