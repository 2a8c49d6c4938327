"""
Export helpers for engine outputs.

All functions write to disk and return the written ``Path``.  Pydantic
models are dumped in JSON mode so dates become ISO strings and enums their
values.  CSV exports are flat: nested dicts are expanded into
``parent_child`` columns.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any, Sequence

from pydantic import BaseModel


def models_to_records(models: Sequence[BaseModel]) -> list[dict[str, Any]]:
    """Dump models to flat JSON-compatible dicts (one level of nesting expanded)."""
    return [_flatten(m.model_dump(mode="json")) for m in models]


def export_to_csv(
    records: list[dict],
    path: Path,
    fieldnames: list[str] | None = None,
) -> Path:
    """Write ``records`` to a UTF-8 CSV file.

    Args:
        records:    List of row dicts.
        path:       Destination file path (parent dirs created if missing).
        fieldnames: Column order.  If None, uses the keys of the first record.

    Returns:
        ``path`` as written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    if not records:
        path.write_text("", encoding="utf-8")
        return path
    cols = fieldnames or list(records[0].keys())
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=cols, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(records)
    return path


def export_to_json(data: dict | list | BaseModel, path: Path) -> Path:
    """Write ``data`` (or a model / list of models) to a pretty-printed JSON file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(_jsonable(data), indent=2, default=str), encoding="utf-8")
    return path


def export_models(models: Sequence[BaseModel] | BaseModel, path: Path) -> Path:
    """Write engine output to ``path``, choosing CSV or JSON by extension."""
    if path.suffix.lower() == ".csv":
        items = [models] if isinstance(models, BaseModel) else list(models)
        return export_to_csv(models_to_records(items), path)
    return export_to_json(models, path)


def _jsonable(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json")
    if isinstance(data, (list, tuple)):
        return [_jsonable(d) for d in data]
    return data


def _flatten(record: dict[str, Any]) -> dict[str, Any]:
    flat: dict[str, Any] = {}
    for key, val in record.items():
        if isinstance(val, dict):
            for sub_key, sub_val in val.items():
                flat[f"{key}_{sub_key}"] = (
                    json.dumps(sub_val) if isinstance(sub_val, (dict, list)) else sub_val
                )
        elif isinstance(val, list):
            flat[key] = "; ".join(str(v) for v in val)
        else:
            flat[key] = val
    return flat
