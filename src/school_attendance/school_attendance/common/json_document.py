"""Read and write the key-value JSON document shared by the file-backed repositories."""
from __future__ import annotations

import json
import os
from pathlib import Path

from ..core.exceptions import ValidationError


def read_document(path: Path) -> dict:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Data file {path} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ValidationError(f"Data file {path} must contain a JSON object")
    return data


def write_document(path: Path, document: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)

    # Sibling temp file + os.replace.
    tmp_path = path.with_name(path.name + ".tmp")
    with tmp_path.open("w", encoding="utf-8") as f:
        json.dump(document, f, ensure_ascii=False, indent=4)
    os.replace(tmp_path, path)
