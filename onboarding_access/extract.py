from __future__ import annotations

import json
import zipfile
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

import openpyxl
from openpyxl.utils.exceptions import InvalidFileException

from .sessions import group_answers_by_step


log = logging.getLogger(__name__)


@dataclass
class ColumnMap:
    """Column mapping for an answers export workbook."""

    step_col: int = 1   # A
    field_col: int = 2  # B
    value_col: int = 3  # C


def norm_str(v) -> str:
    if v is None:
        return ""
    return str(v).strip()


def norm_value(v) -> Any:
    """Cell value -> answer value (bool kept, multi-line text -> list)."""

    if v is None or isinstance(v, bool):
        return v
    s = norm_str(v)
    if "\n" in s:
        return [part.strip() for part in s.splitlines() if part.strip()]
    return s


def load_answers_json(path: str) -> Dict[str, Dict[str, Any]]:
    """Accepts a snapshot object, {"answers": [rows]} or a bare list of rows."""

    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"{path} is not valid JSON: {e}") from e

    if isinstance(data, dict) and isinstance(data.get("answers"), list):
        data = data["answers"]
    if isinstance(data, list):
        return group_answers_by_step(data)
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain an object keyed by step or a list of answer rows")

    answers_by_step: Dict[str, Dict[str, Any]] = {}
    for step_key, answers in data.items():
        if not isinstance(answers, dict):
            raise ValueError(f"Answers for step {step_key!r} must be an object")
        answers_by_step[step_key] = answers
    return answers_by_step


def load_answers_xlsx(path: str, colmap: ColumnMap | None = None) -> Dict[str, Dict[str, Any]]:
    """Read step/field/value rows from the first sheet of an export."""

    colmap = colmap or ColumnMap()
    try:
        wb = openpyxl.load_workbook(path, read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError) as e:
        # KeyError: a zip archive without the workbook parts
        raise ValueError(f"{path} is not a readable XLSX workbook: {e}") from e
    try:
        ws = wb.worksheets[0]
        answers_by_step: Dict[str, Dict[str, Any]] = {}
        for r, row in enumerate(ws.iter_rows(values_only=True), start=1):
            cells = list(row) + [None] * max(0, colmap.value_col - len(row))
            step_key = norm_str(cells[colmap.step_col - 1])
            field_name = norm_str(cells[colmap.field_col - 1])

            # Skip header and completely empty rows
            if step_key.lower() == "step_key" or (not step_key and not field_name):
                continue
            if not step_key or not field_name:
                log.warning("Row %d of %s has no step or field name; skipped", r, path)
                continue

            answers_by_step.setdefault(step_key, {})[field_name] = norm_value(cells[colmap.value_col - 1])
    finally:
        wb.close()
    return answers_by_step


def load_answers(path: str) -> Dict[str, Dict[str, Any]]:
    suffix = Path(path).suffix.lower()
    if suffix == ".json":
        return load_answers_json(path)
    if suffix == ".xlsx":
        return load_answers_xlsx(path)
    raise ValueError(f"Unsupported answers file type {suffix!r}; use .json or .xlsx")
