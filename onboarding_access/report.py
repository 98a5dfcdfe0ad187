from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any, Dict

from .checklist import generate_short_missing_access_text
from .models import AccessChecklist, AccessItemStatus


def item_status(item: AccessItemStatus) -> str:
    if not item.relevant:
        return "NOT_APPLICABLE"
    return "PRESENT" if item.provided else "MISSING"


def build_summary(checklist: AccessChecklist) -> Dict[str, Any]:
    return {
        "total_items": len(checklist.items),
        "missing_count": checklist.missing_count,
        "present_count": checklist.present_count,
        "not_applicable_count": checklist.not_applicable_count,
        "missing_keys": list(checklist.missing_keys),
        "present_keys": list(checklist.present_keys),
        "missing_access_text": checklist.missing_access_text,
        "short_text": generate_short_missing_access_text(checklist),
    }


def write_report(checklist: AccessChecklist, out_dir: str) -> Dict[str, Any]:
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)

    report_path = out / "access_report.csv"
    summary_path = out / "summary.json"

    fieldnames = [
        "key",
        "label",
        "short_label",
        "relevant",
        "provided",
        "status",
        "what_we_need",
    ]

    with report_path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fieldnames)
        w.writeheader()
        for item in checklist.items:
            w.writerow(
                {
                    "key": item.key,
                    "label": item.label,
                    "short_label": item.short_label,
                    "relevant": item.relevant,
                    "provided": item.provided,
                    "status": item_status(item),
                    "what_we_need": item.what_we_need,
                }
            )

    summary = build_summary(checklist)
    summary_path.write_text(json.dumps(summary, ensure_ascii=False, indent=2), encoding="utf-8")

    return {
        "report_csv": str(report_path),
        "summary_json": str(summary_path),
        "summary": summary,
    }
