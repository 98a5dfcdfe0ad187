from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from .checklist import compute_access_checklist
from .models import SessionSummary


log = logging.getLogger(__name__)

ACCESS_FILTERS = ("all", "missing", "complete")


def _row_sort_key(row: Mapping[str, Any]) -> str:
    # ISO-8601 timestamps sort lexically; rows without one go first.
    return str(row.get("updated_at") or "")


def group_answers_by_step(rows: Iterable[Mapping[str, Any]]) -> Dict[str, Dict[str, Any]]:
    """Fold persisted answer rows (one per step) into an answer snapshot.

    Rows are applied oldest first so the most recent save of a step wins.
    """

    valid: List[Mapping[str, Any]] = []
    for row in rows:
        if not isinstance(row, Mapping):
            log.warning("Skipping answer row that is not an object: %r", row)
            continue
        step_key = row.get("step_key")
        answers = row.get("answers")
        if not step_key or not isinstance(answers, Mapping):
            log.warning("Skipping answer row without step_key/answers: %r", step_key)
            continue
        valid.append(row)

    answers_by_step: Dict[str, Dict[str, Any]] = {}
    for row in sorted(valid, key=_row_sort_key):
        answers_by_step[str(row["step_key"])] = dict(row["answers"])
    return answers_by_step


def count_completed_steps(rows: Iterable[Mapping[str, Any]]) -> int:
    completed = {
        row.get("step_key")
        for row in rows
        if isinstance(row, Mapping) and row.get("step_key") and row.get("completed") is True
    }
    return len(completed)


def _client_field(session: Mapping[str, Any], name: str) -> Optional[str]:
    clients = session.get("clients")
    if isinstance(clients, list):
        clients = clients[0] if clients else None
    if isinstance(clients, Mapping):
        return clients.get(name) or None
    return session.get(name) or None


def _as_int(value: Any, name: str) -> int:
    if value is None or value == "":
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        log.warning("Non-numeric %s %r; using 0", name, value)
        return 0


def summarize_session(
    session: Mapping[str, Any],
    rows: Iterable[Mapping[str, Any]],
    total_steps: int,
) -> SessionSummary:
    rows = list(rows)
    completed = count_completed_steps(rows)
    progress = round(completed / total_steps * 100) if total_steps > 0 else 0
    checklist = compute_access_checklist(group_answers_by_step(rows))

    return SessionSummary(
        id=str(session.get("id") or ""),
        client_name=_client_field(session, "client_name") or "Unknown Client",
        status=str(session.get("status") or "draft"),
        current_step=_as_int(session.get("current_step"), "current_step"),
        last_saved_at=session.get("last_saved_at"),
        created_at=session.get("created_at"),
        completed_steps=completed,
        total_steps=total_steps,
        progress_percent=progress,
        missing_count=checklist.missing_count,
        present_count=checklist.present_count,
        not_applicable_count=checklist.not_applicable_count,
        missing_keys=list(checklist.missing_keys),
        present_keys=list(checklist.present_keys),
    )


def summarize_sessions(
    sessions: Iterable[Mapping[str, Any]],
    rows: Iterable[Mapping[str, Any]],
    total_steps: int,
) -> List[SessionSummary]:
    """Summaries for the admin list; `rows` may mix answers of many sessions."""

    by_session: Dict[str, List[Mapping[str, Any]]] = {}
    for row in rows:
        if isinstance(row, Mapping) and row.get("session_id"):
            by_session.setdefault(str(row["session_id"]), []).append(row)

    return [
        summarize_session(s, by_session.get(str(s.get("id")), []), total_steps)
        for s in sessions
    ]


_FRACTION_RE = re.compile(r"\.(\d+)")


def _timestamp(value: Optional[str]) -> float:
    if not value:
        return 0.0
    text = str(value).replace("Z", "+00:00")
    # Postgres writes 1-6 fraction digits; fromisoformat before 3.11 needs 3 or 6
    text = _FRACTION_RE.sub(lambda m: "." + m.group(1).ljust(6, "0")[:6], text, count=1)
    try:
        return datetime.fromisoformat(text).timestamp()
    except ValueError:
        log.warning("Unparseable timestamp %r; sorting it last", value)
        return 0.0


def sort_sessions(summaries: Iterable[SessionSummary]) -> List[SessionSummary]:
    """Active sessions first, then most recently saved, then most recently created."""

    return sorted(
        summaries,
        key=lambda s: (
            s.status == "submitted",
            -_timestamp(s.last_saved_at),
            -_timestamp(s.created_at),
        ),
    )


def filter_sessions(summaries: Iterable[SessionSummary], access_filter: str = "all") -> List[SessionSummary]:
    if access_filter not in ACCESS_FILTERS:
        raise ValueError(f"Unknown access filter {access_filter!r}; expected one of {ACCESS_FILTERS}")
    if access_filter == "missing":
        return [s for s in summaries if s.missing_count > 0]
    if access_filter == "complete":
        return [s for s in summaries if s.missing_count == 0]
    return list(summaries)
