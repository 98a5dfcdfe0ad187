from __future__ import annotations

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, List, Mapping, Optional, Union


AnswerValue = Union[None, str, bool, List[str]]
AnswerSet = Mapping[str, AnswerValue]
AnswersByStep = Mapping[str, AnswerSet]


@dataclass(frozen=True)
class AccessItem:
    """One third-party account the agency needs entry to."""

    key: str
    label: str
    short_label: str
    description: str
    what_we_need: str


@dataclass(frozen=True)
class AccessItemStatus(AccessItem):
    """Catalog entry evaluated against one client's answers."""

    relevant: bool
    provided: bool  # always False when not relevant


@dataclass
class ChecklistBase:
    items: List[AccessItemStatus]
    missing_count: int
    present_count: int
    not_applicable_count: int
    missing_keys: List[str]
    present_keys: List[str]


@dataclass
class AccessChecklist(ChecklistBase):
    """Checklist plus the rendered request message."""

    missing_access_text: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class SessionSummary:
    """One row of the admin session list."""

    id: str
    client_name: str
    status: str
    current_step: int
    last_saved_at: Optional[str]
    created_at: Optional[str]
    completed_steps: int
    total_steps: int
    progress_percent: int
    missing_count: int = 0
    present_count: int = 0
    not_applicable_count: int = 0
    missing_keys: List[str] = field(default_factory=list)
    present_keys: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
