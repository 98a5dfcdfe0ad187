from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .catalog import ACCESS_ITEMS
from .checkers import ACCESS_CHECKERS, project_answers
from .models import AccessChecklist, AccessItem, AccessItemStatus, AnswersByStep, ChecklistBase


log = logging.getLogger(__name__)

ALL_PROVIDED_TEXT = "All required access has been provided."
ALL_PROVIDED_SHORT_TEXT = "All access provided."


def evaluate_item(item: AccessItem, answers_by_step: Optional[AnswersByStep]) -> AccessItemStatus:
    """Run one item's checker pair; provision is only asked when relevant."""

    checker = ACCESS_CHECKERS[item.key]
    view = project_answers(answers_by_step, checker.reads)
    relevant = bool(checker.is_relevant(view))
    provided = bool(checker.is_provided(view)) if relevant else False
    return AccessItemStatus(
        key=item.key,
        label=item.label,
        short_label=item.short_label,
        description=item.description,
        what_we_need=item.what_we_need,
        relevant=relevant,
        provided=provided,
    )


def compute_access_checklist(
    answers_by_step: Optional[AnswersByStep],
    catalog: Sequence[AccessItem] = ACCESS_ITEMS,
) -> AccessChecklist:
    """Derive the access checklist from one answer snapshot.

    Pure: the snapshot is only read, and equal snapshots give equal checklists.
    """

    items = [evaluate_item(item, answers_by_step) for item in catalog]

    missing = [i for i in items if i.relevant and not i.provided]
    present = [i for i in items if i.relevant and i.provided]
    not_applicable = [i for i in items if not i.relevant]

    base = ChecklistBase(
        items=items,
        missing_count=len(missing),
        present_count=len(present),
        not_applicable_count=len(not_applicable),
        missing_keys=[i.key for i in missing],
        present_keys=[i.key for i in present],
    )
    log.debug(
        "access checklist: missing=%s present=%s n/a=%d",
        base.missing_keys,
        base.present_keys,
        base.not_applicable_count,
    )

    return AccessChecklist(
        items=base.items,
        missing_count=base.missing_count,
        present_count=base.present_count,
        not_applicable_count=base.not_applicable_count,
        missing_keys=base.missing_keys,
        present_keys=base.present_keys,
        missing_access_text=generate_missing_access_text(base),
    )


def _missing_items(checklist: ChecklistBase) -> List[AccessItemStatus]:
    return [item for item in checklist.items if item.relevant and not item.provided]


def generate_missing_access_text(checklist: ChecklistBase) -> str:
    """Plain-text access request, meant to be pasted into an email or chat."""

    missing = _missing_items(checklist)
    if not missing:
        return ALL_PROVIDED_TEXT

    items_list = "\n".join(f"• {item.label}" for item in missing)
    what_we_need_list = "\n".join(f"• {item.what_we_need}" for item in missing)

    return (
        "To complete the setup, we still need access to:\n\n"
        f"{items_list}\n\n"
        "Specifically, please provide:\n\n"
        f"{what_we_need_list}"
    )


def generate_short_missing_access_text(checklist: ChecklistBase) -> str:
    missing = _missing_items(checklist)
    if not missing:
        return ALL_PROVIDED_SHORT_TEXT
    return "Missing access: " + ", ".join(item.label for item in missing)
