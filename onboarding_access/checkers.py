from __future__ import annotations

from dataclasses import dataclass
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from .models import AnswersByStep
from .steps import check_field_references


GRANTED_VALUES = ("granted", "will_do")

Predicate = Callable[[AnswersByStep], bool]


def _step(answers_by_step: Optional[AnswersByStep], step_key: str) -> Optional[Mapping[str, Any]]:
    if not isinstance(answers_by_step, Mapping):
        return None
    step = answers_by_step.get(step_key)
    if not isinstance(step, Mapping):
        return None
    return step


def is_unanswered(answers: Optional[Mapping[str, Any]], key: str) -> bool:
    if not isinstance(answers, Mapping):
        return True
    value = answers.get(key)
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


def _non_blank(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip() != ""
    if isinstance(value, (list, tuple)):
        return any(isinstance(v, str) and v.strip() != "" for v in value)
    return False


def has_any_string(answers: Optional[Mapping[str, Any]], keys: Sequence[str]) -> bool:
    """True when any key holds non-blank text (a string or a list of strings)."""

    if not isinstance(answers, Mapping):
        return False
    return any(_non_blank(answers.get(k)) for k in keys)


def has_value(answers: Optional[Mapping[str, Any]], key: str, target: str) -> bool:
    if not isinstance(answers, Mapping):
        return False
    return answers.get(key) == target


def has_granted_value(answers: Optional[Mapping[str, Any]], key: str) -> bool:
    if not isinstance(answers, Mapping):
        return False
    return answers.get(key) in GRANTED_VALUES


def _yes_unsure_or_unanswered(answers: Optional[Mapping[str, Any]], key: str) -> bool:
    return (
        has_value(answers, key, "yes")
        or has_value(answers, key, "not_sure")
        or is_unanswered(answers, key)
    )


def _always(answers_by_step: AnswersByStep) -> bool:
    return True


@dataclass(frozen=True)
class AccessChecker:
    """Relevance/provision predicates for one access item.

    `reads` lists every (step_key, field_name) the predicates look at; the
    aggregator hands them a view restricted to exactly those fields.
    """

    reads: Tuple[Tuple[str, str], ...]
    is_relevant: Predicate
    is_provided: Predicate


# wordpress ---------------------------------------------------------------
# A non-WordPress platform answer keeps the item in scope until the client
# confirms "not_wordpress" on the access step.

def _wordpress_provided(answers_by_step: AnswersByStep) -> bool:
    access = _step(answers_by_step, "website_access")
    return (
        has_granted_value(access, "wordpress_access_granted")
        or has_value(access, "wordpress_access_granted", "not_wordpress")
    )


# domain ------------------------------------------------------------------

def _domain_relevant(answers_by_step: AnswersByStep) -> bool:
    return _yes_unsure_or_unanswered(_step(answers_by_step, "domain_website"), "owns_domain")


def _domain_provided(answers_by_step: AnswersByStep) -> bool:
    access = _step(answers_by_step, "website_access")
    return (
        has_granted_value(access, "domain_registrar_access")
        or has_value(access, "domain_registrar_access", "will_share_login")
    )


# dns ---------------------------------------------------------------------

def _dns_relevant(answers_by_step: AnswersByStep) -> bool:
    return _yes_unsure_or_unanswered(_step(answers_by_step, "domain_website"), "controls_dns")


def _dns_provided(answers_by_step: AnswersByStep) -> bool:
    access = _step(answers_by_step, "website_access")
    return (
        has_granted_value(access, "dns_access_granted")
        or has_value(access, "dns_access_granted", "same_as_domain")
    )


# gsc / ga ----------------------------------------------------------------
# "not_setup" counts as handled for now.

def _gsc_provided(answers_by_step: AnswersByStep) -> bool:
    access = _step(answers_by_step, "google_access")
    return (
        has_granted_value(access, "gsc_access_granted")
        or has_value(access, "gsc_access_granted", "not_setup")
    )


def _ga_provided(answers_by_step: AnswersByStep) -> bool:
    access = _step(answers_by_step, "google_access")
    return (
        has_granted_value(access, "ga_access_granted")
        or has_value(access, "ga_access_granted", "not_setup")
        or has_value(access, "has_google_analytics", "no")
    )


# gbp ---------------------------------------------------------------------

def _gbp_relevant(answers_by_step: AnswersByStep) -> bool:
    return _yes_unsure_or_unanswered(_step(answers_by_step, "google_business"), "has_gbp")


def _gbp_provided(answers_by_step: AnswersByStep) -> bool:
    access = _step(answers_by_step, "google_access")
    return (
        has_granted_value(access, "gbp_access_granted")
        or has_value(access, "gbp_access_granted", "no_gbp")
    )


# youtube / lsa -----------------------------------------------------------
# Opt-in: most clients have neither, so an unanswered question means "not relevant".

def _youtube_relevant(answers_by_step: AnswersByStep) -> bool:
    return has_value(_step(answers_by_step, "other_access"), "has_youtube", "yes")


def _youtube_provided(answers_by_step: AnswersByStep) -> bool:
    access = _step(answers_by_step, "other_access")
    return (
        has_granted_value(access, "youtube_access_granted")
        or has_value(access, "has_youtube", "no")
    )


def _lsa_relevant(answers_by_step: AnswersByStep) -> bool:
    return has_value(_step(answers_by_step, "other_access"), "has_lsa", "yes")


def _lsa_provided(answers_by_step: AnswersByStep) -> bool:
    access = _step(answers_by_step, "other_access")
    return has_any_string(access, ["lsa_customer_ids"]) or has_value(access, "has_lsa", "no")


ACCESS_CHECKERS: Mapping[str, AccessChecker] = MappingProxyType({
    # website_platform is deliberately not read: only the access step answer decides WordPress.
    "wordpress": AccessChecker(
        reads=(("website_access", "wordpress_access_granted"),),
        is_relevant=_always,
        is_provided=_wordpress_provided,
    ),
    "domain": AccessChecker(
        reads=(
            ("domain_website", "owns_domain"),
            ("website_access", "domain_registrar_access"),
        ),
        is_relevant=_domain_relevant,
        is_provided=_domain_provided,
    ),
    "dns": AccessChecker(
        reads=(
            ("domain_website", "controls_dns"),
            ("website_access", "dns_access_granted"),
        ),
        is_relevant=_dns_relevant,
        is_provided=_dns_provided,
    ),
    "gsc": AccessChecker(
        reads=(("google_access", "gsc_access_granted"),),
        is_relevant=_always,
        is_provided=_gsc_provided,
    ),
    "ga": AccessChecker(
        reads=(
            ("google_access", "ga_access_granted"),
            ("google_access", "has_google_analytics"),
        ),
        is_relevant=_always,
        is_provided=_ga_provided,
    ),
    "gbp": AccessChecker(
        reads=(
            ("google_business", "has_gbp"),
            ("google_access", "gbp_access_granted"),
        ),
        is_relevant=_gbp_relevant,
        is_provided=_gbp_provided,
    ),
    "youtube": AccessChecker(
        reads=(
            ("other_access", "has_youtube"),
            ("other_access", "youtube_access_granted"),
        ),
        is_relevant=_youtube_relevant,
        is_provided=_youtube_provided,
    ),
    "lsa": AccessChecker(
        reads=(
            ("other_access", "has_lsa"),
            ("other_access", "lsa_customer_ids"),
        ),
        is_relevant=_lsa_relevant,
        is_provided=_lsa_provided,
    ),
})


def project_answers(answers_by_step: Optional[AnswersByStep], reads: Sequence[Tuple[str, str]]) -> Dict[str, Dict[str, Any]]:
    """Copy only the declared fields out of a snapshot.

    Steps that were never answered stay absent so "step missing" and
    "field missing" keep meaning the same thing to the predicates.
    """

    view: Dict[str, Dict[str, Any]] = {}
    for step_key, field_name in reads:
        step = _step(answers_by_step, step_key)
        if step is None:
            continue
        bucket = view.setdefault(step_key, {})
        if field_name in step:
            value = step[field_name]
            bucket[field_name] = list(value) if isinstance(value, (list, tuple)) else value
    return view


def field_references() -> List[Tuple[str, str]]:
    refs: List[Tuple[str, str]] = []
    for checker in ACCESS_CHECKERS.values():
        for ref in checker.reads:
            if ref not in refs:
                refs.append(ref)
    return refs


def stale_field_references() -> List[str]:
    return check_field_references(field_references())
