from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple


@dataclass(frozen=True)
class FieldDefinition:
    name: str
    label: str
    type: str  # text / textarea / radio / select
    options: Tuple[str, ...] = ()


@dataclass(frozen=True)
class StepDefinition:
    """One wizard step whose answers feed the access checklist."""

    key: str
    title: str
    fields: Tuple[FieldDefinition, ...]

    def field(self, name: str) -> Optional[FieldDefinition]:
        for f in self.fields:
            if f.name == name:
                return f
        return None


YES_NO_UNSURE = ("yes", "no", "not_sure")
GRANT_STATUSES = ("granted", "will_do", "not_yet")


ACCESS_STEPS: Tuple[StepDefinition, ...] = (
    StepDefinition(
        key="website_platform",
        title="Website Platform",
        fields=(
            FieldDefinition(
                "website_platform",
                "What platform is your website built on?",
                "select",
                ("wordpress", "shopify", "webflow", "wix", "squarespace", "custom", "other", "not_sure"),
            ),
        ),
    ),
    StepDefinition(
        key="domain_website",
        title="Domain & Website",
        fields=(
            FieldDefinition("owns_domain", "Do you own your domain?", "radio", YES_NO_UNSURE),
            FieldDefinition("controls_dns", "Do you control your DNS?", "radio", YES_NO_UNSURE),
            FieldDefinition("domain_registrar", "Domain Registrar", "text"),
            FieldDefinition("dns_provider", "DNS Provider", "text"),
        ),
    ),
    StepDefinition(
        key="website_access",
        title="Website Access",
        fields=(
            FieldDefinition(
                "wordpress_access_granted",
                "Have you added us as a WordPress Administrator?",
                "radio",
                GRANT_STATUSES + ("not_wordpress",),
            ),
            FieldDefinition(
                "domain_registrar_access",
                "Have you delegated domain registrar access?",
                "radio",
                GRANT_STATUSES + ("will_share_login",),
            ),
            FieldDefinition(
                "dns_access_granted",
                "Have you granted DNS access?",
                "radio",
                GRANT_STATUSES + ("same_as_domain",),
            ),
        ),
    ),
    StepDefinition(
        key="google_access",
        title="Google Access",
        fields=(
            FieldDefinition(
                "gsc_access_granted",
                "Have you added us as a Search Console Owner?",
                "radio",
                GRANT_STATUSES + ("not_setup",),
            ),
            FieldDefinition("has_google_analytics", "Do you have Google Analytics?", "radio", YES_NO_UNSURE),
            FieldDefinition(
                "ga_access_granted",
                "Have you added us as an Analytics Owner?",
                "radio",
                GRANT_STATUSES + ("not_setup",),
            ),
            FieldDefinition(
                "gbp_access_granted",
                "Have you added us as a Business Profile Owner?",
                "radio",
                GRANT_STATUSES + ("no_gbp",),
            ),
        ),
    ),
    StepDefinition(
        key="google_business",
        title="Google Business Profile",
        fields=(
            FieldDefinition("has_gbp", "Do you have a Google Business Profile?", "radio", YES_NO_UNSURE),
            FieldDefinition("gbp_listing_urls", "GBP Listing URL(s)", "textarea"),
        ),
    ),
    StepDefinition(
        key="other_access",
        title="Other Platforms",
        fields=(
            FieldDefinition("has_youtube", "Do you have a YouTube channel?", "radio", ("yes", "no")),
            FieldDefinition(
                "youtube_access_granted",
                "Have you added us as a YouTube Manager?",
                "radio",
                GRANT_STATUSES,
            ),
            FieldDefinition("has_lsa", "Do you run Local Services Ads?", "radio", ("yes", "no")),
            FieldDefinition("lsa_customer_ids", "LSA Customer ID(s)", "textarea"),
        ),
    ),
)


def get_step(key: str) -> Optional[StepDefinition]:
    for step in ACCESS_STEPS:
        if step.key == key:
            return step
    return None


def field_exists(step_key: str, field_name: str) -> bool:
    step = get_step(step_key)
    return step is not None and step.field(field_name) is not None


def check_field_references(references: Iterable[Tuple[str, str]]) -> List[str]:
    """Return "step.field" for every reference missing from ACCESS_STEPS.

    An empty list means the checkers and the question steps agree on names.
    """

    stale: List[str] = []
    for step_key, field_name in references:
        if not field_exists(step_key, field_name):
            ref = f"{step_key}.{field_name}"
            if ref not in stale:
                stale.append(ref)
    return stale
