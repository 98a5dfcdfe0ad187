import copy

import pytest


FULLY_PROVIDED = {
    "website_platform": {"website_platform": "wordpress"},
    "domain_website": {"owns_domain": "yes", "controls_dns": "yes"},
    "website_access": {
        "wordpress_access_granted": "granted",
        "domain_registrar_access": "granted",
        "dns_access_granted": "granted",
    },
    "google_access": {
        "gsc_access_granted": "granted",
        "has_google_analytics": "yes",
        "ga_access_granted": "granted",
        "gbp_access_granted": "granted",
    },
    "google_business": {"has_gbp": "yes"},
    "other_access": {
        "has_youtube": "yes",
        "youtube_access_granted": "granted",
        "has_lsa": "yes",
        "lsa_customer_ids": "123-456-7890",
    },
}


@pytest.fixture
def fully_provided():
    return copy.deepcopy(FULLY_PROVIDED)


@pytest.fixture
def session_rows():
    return [
        {
            "session_id": "s1",
            "step_key": "domain_website",
            "answers": {"owns_domain": "no", "controls_dns": "yes"},
            "completed": True,
            "updated_at": "2026-01-02T10:00:00+00:00",
        },
        {
            "session_id": "s1",
            "step_key": "domain_website",
            "answers": {"owns_domain": "yes", "controls_dns": "no"},
            "completed": True,
            "updated_at": "2026-01-01T10:00:00+00:00",
        },
        {
            "session_id": "s1",
            "step_key": "google_business",
            "answers": {"has_gbp": "no"},
            "completed": False,
            "updated_at": "2026-01-02T11:00:00+00:00",
        },
    ]
