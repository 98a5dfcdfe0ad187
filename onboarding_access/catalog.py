from __future__ import annotations

from typing import Tuple

from .models import AccessItem


# Order matters: checklist items, key lists and the request text follow it.
# The checkers in checkers.py read fields by exact step/field name; keep them in
# lockstep with steps.py (see steps.check_field_references).
ACCESS_ITEMS: Tuple[AccessItem, ...] = (
    AccessItem(
        key="wordpress",
        label="WordPress Admin",
        short_label="WP",
        description="WordPress Administrator access",
        what_we_need="Add keith@clixsy.com as an Administrator",
    ),
    AccessItem(
        key="domain",
        label="Domain Registrar",
        short_label="Domain",
        description="Domain registrar delegate access",
        what_we_need="Delegate access to corey@clixsy.com (e.g., GoDaddy)",
    ),
    AccessItem(
        key="dns",
        label="DNS Access",
        short_label="DNS",
        description="DNS provider access (e.g., Cloudflare)",
        what_we_need="Add tempclixsyreports@gmail.com to DNS provider",
    ),
    AccessItem(
        key="gsc",
        label="Google Search Console",
        short_label="GSC",
        description="Google Search Console Owner access",
        what_we_need="Add tempclixsyreports@gmail.com as an Owner",
    ),
    AccessItem(
        key="ga",
        label="Google Analytics",
        short_label="GA",
        description="Google Analytics Owner access",
        what_we_need="Add tempclixsyreports@gmail.com as an Owner",
    ),
    AccessItem(
        key="gbp",
        label="Google Business Profile",
        short_label="GBP",
        description="Google Business Profile Owner access",
        what_we_need="Add tempclixsyreports@gmail.com as an Owner",
    ),
    AccessItem(
        key="youtube",
        label="YouTube",
        short_label="YT",
        description="YouTube channel Manager access",
        what_we_need="Add tempclixsyreports@gmail.com as a Manager",
    ),
    AccessItem(
        key="lsa",
        label="Local Services Ads",
        short_label="LSA",
        description="Local Services Ads Customer ID",
        what_we_need="Provide Customer ID Number(s) for LSA access request",
    ),
)

ACCESS_KEYS: Tuple[str, ...] = tuple(item.key for item in ACCESS_ITEMS)


def get_access_item(key: str) -> AccessItem:
    for item in ACCESS_ITEMS:
        if item.key == key:
            return item
    raise KeyError(f"Unknown access item: {key!r}")
