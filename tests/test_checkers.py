import pytest

from onboarding_access.checkers import (
    ACCESS_CHECKERS,
    has_any_string,
    has_granted_value,
    has_value,
    is_unanswered,
    project_answers,
)


def relevant(key, answers):
    return ACCESS_CHECKERS[key].is_relevant(answers)


def provided(key, answers):
    return ACCESS_CHECKERS[key].is_provided(answers)


def test_helpers_tolerate_missing_answers():
    assert has_any_string(None, ["x"]) is False
    assert has_value(None, "x", "yes") is False
    assert has_granted_value(None, "x") is False
    assert is_unanswered(None, "x") is True


@pytest.mark.parametrize("value", [None, "", "   ", []])
def test_is_unanswered_blank_values(value):
    assert is_unanswered({"f": value}, "f") is True


@pytest.mark.parametrize("value", ["yes", False, ["a"]])
def test_is_unanswered_real_values(value):
    assert is_unanswered({"f": value}, "f") is False


@pytest.mark.parametrize("value,expected", [("granted", True), ("will_do", True), ("not_yet", False), (True, False)])
def test_has_granted_value(value, expected):
    assert has_granted_value({"f": value}, "f") is expected


def test_has_any_string():
    assert has_any_string({"ids": "  "}, ["ids"]) is False
    assert has_any_string({"ids": "123"}, ["ids"]) is True
    assert has_any_string({"ids": True}, ["ids"]) is False


@pytest.mark.parametrize(
    "value,expected",
    [(["123"], True), (("", "456"), True), ([], False), (["", "  "], False), ([1, None], False)],
)
def test_has_any_string_accepts_lists_of_text(value, expected):
    assert has_any_string({"ids": value}, ["ids"]) is expected


# wordpress


@pytest.mark.parametrize("platform", [None, "wordpress", "not_sure", "shopify"])
def test_wordpress_is_relevant_for_any_platform(platform):
    answers = {} if platform is None else {"website_platform": {"website_platform": platform}}
    assert relevant("wordpress", answers) is True


@pytest.mark.parametrize("value,expected", [("granted", True), ("will_do", True), ("not_wordpress", True), ("not_yet", False), (None, False)])
def test_wordpress_provided(value, expected):
    assert provided("wordpress", {"website_access": {"wordpress_access_granted": value}}) is expected


def test_wordpress_ignores_platform_answer():
    assert ("website_platform", "website_platform") not in ACCESS_CHECKERS["wordpress"].reads
    answers = {"website_platform": {"website_platform": "shopify"}}
    assert provided("wordpress", answers) is False
    answers["website_access"] = {"wordpress_access_granted": "not_wordpress"}
    assert provided("wordpress", answers) is True


# domain / dns


@pytest.mark.parametrize(
    "answers,expected",
    [
        ({}, True),
        ({"domain_website": {}}, True),
        ({"domain_website": {"owns_domain": ""}}, True),
        ({"domain_website": {"owns_domain": "yes"}}, True),
        ({"domain_website": {"owns_domain": "not_sure"}}, True),
        ({"domain_website": {"owns_domain": "no"}}, False),
    ],
)
def test_domain_relevant(answers, expected):
    assert relevant("domain", answers) is expected


@pytest.mark.parametrize("value,expected", [("granted", True), ("will_share_login", True), ("not_yet", False)])
def test_domain_provided(value, expected):
    assert provided("domain", {"website_access": {"domain_registrar_access": value}}) is expected


@pytest.mark.parametrize(
    "answers,expected",
    [
        ({}, True),
        ({"domain_website": {"controls_dns": "yes"}}, True),
        ({"domain_website": {"controls_dns": "not_sure"}}, True),
        ({"domain_website": {"controls_dns": "no"}}, False),
        ({"domain_website": {"owns_domain": "no"}}, True),
    ],
)
def test_dns_relevant(answers, expected):
    assert relevant("dns", answers) is expected


@pytest.mark.parametrize("value,expected", [("will_do", True), ("same_as_domain", True), ("not_yet", False)])
def test_dns_provided(value, expected):
    assert provided("dns", {"website_access": {"dns_access_granted": value}}) is expected


# gsc / ga


@pytest.mark.parametrize("key", ["gsc", "ga"])
def test_google_items_always_relevant(key):
    assert relevant(key, {}) is True
    assert relevant(key, {"google_access": {"has_google_analytics": "no"}}) is True


@pytest.mark.parametrize("value,expected", [("granted", True), ("not_setup", True), ("not_yet", False), (None, False)])
def test_gsc_provided(value, expected):
    assert provided("gsc", {"google_access": {"gsc_access_granted": value}}) is expected


def test_ga_provided():
    assert provided("ga", {"google_access": {"ga_access_granted": "granted"}}) is True
    assert provided("ga", {"google_access": {"ga_access_granted": "not_setup"}}) is True
    assert provided("ga", {"google_access": {"has_google_analytics": "no"}}) is True
    assert provided("ga", {"google_access": {"has_google_analytics": "yes"}}) is False
    assert provided("ga", {}) is False


# gbp


@pytest.mark.parametrize(
    "value,expected",
    [(None, True), ("yes", True), ("not_sure", True), ("no", False)],
)
def test_gbp_relevant(value, expected):
    answers = {} if value is None else {"google_business": {"has_gbp": value}}
    assert relevant("gbp", answers) is expected


@pytest.mark.parametrize("value,expected", [("granted", True), ("no_gbp", True), ("not_yet", False)])
def test_gbp_provided(value, expected):
    assert provided("gbp", {"google_access": {"gbp_access_granted": value}}) is expected


# youtube / lsa


@pytest.mark.parametrize(
    "answers,expected",
    [({}, False), ({"other_access": {}}, False), ({"other_access": {"has_youtube": "no"}}, False), ({"other_access": {"has_youtube": "yes"}}, True)],
)
def test_youtube_relevant_only_when_affirmed(answers, expected):
    assert relevant("youtube", answers) is expected


def test_youtube_provided():
    assert provided("youtube", {"other_access": {"youtube_access_granted": "granted"}}) is True
    assert provided("youtube", {"other_access": {"has_youtube": "no"}}) is True
    assert provided("youtube", {"other_access": {"has_youtube": "yes"}}) is False


def test_lsa_relevant_only_when_affirmed():
    assert relevant("lsa", {}) is False
    assert relevant("lsa", {"other_access": {"has_lsa": "no"}}) is False
    assert relevant("lsa", {"other_access": {"has_lsa": "yes"}}) is True


def test_lsa_provided_needs_customer_ids():
    assert provided("lsa", {"other_access": {"has_lsa": "yes", "lsa_customer_ids": "111-222-3333"}}) is True
    assert provided("lsa", {"other_access": {"has_lsa": "yes", "lsa_customer_ids": " "}}) is False
    assert provided("lsa", {"other_access": {"has_lsa": "no"}}) is True


def test_lsa_provided_with_list_of_customer_ids():
    assert provided("lsa", {"other_access": {"has_lsa": "yes", "lsa_customer_ids": ["111", "222"]}}) is True
    assert provided("lsa", {"other_access": {"has_lsa": "yes", "lsa_customer_ids": []}}) is False


@pytest.mark.parametrize("key", list(ACCESS_CHECKERS))
@pytest.mark.parametrize("answers", [{}, None, {"website_access": None, "google_access": "oops", "other_access": []}])
def test_checkers_never_raise_on_malformed_input(key, answers):
    checker = ACCESS_CHECKERS[key]
    assert isinstance(checker.is_relevant(answers), bool)
    assert isinstance(checker.is_provided(answers), bool)


def test_project_answers_keeps_only_declared_fields():
    answers = {
        "domain_website": {"owns_domain": "yes", "domain_registrar": "GoDaddy"},
        "website_access": {"domain_registrar_access": "granted", "dns_access_granted": "granted"},
        "google_access": {"gsc_access_granted": "granted"},
    }
    view = project_answers(answers, ACCESS_CHECKERS["domain"].reads)
    assert view == {
        "domain_website": {"owns_domain": "yes"},
        "website_access": {"domain_registrar_access": "granted"},
    }


def test_project_answers_copies_lists():
    ids = ["a", "b"]
    view = project_answers({"other_access": {"lsa_customer_ids": ids}}, [("other_access", "lsa_customer_ids")])
    view["other_access"]["lsa_customer_ids"].append("c")
    assert ids == ["a", "b"]


def test_project_answers_leaves_unanswered_steps_absent():
    assert project_answers({}, ACCESS_CHECKERS["gbp"].reads) == {}
