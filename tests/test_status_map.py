from datetime import datetime, timezone

import pytest

from impl.integrations.github import status_map as sm
from service_impl.github_service import DELETE_REPO_STATUS, LIST_PULLS_STATUS, LIST_REPOS_STATUS


NOW = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
RESET_IN_90S = str(int(NOW.timestamp()) + 90)


@pytest.mark.parametrize(
    "seconds, expected",
    [(0, "0s"), (-3, "0s"), (45, "45s"), (90, "1m30s"), (3600, "1h0m0s"), (3725, "1h2m5s")],
)
def test_format_duration(seconds, expected):
    assert sm.format_duration(seconds) == expected


def test_rate_limit_message_with_reset_header():
    msg = sm.rate_limit_message({"x-ratelimit-reset": RESET_IN_90S}, now=NOW)
    assert msg == "Exceeded rate limit. Try again in 1m30s"


def test_rate_limit_message_rounds_to_nearest_second():
    now = datetime.fromtimestamp(NOW.timestamp() + 0.4, tz=timezone.utc)
    msg = sm.rate_limit_message({"x-ratelimit-reset": RESET_IN_90S}, now=now)
    assert msg.endswith("1m30s")


@pytest.mark.parametrize("headers", [{}, {"x-ratelimit-reset": "soon"}])
def test_rate_limit_message_without_usable_reset(headers):
    assert sm.rate_limit_message(headers, now=NOW) == "Exceeded rate limit. Try again later"


def test_listed_status_maps_to_message():
    outcome = sm.resolve(LIST_REPOS_STATUS, 404, {})
    assert outcome == sm.Outcome(sm.OutcomeKind.FAILURE, 404, "User not found")


def test_unlisted_status_passes_code_through():
    outcome = sm.resolve(LIST_PULLS_STATUS, 502, {})
    assert outcome.kind is sm.OutcomeKind.FAILURE
    assert outcome.status == 502
    assert outcome.message == "Unexpected status code"


def test_status_override_for_delete():
    outcome = sm.resolve(DELETE_REPO_STATUS, 204, {})
    assert outcome.is_success
    assert outcome.status == 200


def test_forbidden_with_quota_left_is_authorization_failure():
    headers = {"x-ratelimit-remaining": "4999", "x-ratelimit-reset": RESET_IN_90S}
    outcome = sm.resolve(DELETE_REPO_STATUS, 403, headers, now=NOW)
    assert outcome == sm.Outcome(sm.OutcomeKind.FAILURE, 403, "Not authorized")


def test_forbidden_with_exhausted_quota_is_rate_limit():
    headers = {"x-ratelimit-remaining": "0", "x-ratelimit-reset": RESET_IN_90S}
    outcome = sm.resolve(DELETE_REPO_STATUS, 403, headers, now=NOW)
    assert outcome.kind is sm.OutcomeKind.RATE_LIMITED
    assert outcome.message == "Exceeded rate limit. Try again in 1m30s"


def test_forbidden_without_quota_header_is_authorization_failure():
    outcome = sm.resolve(DELETE_REPO_STATUS, 403, {})
    assert outcome.message == "Not authorized"


def test_too_many_requests_is_rate_limit_everywhere():
    outcome = sm.resolve(LIST_REPOS_STATUS, 429, {"x-ratelimit-reset": RESET_IN_90S}, now=NOW)
    assert outcome.kind is sm.OutcomeKind.RATE_LIMITED
    assert outcome.status == 429
