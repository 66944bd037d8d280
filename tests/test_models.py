from datetime import datetime, timedelta, timezone

import pytest

from reviewassign.errors import IncorrectIdError
from reviewassign.models import (
    PrStatus,
    PullRequest,
    Stats,
    Team,
    User,
    UserReviews,
    format_optional_time,
    format_time,
    normalize_id,
)


def test_format_time_utc_rfc3339():
    moment = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    assert format_time(moment) == "2024-01-02T03:04:05Z"


def test_format_time_converts_to_utc():
    local = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone(timedelta(hours=3)))
    assert format_time(local) == format_time(local.astimezone(timezone.utc))
    assert format_time(local).endswith("Z")


def test_format_time_round_trip_drops_fraction():
    moment = datetime(2025, 3, 9, 23, 59, 58, 123456, tzinfo=timezone.utc)
    text = format_time(moment)
    parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    assert parsed == moment.replace(microsecond=0)


def test_format_time_naive_is_utc():
    naive = datetime(2023, 7, 4, 8, 30, 0)
    assert format_time(naive) == format_time(naive.replace(tzinfo=timezone.utc))


def test_format_optional_time():
    moment = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    assert format_optional_time(None) is None
    assert format_optional_time(moment) == format_time(moment)


@pytest.mark.parametrize("raw", ["pr1", "  pr1", "pr1\t", "\n pr1 \n"])
def test_normalize_id_strips(raw):
    assert normalize_id(raw, "pull_request_id") == "pr1"


@pytest.mark.parametrize("raw", ["", "   ", "\t\n"])
def test_normalize_id_rejects_blank(raw):
    with pytest.raises(IncorrectIdError) as info:
        normalize_id(raw, "author_id")
    assert info.value.field == "author_id"
    assert str(info.value) == "incorrect id error: author_id is empty"


def test_pr_status_values():
    assert PrStatus("OPEN") is PrStatus.OPEN
    assert PrStatus.MERGED == "MERGED"
    with pytest.raises(ValueError):
        PrStatus("CLOSED")


def test_pull_request_defaults_are_independent():
    created = datetime(2024, 1, 1, tzinfo=timezone.utc)
    first = PullRequest("pr1", "PR 1", "author1", PrStatus.OPEN, created)
    second = PullRequest("pr2", "PR 2", "author1", PrStatus.OPEN, created)
    first.assigned_reviewers.append("reviewer1")
    assert second.assigned_reviewers == []
    assert first.merged_at is None


def test_user_defaults_active():
    user = User("u1", "Alice")
    assert user.is_active is True
    assert user.team_name == ""


def test_collections_default_empty():
    assert Stats().users == [] and Stats().prs == []
    assert Team("team1").members == []
    assert UserReviews("u1").pull_requests == []