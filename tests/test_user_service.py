from datetime import datetime, timezone

import pytest

from reviewassign.errors import (
    DomainError,
    IncorrectIdError,
    NotFoundError,
    ServiceError,
)
from reviewassign.models import PrStatus, PullRequest, User, UserReviews
from reviewassign.user_service import UserService, UserView


class FakeUserRepo:
    def __init__(self, user=None, reviews=None, exists=True, set_error=None,
                 review_error=None, exists_error=None):
        self.user = user
        self.reviews = reviews
        self.exists = exists
        self.set_error = set_error
        self.review_error = review_error
        self.exists_error = exists_error
        self.calls = []

    def set_is_active(self, user_id, is_active):
        self.calls.append(("set_is_active", user_id, is_active))
        if self.set_error is not None:
            raise self.set_error
        return self.user

    def get_review(self, user_id):
        self.calls.append(("get_review", user_id))
        if self.review_error is not None:
            raise self.review_error
        return self.reviews

    def check_user_exists(self, user_id):
        self.calls.append(("check_user_exists", user_id))
        if self.exists_error is not None:
            raise self.exists_error
        return self.exists


def _now():
    return datetime.now(timezone.utc)


def test_set_is_active_success():
    user = User("user1", "Test User", "team1", True, _now())
    repo = FakeUserRepo(user=user)
    service = UserService(repo)

    view = service.set_is_active("user1", True)

    assert view.user_id == "user1"
    assert view.username == "Test User"
    assert view.team_name == "team1"
    assert view.is_active is True
    assert repo.calls == [("set_is_active", "user1", True)]


def test_set_is_active_trims_identifier():
    repo = FakeUserRepo(user=User("user1", "Test User", "team1", False))
    view = UserService(repo).set_is_active("  user1 ", False)

    assert view.user_id == "user1"
    assert repo.calls == [("set_is_active", "user1", False)]


def test_set_is_active_user_not_found():
    service = UserService(FakeUserRepo(set_error=NotFoundError("missing")))

    with pytest.raises(DomainError) as info:
        service.set_is_active("user1", True)

    assert info.value.code == "NOT_FOUND"
    assert info.value.message == "user not found"


def test_set_is_active_invalid_input():
    repo = FakeUserRepo()
    service = UserService(repo)

    with pytest.raises(DomainError) as info:
        service.set_is_active("", True)

    assert info.value.code == "NOT_FOUND"
    assert isinstance(info.value.err, IncorrectIdError)
    assert repo.calls == []


def test_set_is_active_unknown_error():
    service = UserService(FakeUserRepo(set_error=RuntimeError("db down")))

    with pytest.raises(ServiceError) as info:
        service.set_is_active("user1", True)

    assert str(info.value) == "set user status error: db down"


def test_user_view_to_dict():
    view = UserView("e2e-u-setactive", "SetActiveUser", "e2e-team-setactive", False)

    assert view.to_dict() == {
        "user_id": "e2e-u-setactive",
        "username": "SetActiveUser",
        "team_name": "e2e-team-setactive",
        "is_active": False,
    }


def test_get_review_success():
    prs = [
        PullRequest("pr1", "PR 1", "author1", PrStatus.OPEN, _now()),
        PullRequest("pr2", "PR 2", "author2", PrStatus.MERGED, _now(), merged_at=_now()),
    ]
    repo = FakeUserRepo(reviews=UserReviews("user1", prs))
    service = UserService(repo)

    reviews = service.get_review("user1")

    assert reviews.user_id == "user1"
    assert len(reviews.pull_requests) == 2
    assert reviews.pull_requests[0].pr_id == "pr1"
    assert reviews.pull_requests[1].pr_id == "pr2"
    assert repo.calls == [("check_user_exists", "user1"), ("get_review", "user1")]


def test_get_review_empty_list():
    service = UserService(FakeUserRepo(reviews=UserReviews("u", [])))

    reviews = service.get_review("e2e-u-no-reviews")

    assert reviews.user_id == "e2e-u-no-reviews"
    assert reviews.pull_requests == []


def test_get_review_user_not_found():
    repo = FakeUserRepo(exists=False)
    service = UserService(repo)

    with pytest.raises(DomainError) as info:
        service.get_review("user1")

    assert info.value.code == "NOT_FOUND"
    assert repo.calls == [("check_user_exists", "user1")]


def test_get_review_invalid_input():
    repo = FakeUserRepo()
    service = UserService(repo)

    with pytest.raises(DomainError) as info:
        service.get_review("   ")

    assert info.value.code == "NOT_FOUND"
    assert repo.calls == []


def test_get_review_existence_check_failure_maps_to_not_found():
    service = UserService(FakeUserRepo(exists_error=RuntimeError("db down")))

    with pytest.raises(DomainError) as info:
        service.get_review("user1")

    assert info.value.code == "NOT_FOUND"
    assert str(info.value) == "user not found: db down"


def test_get_review_repository_not_found():
    service = UserService(FakeUserRepo(review_error=NotFoundError("gone")))

    with pytest.raises(DomainError) as info:
        service.get_review("user1")

    assert info.value.code == "NOT_FOUND"


def test_get_review_unknown_error():
    service = UserService(FakeUserRepo(review_error=RuntimeError("boom")))

    with pytest.raises(ServiceError) as info:
        service.get_review("user1")

    assert info.value.operation == "get review error"