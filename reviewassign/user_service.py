"""User use cases: toggling activity and listing assigned reviews."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol

from .errors import (
    USER_NOT_FOUND,
    IncorrectIdError,
    NotFoundError,
    ServiceError,
)
from .models import User, UserReviews, normalize_id

_SET_IS_ACTIVE_ERROR = "set user status error"
_GET_REVIEW_ERROR = "get review error"


class UserRepository(Protocol):
    """Storage operations the user service relies on."""

    def set_is_active(self, user_id: str, is_active: bool) -> User: ...

    def get_review(self, user_id: str) -> UserReviews: ...

    def check_user_exists(self, user_id: str) -> bool: ...


@dataclass
class UserView:
    """A user as presented to API clients."""

    user_id: str
    username: str
    team_name: str
    is_active: bool

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready representation."""
        return {
            "user_id": self.user_id,
            "username": self.username,
            "team_name": self.team_name,
            "is_active": self.is_active,
        }


class UserService:
    """Changes user activity and reports the pull requests a user reviews."""

    def __init__(self, repo: UserRepository, log: logging.Logger | None = None) -> None:
        self.repo = repo
        self.log = log if log is not None else logging.getLogger(__name__)

    def set_is_active(self, user_id: str, is_active: bool) -> UserView:
        """Set whether a user takes part in review assignment."""
        self.log.info(
            "setIsActive request accepted",
            extra={"user_id": user_id, "is_active": is_active},
        )
        try:
            identifier = normalize_id(user_id, "user_id")
        except IncorrectIdError as err:
            raise USER_NOT_FOUND.wrap(err) from err

        try:
            user = self.repo.set_is_active(identifier, is_active)
        except Exception as err:
            self.log.error(
                "failed to set user active status",
                extra={"user_id": identifier, "is_active": is_active, "error": str(err)},
            )
            if isinstance(err, NotFoundError):
                raise USER_NOT_FOUND.wrap(err) from err
            raise ServiceError(_SET_IS_ACTIVE_ERROR, err) from err

        self.log.info(
            "user active status updated",
            extra={"user_id": identifier, "username": user.username, "is_active": user.is_active},
        )
        return UserView(
            user_id=identifier,
            username=user.username,
            team_name=user.team_name,
            is_active=user.is_active,
        )

    def get_review(self, user_id: str) -> UserReviews:
        """Return the pull requests the user is assigned to review."""
        self.log.info("getReview request accepted", extra={"user_id": user_id})
        try:
            identifier = normalize_id(user_id, "user_id")
        except IncorrectIdError as err:
            raise USER_NOT_FOUND.wrap(err) from err

        try:
            exists = self.repo.check_user_exists(identifier)
        except Exception as err:
            self.log.error(
                "failed to check user existence",
                extra={"user_id": identifier, "error": str(err)},
            )
            raise USER_NOT_FOUND.wrap(err) from err
        if not exists:
            raise USER_NOT_FOUND.wrap(NotFoundError("user not found"))

        try:
            reviews = self.repo.get_review(identifier)
        except Exception as err:
            self.log.error(
                "failed to get user reviews",
                extra={"user_id": identifier, "error": str(err)},
            )
            if isinstance(err, NotFoundError):
                raise USER_NOT_FOUND.wrap(err) from err
            raise ServiceError(_GET_REVIEW_ERROR, err) from err

        self.log.info(
            "user reviews retrieved",
            extra={"user_id": identifier, "pull_requests_count": len(reviews.pull_requests)},
        )
        return UserReviews(user_id=identifier, pull_requests=list(reviews.pull_requests))