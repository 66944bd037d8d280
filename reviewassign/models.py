"""Records exchanged between services and repositories, and small helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from .errors import IncorrectIdError


class PrStatus(str, Enum):
    """Lifecycle state of a pull request."""

    OPEN = "OPEN"
    MERGED = "MERGED"


@dataclass
class User:
    """A team member who may review pull requests."""

    user_id: str
    username: str = ""
    team_name: str = ""
    is_active: bool = True
    created_at: datetime | None = None


@dataclass
class PullRequest:
    """A pull request with its assigned reviewers."""

    pr_id: str
    name: str
    author_id: str
    status: PrStatus
    created_at: datetime
    assigned_reviewers: list[str] = field(default_factory=list)
    merged_at: datetime | None = None


@dataclass
class ReassignResult:
    """A pull request after a reviewer swap, and who took the place."""

    pr: PullRequest
    replaced_by: str


@dataclass
class UserStat:
    """How many reviews a user has been assigned."""

    user_id: str
    username: str
    assignments: int


@dataclass
class PrStat:
    """How many reviewers a pull request has."""

    pr_id: str
    pr_name: str
    reviewers_count: int


@dataclass
class Stats:
    """Assignment statistics over users and pull requests."""

    users: list[UserStat] = field(default_factory=list)
    prs: list[PrStat] = field(default_factory=list)


@dataclass
class Team:
    """A named team and its members."""

    team_name: str
    members: list[User] = field(default_factory=list)


@dataclass
class UserReviews:
    """The pull requests a user is assigned to review."""

    user_id: str
    pull_requests: list[PullRequest] = field(default_factory=list)


def format_time(moment: datetime) -> str:
    """Format as RFC 3339 in UTC with whole seconds; naive values count as UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def format_optional_time(moment: datetime | None) -> str | None:
    """Like :func:`format_time`, passing ``None`` through."""
    return None if moment is None else format_time(moment)


def normalize_id(raw: str, field: str) -> str:
    """Strip surrounding whitespace; raise :class:`IncorrectIdError` if nothing is left."""
    identifier = raw.strip()
    if not identifier:
        raise IncorrectIdError(field)
    return identifier