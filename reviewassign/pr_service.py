"""Pull request use cases: creation with reviewer assignment, merge, reassignment, stats."""

from __future__ import annotations

import logging
import random
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

from .errors import (
    NO_CANDIDATE,
    PR_EXISTS,
    PR_MERGED,
    PR_NOT_FOUND,
    REVIEWER_NOT_ASSIGNED,
    AlreadyExistsError,
    DomainError,
    IncorrectIdError,
    NotFoundError,
    PrMergedStatusError,
    ReviewerNotAssignedError,
    ServiceError,
)
from .models import (
    PrStat,
    PrStatus,
    PullRequest,
    ReassignResult,
    Stats,
    User,
    UserStat,
    format_optional_time,
    format_time,
    normalize_id,
)

_CREATE_ERROR = "create pull request error"
_MERGE_ERROR = "merge pull request error"
_REASSIGN_ERROR = "reassigning pull request reviewer error"

REVIEWER_COUNT_FOR_CREATE = 2
REVIEWER_COUNT_FOR_REASSIGN = 1


class _NoPotentialReviewerError(LookupError):
    """No active user is left to review."""

    def __init__(self) -> None:
        super().__init__("no active reviewer available")


class PrRepository(Protocol):
    """Storage operations the pull request service relies on."""

    def create(
        self, pr_id: str, pr_name: str, author_id: str, reviewers: list[str]
    ) -> PullRequest: ...

    def merge(self, pr_id: str) -> PullRequest: ...

    def reassign(self, pr_id: str, old_reviewer_id: str, replaced_by: str) -> ReassignResult: ...

    def select_potential_reviewers(self, user_id: str) -> list[User]: ...

    def check_reviewer_assigned(self, pr_id: str, reviewer_id: str) -> bool: ...

    def check_reviewer_assigned_with_pr(
        self, pr_id: str, reviewer_id: str
    ) -> tuple[bool, str]: ...

    def get_stats(self) -> Stats: ...


@dataclass
class PrView:
    """A pull request as presented to API clients."""

    pr_id: str
    pr_name: str
    author_id: str
    status: str
    created_at: str
    assigned_reviewers: list[str] = field(default_factory=list)
    merged_at: str | None = None

    @classmethod
    def from_pull_request(cls, pr: PullRequest) -> PrView:
        """Build a view with timestamps formatted as RFC 3339 UTC."""
        return cls(
            pr_id=pr.pr_id,
            pr_name=pr.name,
            author_id=pr.author_id,
            status=PrStatus(pr.status).value,
            created_at=format_time(pr.created_at),
            assigned_reviewers=list(pr.assigned_reviewers),
            merged_at=format_optional_time(pr.merged_at),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready representation."""
        data: dict[str, Any] = {
            "pull_request_id": self.pr_id,
            "pull_request_name": self.pr_name,
            "author_id": self.author_id,
            "status": self.status,
            "assigned_reviewers": list(self.assigned_reviewers),
            "createdAt": self.created_at,
        }
        if self.merged_at is not None:
            data["mergedAt"] = self.merged_at
        return data


@dataclass
class ReassignView:
    """The outcome of a reviewer reassignment as presented to API clients."""

    pr: PrView
    replaced_by: str

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready representation."""
        return {"pr": self.pr.to_dict(), "replaced_by": self.replaced_by}


def _pick(candidates: Iterable[User | None], excluded: set[str], count: int) -> list[str]:
    pool = [
        user
        for user in candidates
        if user is not None and user.is_active and user.user_id not in excluded
    ]
    if not pool:
        raise _NoPotentialReviewerError()
    random.shuffle(pool)
    return [user.user_id for user in pool[:count]]


def find_reviewers(
    potential_reviewers: Iterable[User | None], excluded_id: str, reviewer_count: int
) -> list[str]:
    """Pick up to ``reviewer_count`` random active users other than ``excluded_id``.

    Raises :class:`LookupError` when nobody qualifies.
    """
    return _pick(potential_reviewers, {excluded_id}, reviewer_count)


def find_reviewers_excluding_author(
    potential_reviewers: Iterable[User | None],
    excluded_id: str,
    author_id: str,
    reviewer_count: int,
) -> list[str]:
    """Like :func:`find_reviewers`, also leaving out ``author_id``."""
    return _pick(potential_reviewers, {excluded_id, author_id}, reviewer_count)


def _translate(
    err: BaseException,
    mapping: Sequence[tuple[type[BaseException], DomainError]],
    operation: str,
) -> Exception:
    for kind, domain_error in mapping:
        if isinstance(err, kind):
            return domain_error.wrap(err)
    return ServiceError(operation, err)


class PrService:
    """Creates, merges and reassigns pull requests and reports statistics."""

    def __init__(self, repo: PrRepository, log: logging.Logger | None = None) -> None:
        self.repo = repo
        self.log = log if log is not None else logging.getLogger(__name__)

    def create(self, pr_id: str, pr_name: str, author_id: str) -> PrView:
        """Create a pull request and assign up to two active teammates of the author."""
        try:
            author = normalize_id(author_id, "author_id")
        except IncorrectIdError as err:
            raise PR_NOT_FOUND.wrap(err) from err
        self.log.info(
            "create PR request accepted", extra={"pr_id": pr_id, "author_id": author}
        )

        try:
            candidates = self.repo.select_potential_reviewers(author)
        except Exception as err:
            self.log.error(
                "failed to load potential reviewers",
                extra={"author_id": author, "error": str(err)},
            )
            raise _translate(err, [(NotFoundError, PR_NOT_FOUND)], _CREATE_ERROR) from err

        try:
            reviewers = find_reviewers(candidates, author, REVIEWER_COUNT_FOR_CREATE)
        except _NoPotentialReviewerError:
            self.log.info(
                "no reviewers available, creating PR with empty reviewers list",
                extra={"author_id": author},
            )
            reviewers = []

        try:
            identifier = normalize_id(pr_id, "pull_request_id")
        except IncorrectIdError as err:
            raise PR_NOT_FOUND.wrap(err) from err

        try:
            created = self.repo.create(identifier, pr_name, author, reviewers)
        except Exception as err:
            self.log.error(
                "failed to create PR", extra={"pr_id": identifier, "error": str(err)}
            )
            raise _translate(
                err,
                [(AlreadyExistsError, PR_EXISTS), (NotFoundError, PR_NOT_FOUND)],
                _CREATE_ERROR,
            ) from err

        self.log.info(
            "PR created",
            extra={"pr_id": created.pr_id, "assigned_reviewers": created.assigned_reviewers},
        )
        return PrView.from_pull_request(created)

    def merge(self, pr_id: str) -> PrView:
        """Mark a pull request as merged; merging twice returns the same result."""
        try:
            identifier = normalize_id(pr_id, "pull_request_id")
        except IncorrectIdError as err:
            raise PR_NOT_FOUND.wrap(err) from err
        self.log.info("merge PR request accepted", extra={"pr_id": identifier})

        try:
            merged = self.repo.merge(identifier)
        except Exception as err:
            self.log.error(
                "failed to merge PR", extra={"pr_id": identifier, "error": str(err)}
            )
            raise _translate(err, [(NotFoundError, PR_NOT_FOUND)], _MERGE_ERROR) from err

        self.log.info(
            "PR merged", extra={"pr_id": merged.pr_id, "status": PrStatus(merged.status).value}
        )
        return PrView.from_pull_request(merged)

    def reassign(self, pr_id: str, old_user_id: str) -> ReassignView:
        """Replace an assigned reviewer with a random active teammate of theirs."""
        try:
            identifier = normalize_id(pr_id, "pull_request_id")
            old_reviewer = normalize_id(old_user_id, "old_user_id")
        except IncorrectIdError as err:
            raise PR_NOT_FOUND.wrap(err) from err
        self.log.info(
            "reassign reviewer request accepted",
            extra={"pr_id": identifier, "old_user_id": old_reviewer},
        )

        try:
            assigned, author = self.repo.check_reviewer_assigned_with_pr(identifier, old_reviewer)
        except Exception as err:
            raise _translate(
                err,
                [(NotFoundError, PR_NOT_FOUND), (PrMergedStatusError, PR_MERGED)],
                _REASSIGN_ERROR,
            ) from err
        if not assigned:
            cause = ReviewerNotAssignedError("reviewer is not assigned to this PR")
            raise REVIEWER_NOT_ASSIGNED.wrap(cause)

        try:
            candidates = self.repo.select_potential_reviewers(old_reviewer)
        except Exception as err:
            self.log.error(
                "failed to load team members for reassign",
                extra={"old_user_id": old_reviewer, "error": str(err)},
            )
            raise _translate(err, [(NotFoundError, PR_NOT_FOUND)], _REASSIGN_ERROR) from err

        try:
            (new_reviewer,) = find_reviewers_excluding_author(
                candidates, old_reviewer, author, REVIEWER_COUNT_FOR_REASSIGN
            )
        except _NoPotentialReviewerError as err:
            self.log.warning(
                "no replacement reviewer available",
                extra={"pr_id": identifier, "old_user_id": old_reviewer, "error": str(err)},
            )
            raise NO_CANDIDATE.wrap(None) from None

        try:
            outcome = self.repo.reassign(identifier, old_reviewer, new_reviewer)
        except Exception as err:
            self.log.error(
                "failed to reassign reviewer",
                extra={
                    "pr_id": identifier,
                    "old_user_id": old_reviewer,
                    "new_reviewer_id": new_reviewer,
                    "error": str(err),
                },
            )
            raise _translate(
                err,
                [
                    (AlreadyExistsError, PR_EXISTS),
                    (NotFoundError, PR_NOT_FOUND),
                    (PrMergedStatusError, PR_MERGED),
                    (ReviewerNotAssignedError, REVIEWER_NOT_ASSIGNED),
                ],
                _REASSIGN_ERROR,
            ) from err

        self.log.info(
            "reviewer reassigned",
            extra={
                "pr_id": outcome.pr.pr_id,
                "assigned_reviewers": outcome.pr.assigned_reviewers,
                "replaced_by": outcome.replaced_by,
            },
        )
        return ReassignView(
            pr=PrView.from_pull_request(outcome.pr), replaced_by=outcome.replaced_by
        )

    def get_stats(self) -> Stats:
        """Return assignment counts per user and reviewer counts per pull request."""
        self.log.info("get statistics request accepted")
        try:
            stats = self.repo.get_stats()
        except Exception as err:
            self.log.error("failed to get statistics", extra={"error": str(err)})
            raise

        users = [UserStat(u.user_id, u.username, u.assignments) for u in stats.users]
        prs = [PrStat(p.pr_id, p.pr_name, p.reviewers_count) for p in stats.prs]
        self.log.info(
            "statistics retrieved", extra={"users_count": len(users), "prs_count": len(prs)}
        )
        return Stats(users=users, prs=prs)