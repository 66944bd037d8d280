"""Domain and infrastructure errors used by the services."""

from __future__ import annotations


class DomainError(Exception):
    """An error that carries a stable code for API clients."""

    def __init__(self, code: str, message: str, err: BaseException | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.err = err
        if err is not None:
            self.__cause__ = err

    def __str__(self) -> str:
        if self.err is not None:
            return f"{self.message}: {self.err}"
        return self.message

    def __repr__(self) -> str:
        return f"DomainError(code={self.code!r}, message={self.message!r}, err={self.err!r})"

    def wrap(self, err: BaseException | None) -> DomainError:
        """Return a fresh error with this code and message, caused by ``err``."""
        return DomainError(self.code, self.message, err)


def wrap_error(domain_error: DomainError, err: BaseException | None) -> DomainError:
    """Return a copy of ``domain_error`` that wraps ``err``."""
    return domain_error.wrap(err)


class IncorrectIdError(ValueError):
    """An identifier was empty after trimming."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"incorrect id error: {field} is empty")


class ServiceError(Exception):
    """An unexpected failure of a service operation."""

    def __init__(self, operation: str, err: BaseException) -> None:
        super().__init__(f"{operation}: {err}")
        self.operation = operation
        self.err = err
        self.__cause__ = err


class RepositoryError(Exception):
    """Base class for errors reported by a storage backend."""


class NotFoundError(RepositoryError):
    """The requested record does not exist."""


class AlreadyExistsError(RepositoryError):
    """A record with the same key already exists."""


class PrMergedStatusError(RepositoryError):
    """The pull request is already merged."""


class ReviewerNotAssignedError(RepositoryError):
    """The reviewer is not assigned to the pull request."""


# NOT_FOUND
TEAM_NOT_FOUND = DomainError("NOT_FOUND", "team not found")
USER_NOT_FOUND = DomainError("NOT_FOUND", "user not found")
PR_NOT_FOUND = DomainError("NOT_FOUND", "pull request not found")

TEAM_EXISTS = DomainError("TEAM_EXISTS", "team_name already exists")
PR_EXISTS = DomainError("PR_EXISTS", "PR id already exists")
PR_MERGED = DomainError("PR_MERGED", "cannot reassign on merged PR")
REVIEWER_NOT_ASSIGNED = DomainError("NOT_ASSIGNED", "reviewer is not assigned to this PR")
NO_CANDIDATE = DomainError("NO_CANDIDATE", "no active replacement candidate in team")