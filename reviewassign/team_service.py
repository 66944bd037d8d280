"""Team use cases: registering a team with its members and looking one up."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Protocol

from .errors import (
    TEAM_EXISTS,
    TEAM_NOT_FOUND,
    AlreadyExistsError,
    NotFoundError,
    ServiceError,
)
from .models import Team, User

_ADD_TEAM_ERROR = "add team error"
_GET_TEAM_ERROR = "get team error"


class TeamRepository(Protocol):
    """Storage operations the team service relies on."""

    def add(self, team_name: str, members: list[User]) -> Team: ...

    def get(self, team_name: str) -> Team: ...


def _translate(err: Exception, operation: str) -> Exception:
    if isinstance(err, AlreadyExistsError):
        return TEAM_EXISTS.wrap(err)
    if isinstance(err, NotFoundError):
        return TEAM_NOT_FOUND.wrap(err)
    return ServiceError(operation, err)


class TeamService:
    """Adds teams and fetches them with their members."""

    def __init__(self, repo: TeamRepository, log: logging.Logger | None = None) -> None:
        self.repo = repo
        self.log = log if log is not None else logging.getLogger(__name__)

    def add(self, team_name: str, members: Sequence[User]) -> Team:
        """Store a new team together with its members."""
        self.log.info("add team request accepted", extra={"team_name": team_name})
        try:
            team = self.repo.add(team_name, list(members))
        except Exception as err:
            self.log.error(
                "failed to add team", extra={"team_name": team_name, "error": str(err)}
            )
            raise _translate(err, _ADD_TEAM_ERROR) from err

        self.log.info(
            "team added", extra={"team_name": team.team_name, "members_count": len(team.members)}
        )
        return Team(team_name=team.team_name, members=list(team.members))

    def get(self, team_name: str) -> Team:
        """Return the team with the given name and its members."""
        self.log.info("get team request accepted", extra={"team_name": team_name})
        try:
            team = self.repo.get(team_name)
        except Exception as err:
            self.log.error(
                "failed to get team", extra={"team_name": team_name, "error": str(err)}
            )
            raise _translate(err, _GET_TEAM_ERROR) from err

        self.log.info(
            "team fetched", extra={"team_name": team.team_name, "members_count": len(team.members)}
        )
        return Team(team_name=team.team_name, members=list(team.members))