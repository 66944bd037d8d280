# reviewassign

Service layer for assigning code reviewers to pull requests inside teams.

When a pull request is created, up to two active members of the author's
team are picked at random as reviewers. The author is never picked. If no one
else in the team is active, the pull request is still created, with no
reviewers. A reviewer can be swapped for a random active teammate of theirs.
The replacement is never the reviewer being swapped out and never the
author of the pull request. Statistics report how many reviews each user has
been assigned and how many reviewers each pull request has.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Repositories

The services store nothing themselves. Each one works through a repository
object that you supply. The object must match one of these protocols:

- `reviewassign.pr_service.PrRepository` has these methods:
  `create(pr_id, pr_name, author_id, reviewers)`, `merge(pr_id)`,
  `reassign(pr_id, old_reviewer_id, replaced_by)`,
  `select_potential_reviewers(user_id)`, which returns the members of that
  user's team, `check_reviewer_assigned(pr_id, reviewer_id)`,
  `check_reviewer_assigned_with_pr(pr_id, reviewer_id)` and `get_stats()`.
  The `check_reviewer_assigned_with_pr` method returns a pair: whether the
  reviewer is assigned, and the author id.
- `reviewassign.team_service.TeamRepository` has `add(team_name, members)`
  and `get(team_name)`.
- `reviewassign.user_service.UserRepository` has
  `set_is_active(user_id, is_active)`, `get_review(user_id)` and
  `check_user_exists(user_id)`.

Repositories work with the records in `reviewassign.models`. These are
`User`, `PullRequest` (with a `PrStatus` of `OPEN` or `MERGED`),
`ReassignResult`, `Team`, `UserReviews`, `Stats`, `UserStat` and `PrStat`.

## Services

Each service takes the repository and, optionally, a `logging.Logger`.

- `PrService` in `reviewassign.pr_service`:
  - `create(pr_id, pr_name, author_id)` and `merge(pr_id)` return a
    `PrView`.
  - `reassign(pr_id, old_user_id)` returns a `ReassignView`.
  - `get_stats()` returns `Stats`.
- `TeamService` in `reviewassign.team_service`: `add(team_name, members)`
  and `get(team_name)` both return a `Team`.
- `UserService` in `reviewassign.user_service`:
  - `set_is_active(user_id, is_active)` returns a `UserView`.
  - `get_review(user_id)` returns `UserReviews`. It first checks that the
    user exists.

Identifiers for pull requests and users have surrounding whitespace removed
before use, by `reviewassign.models.normalize_id`.

Calling `to_dict()` on a view gives its JSON-ready form:

- `PrView.to_dict()` has these keys: `pull_request_id`, `pull_request_name`,
  `author_id`, `status`, `assigned_reviewers` and `createdAt`. It also has
  `mergedAt` once the pull request has been merged. Timestamps are RFC 3339
  strings in UTC, with whole seconds, and are produced by
  `reviewassign.models.format_time`.
- `ReassignView.to_dict()` has the keys `pr` and `replaced_by`.
- `UserView.to_dict()` has the keys `user_id`, `username`, `team_name` and
  `is_active`.

The functions that pick reviewers can also be used on their own. They are
`find_reviewers(potential_reviewers, excluded_id, reviewer_count)` and
`find_reviewers_excluding_author(potential_reviewers, excluded_id,
author_id, reviewer_count)`. Both return up to `reviewer_count` random ids of
active users. Both raise `LookupError` when nobody qualifies.

## Errors

A failure that the caller is expected to handle raises
`reviewassign.errors.DomainError`. Its `code` attribute holds one of these
values:

| Code | Meaning |
|------|---------|
| `NOT_FOUND` | The team, user or pull request does not exist, or an identifier is empty after trimming. |
| `TEAM_EXISTS` | The team name is already in use. |
| `PR_EXISTS` | The pull request id is already in use. |
| `PR_MERGED` | A reviewer cannot be reassigned on a merged pull request. |
| `NOT_ASSIGNED` | The user is not a reviewer of this pull request. |
| `NO_CANDIDATE` | The team has no active member who could take over. |

A repository reports its own failures by raising subclasses of
`RepositoryError`. These are `NotFoundError`, `AlreadyExistsError`,
`PrMergedStatusError` and `ReviewerNotAssignedError`. The services translate
them into the domain errors above.

Any other repository failure is raised as a `ServiceError`, with the original
exception chained as its cause. There are two exceptions to this rule:

- `PrService.get_stats()` re-raises a repository error unchanged.
- `UserService.get_review()` reports any failure of `check_user_exists` as
  `NOT_FOUND`.

## Logging

`reviewassign.logger.new_logger(level)` builds a standalone
standard-library logger that writes to standard error. The `level` argument
selects the setup:

- `"dev"` logs from DEBUG as tab-separated lines with coloured level names.
- `"prod"` logs from INFO as one JSON object per line.
- Any other value gives the `"dev"` setup without colours.

The services attach their context, such as ids and counts, as `extra`
fields. Both formats include those fields in the output.

## What it does not include

This package has no storage backend, HTTP server or command-line program.
It provides the service layer and the repository protocols only. Persisting
teams, users and pull requests, and exposing the services to clients, is up
to the code that uses it.