"""GitPython-backed repository handle."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Mapping

import git
from git.exc import GitCommandError

logger = logging.getLogger(__name__)


class RepositoryError(RuntimeError):
    """Base class for repository errors."""


class InvalidRepositoryError(RepositoryError):
    """Raised when a path does not resolve to a git repository."""


class FetchError(RepositoryError):
    """Raised when fetching a remote fails."""


class HistoryLookupError(RepositoryError):
    """Raised when the newest commit of a ref cannot be resolved."""


class DeletionError(RepositoryError):
    """Raised when a local or remote branch cannot be deleted."""


@dataclass(slots=True, frozen=True)
class RemoteDescriptor:
    """A configured remote, identified by name."""

    name: str


class GitRepository:
    """Repository operations needed to sweep branches."""

    def __init__(self, repo: git.Repo) -> None:
        self._repo = repo

    @classmethod
    def open(cls, path: Path | str) -> "GitRepository":
        try:
            repo = git.Repo(Path(path), search_parent_directories=True)
        except (git.NoSuchPathError, git.InvalidGitRepositoryError) as exc:
            raise InvalidRepositoryError(f"{path} is not a git repository") from exc
        logger.debug("Opened repository", extra={"path": str(path)})
        return cls(repo)

    @property
    def path(self) -> Path:
        return Path(self._repo.working_tree_dir or self._repo.git_dir)

    def current_branch(self) -> str | None:
        try:
            return self._repo.active_branch.name
        except TypeError:
            # detached HEAD
            return None

    def local_branches(self) -> list[str]:
        return [head.name for head in self._repo.heads]

    def remotes(self) -> list[RemoteDescriptor]:
        return [RemoteDescriptor(name=remote.name) for remote in self._repo.remotes]

    def remote_branches(self, remote: str) -> list[str]:
        refs = self._remote(remote).refs
        return [ref.remote_head for ref in refs if ref.remote_head != "HEAD"]

    def fetch(self, remote: str) -> None:
        try:
            self._remote(remote).fetch()
        except (GitCommandError, ValueError) as exc:
            raise FetchError(f"Failed to fetch {remote}: {exc}") from exc

    def last_commit_at(self, ref: str) -> datetime:
        """Return the author timestamp of the newest commit reachable from ``ref``."""

        try:
            commit = next(self._repo.iter_commits(ref, max_count=1), None)
        except (GitCommandError, ValueError) as exc:
            raise HistoryLookupError(f"Cannot read history of {ref}: {exc}") from exc
        if commit is None:
            raise HistoryLookupError(f"{ref} has no commits")
        return commit.authored_datetime

    def delete_branch(self, name: str, *, force: bool = True) -> None:
        try:
            self._repo.delete_head(name, force=force)
        except GitCommandError as exc:
            raise DeletionError(f"Failed to delete branch {name}: {exc}") from exc
        logger.info("Deleted local branch", extra={"branch": name})

    def push_delete(self, remote: str, branch: str) -> None:
        """Delete ``branch`` on ``remote`` by pushing an empty source ref."""

        try:
            results = self._remote(remote).push(refspec=f":{branch}")
            results.raise_if_error()
        except (GitCommandError, ValueError) as exc:
            raise DeletionError(f"Failed to delete {remote}/{branch}: {exc}") from exc
        logger.info("Deleted remote branch", extra={"remote": remote, "branch": branch})

    def _remote(self, name: str) -> git.Remote:
        # Repo.remote raises ValueError for unknown names
        return self._repo.remote(name)


@dataclass
class FakeRepository:
    """In-memory test double that records every collaborator call."""

    current: str | None = None
    branches: list[str] = field(default_factory=list)
    remote_refs: Mapping[str, list[str]] = field(default_factory=dict)
    commit_times: Mapping[str, datetime] = field(default_factory=dict)
    failures: Mapping[str, Exception] = field(default_factory=dict)
    calls: list[tuple[str, ...]] = field(default_factory=list)

    def current_branch(self) -> str | None:
        return self.current

    def local_branches(self) -> list[str]:
        return list(self.branches)

    def remotes(self) -> list[RemoteDescriptor]:
        return [RemoteDescriptor(name=name) for name in self.remote_refs]

    def remote_branches(self, remote: str) -> list[str]:
        return list(self.remote_refs[remote])

    def fetch(self, remote: str) -> None:
        self._record("fetch", remote)

    def last_commit_at(self, ref: str) -> datetime:
        self._record("last_commit_at", ref)
        try:
            return self.commit_times[ref]
        except KeyError as exc:
            raise HistoryLookupError(f"Cannot read history of {ref}") from exc

    def delete_branch(self, name: str, *, force: bool = True) -> None:
        self._record("delete_branch", name)

    def push_delete(self, remote: str, branch: str) -> None:
        self._record("push_delete", remote, branch)

    def calls_to(self, operation: str) -> list[tuple[str, ...]]:
        return [call for call in self.calls if call[0] == operation]

    def _record(self, operation: str, *args: str) -> None:
        self.calls.append((operation, *args))
        failure = self.failures.get(operation)
        if failure is not None:
            raise failure


__all__ = [
    "DeletionError",
    "FakeRepository",
    "FetchError",
    "GitRepository",
    "HistoryLookupError",
    "InvalidRepositoryError",
    "RemoteDescriptor",
    "RepositoryError",
]
