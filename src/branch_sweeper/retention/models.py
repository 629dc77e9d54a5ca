"""Value types shared by the retention engine and the session."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Mode(str, Enum):
    REMOTE = "remote"
    LOCAL = "local"


class Classification(str, Enum):
    PROTECTED = "protected"
    CURRENT = "current"
    ELIGIBLE = "eligible"


class OutcomeKind(str, Enum):
    PROTECTED = "protected"
    CURRENT = "current"
    SKIPPED = "skipped"
    DELETED = "deleted"


@dataclass(slots=True, frozen=True)
class SessionParameters:
    """Parameters fixed once per sweep.

    ``remote_name`` is only set in remote mode. A remote session may still carry
    ``None`` when the repository had no remote to choose from; such a session
    has nothing to sweep.
    """

    mode: Mode
    threshold_days: int
    dry_run: bool = False
    remote_name: str | None = None

    def __post_init__(self) -> None:
        if self.threshold_days < 1:
            raise ValueError("threshold_days must be a positive number of days")
        if self.mode is Mode.LOCAL and self.remote_name is not None:
            raise ValueError("remote_name is only valid in remote mode")

    @property
    def is_remote(self) -> bool:
        return self.mode is Mode.REMOTE


@dataclass(slots=True)
class BranchReference:
    """A branch under evaluation."""

    name: str
    qualified_name: str
    last_commit_at: datetime | None = None

    @classmethod
    def for_session(cls, name: str, session: SessionParameters) -> "BranchReference":
        if session.is_remote and session.remote_name is not None:
            return cls(name=name, qualified_name=f"{session.remote_name}/{name}")
        return cls(name=name, qualified_name=name)


@dataclass(slots=True, frozen=True)
class DecisionOutcome:
    kind: OutcomeKind
    last_commit_at: datetime | None = None
    reason: str | None = None

    @classmethod
    def protected(cls) -> "DecisionOutcome":
        return cls(OutcomeKind.PROTECTED, reason="reserved")

    @classmethod
    def current(cls) -> "DecisionOutcome":
        return cls(OutcomeKind.CURRENT, reason="current branch")

    @classmethod
    def skipped(cls, last_commit_at: datetime) -> "DecisionOutcome":
        return cls(OutcomeKind.SKIPPED, last_commit_at=last_commit_at, reason="too recent")

    @classmethod
    def deleted(cls, last_commit_at: datetime) -> "DecisionOutcome":
        return cls(OutcomeKind.DELETED, last_commit_at=last_commit_at)

    @property
    def is_deletion(self) -> bool:
        return self.kind is OutcomeKind.DELETED


__all__ = [
    "BranchReference",
    "Classification",
    "DecisionOutcome",
    "Mode",
    "OutcomeKind",
    "SessionParameters",
]
