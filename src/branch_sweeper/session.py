"""Sweep session: resolves parameters and drives one pass over a branch source."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Protocol, Sequence

from .git.repository import RemoteDescriptor
from .policy.models import RetentionPolicy
from .prompts import ChoiceProvider
from .reporting import Reporter, format_outcome
from .retention.classifier import BranchClassifier
from .retention.engine import BranchStore, RetentionEngine
from .retention.models import BranchReference, DecisionOutcome, Mode, SessionParameters

logger = logging.getLogger(__name__)

MODE_CHOICES: tuple[str, ...] = (Mode.REMOTE.value, Mode.LOCAL.value)
NO_REMOTE_WARNING: tuple[str, ...] = (
    "",
    "Warning!",
    "-------",
    "This repo has no remote repository.",
    "",
)


class SessionError(RuntimeError):
    """Raised when session parameters cannot be resolved."""


class NoRemotesError(SessionError):
    """Raised in strict mode when remote mode finds no configured remote."""


class SessionRepository(BranchStore, Protocol):
    def current_branch(self) -> str | None:
        ...

    def local_branches(self) -> list[str]:
        ...

    def remotes(self) -> list[RemoteDescriptor]:
        ...

    def remote_branches(self, remote: str) -> list[str]:
        ...

    def fetch(self, remote: str) -> None:
        ...


class SessionState(str, Enum):
    UNINITIALIZED = "uninitialized"
    MODE_CHOSEN = "mode_chosen"
    REMOTE_CHOSEN = "remote_chosen"
    THRESHOLD_CHOSEN = "threshold_chosen"
    FETCHING = "fetching"
    ITERATING = "iterating"
    DONE = "done"


Decision = tuple[BranchReference, DecisionOutcome]


class SweepSession:
    """Resolve mode, remote and threshold, then sweep the selected branches."""

    def __init__(
        self,
        repository: SessionRepository,
        choices: ChoiceProvider,
        reporter: Reporter,
        *,
        policy: RetentionPolicy | None = None,
        dry_run: bool = False,
        mode: Mode | str | None = None,
        remote_name: str | None = None,
        threshold_days: int | None = None,
        dry_run_notice: bool = False,
        require_remote: bool = False,
        engine: RetentionEngine | None = None,
    ) -> None:
        self._repository = repository
        self._choices = choices
        self._reporter = reporter
        self._policy = policy or RetentionPolicy()
        self._dry_run = dry_run
        self._mode = Mode(mode) if mode is not None else None
        self._remote_name = remote_name
        self._threshold_days = threshold_days
        self._dry_run_notice = dry_run_notice
        self._require_remote = require_remote
        self._engine = engine or RetentionEngine(
            repository, BranchClassifier(self._policy.reserved_branches)
        )
        self._remote: RemoteDescriptor | None = None
        self._parameters: SessionParameters | None = None
        self._state = SessionState.UNINITIALIZED

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def parameters(self) -> SessionParameters | None:
        return self._parameters

    @property
    def remote(self) -> RemoteDescriptor | None:
        return self._remote

    def resolve(self) -> SessionParameters:
        """Settle mode, remote and threshold, asking for whatever is not fixed."""

        if self._parameters is not None:
            return self._parameters

        mode = self._resolve_mode()
        self._state = SessionState.MODE_CHOSEN

        if mode is Mode.REMOTE:
            self._remote = self._resolve_remote()
            self._state = SessionState.REMOTE_CHOSEN

        threshold = self._resolve_threshold()
        self._parameters = SessionParameters(
            mode=mode,
            threshold_days=threshold,
            dry_run=self._dry_run,
            remote_name=self._remote.name if self._remote is not None else None,
        )
        self._state = SessionState.THRESHOLD_CHOSEN
        logger.info(
            "Session resolved",
            extra={
                "mode": mode.value,
                "remote": self._parameters.remote_name,
                "threshold_days": threshold,
                "dry_run": self._dry_run,
            },
        )
        return self._parameters

    def run(self) -> list[Decision]:
        """Sweep the branch source once and report every decision.

        Repository failures are not caught here; they end the run after the
        last reported branch.
        """

        session = self.resolve()
        self._reporter.line("Start...")

        if session.is_remote and session.remote_name is not None:
            self._state = SessionState.FETCHING
            self._reporter.line(f"  ==> Fetch {session.remote_name}...")
            self._repository.fetch(session.remote_name)

        self._state = SessionState.ITERATING
        current_branch = self._repository.current_branch()
        now = self._engine.now()
        decisions: list[Decision] = []

        for name in self._branch_source(session):
            branch = BranchReference.for_session(name, session)
            outcome = self._engine.evaluate(branch, session, current_branch, now)
            self._engine.apply(outcome, branch, session)
            self._reporter.line(
                format_outcome(
                    branch,
                    outcome,
                    dry_run=session.dry_run,
                    dry_run_notice=self._dry_run_notice,
                )
            )
            decisions.append((branch, outcome))

        self._reporter.line("Done.")
        self._state = SessionState.DONE
        logger.info(
            "Session finished",
            extra={
                "branches": len(decisions),
                "deleted": sum(1 for _, outcome in decisions if outcome.is_deletion),
            },
        )
        return decisions

    def _branch_source(self, session: SessionParameters) -> Sequence[str]:
        if not session.is_remote:
            return self._repository.local_branches()
        if self._remote is None:
            return []
        return self._repository.remote_branches(self._remote.name)

    def _resolve_mode(self) -> Mode:
        if self._mode is not None:
            return self._mode
        answer = self._choices.ask_choice("Choose repository mode:", MODE_CHOICES, 0)
        return Mode(answer)

    def _resolve_remote(self) -> RemoteDescriptor | None:
        self._reporter.line("Query remotes ...")
        remotes = self._repository.remotes()

        if self._remote_name is not None:
            for remote in remotes:
                if remote.name == self._remote_name:
                    return remote
            raise SessionError(f"Remote '{self._remote_name}' is not configured")

        if not remotes:
            if self._require_remote:
                raise NoRemotesError("This repo has no remote repository")
            self._reporter.warning_block(NO_REMOTE_WARNING)
            logger.warning("Remote mode selected but no remote is configured")

        names = [remote.name for remote in remotes]
        chosen = self._choices.ask_choice("Select a remote:", names, 0)
        for remote in remotes:
            if remote.name == chosen:
                return remote
        return None

    def _resolve_threshold(self) -> int:
        if self._threshold_days is not None:
            if self._threshold_days < 1:
                raise SessionError("The day threshold must be a positive number")
            return self._threshold_days
        answer = self._choices.ask_choice(
            "Choose last commit before days:",
            self._policy.threshold_choices,
            self._policy.default_threshold_index,
        )
        return int(answer)


__all__ = [
    "NoRemotesError",
    "SessionError",
    "SessionRepository",
    "SessionState",
    "SweepSession",
]
