"""Per-branch retention decisions and the deletions they imply."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Protocol

from .age import is_stale
from .classifier import BranchClassifier
from .models import BranchReference, Classification, DecisionOutcome, SessionParameters

logger = logging.getLogger(__name__)


class BranchStore(Protocol):
    """Repository operations the engine relies on."""

    def last_commit_at(self, ref: str) -> datetime:
        ...

    def delete_branch(self, name: str, *, force: bool = True) -> None:
        ...

    def push_delete(self, remote: str, branch: str) -> None:
        ...


class RetentionEngine:
    """Evaluate branches against the session threshold and delete stale ones."""

    def __init__(
        self,
        repository: BranchStore,
        classifier: BranchClassifier,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._repository = repository
        self._classifier = classifier
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def now(self) -> datetime:
        return self._clock()

    def evaluate(
        self,
        branch: BranchReference,
        session: SessionParameters,
        current_branch: str | None,
        now: datetime | None = None,
    ) -> DecisionOutcome:
        classification = self._classifier.classify(branch.name, current_branch)
        if classification is Classification.PROTECTED:
            return DecisionOutcome.protected()
        if classification is Classification.CURRENT:
            return DecisionOutcome.current()

        # history is read through the qualified ref so remote branches resolve
        last_commit_at = self._repository.last_commit_at(branch.qualified_name)
        branch.last_commit_at = last_commit_at

        if is_stale(last_commit_at, session.threshold_days, now or self.now()):
            return DecisionOutcome.deleted(last_commit_at)
        return DecisionOutcome.skipped(last_commit_at)

    def apply(
        self,
        outcome: DecisionOutcome,
        branch: BranchReference,
        session: SessionParameters,
    ) -> bool:
        """Perform the deletion ``outcome`` calls for.

        Returns True when the repository was changed. Nothing is changed for
        non-deletion outcomes or in dry-run mode. Repository failures propagate.
        """

        if not outcome.is_deletion or session.dry_run:
            return False

        if session.is_remote:
            if session.remote_name is None:
                raise ValueError("Cannot delete a remote branch without a bound remote")
            self._repository.push_delete(session.remote_name, branch.name)
        else:
            # unmerged branches are deleted as well
            self._repository.delete_branch(branch.name, force=True)

        logger.debug(
            "Applied deletion",
            extra={"branch": branch.qualified_name, "mode": session.mode.value},
        )
        return True


__all__ = ["BranchStore", "RetentionEngine"]
