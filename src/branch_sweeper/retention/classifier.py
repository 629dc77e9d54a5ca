"""Branch classification against reserved names and the checked-out branch."""

from __future__ import annotations

from typing import Iterable

from ..policy.models import DEFAULT_RESERVED_BRANCHES
from .models import Classification


def short_name(branch: str, remote_name: str | None = None) -> str:
    """Strip a ``<remote>/`` qualification from ``branch``."""

    if remote_name:
        prefix = f"{remote_name}/"
        if branch.startswith(prefix):
            return branch[len(prefix):]
    return branch


class BranchClassifier:
    """Decide whether a branch is protected, current or open to evaluation."""

    def __init__(self, reserved: Iterable[str] = DEFAULT_RESERVED_BRANCHES) -> None:
        self._reserved: tuple[str, ...] = tuple(dict.fromkeys(reserved))

    @property
    def reserved(self) -> tuple[str, ...]:
        return self._reserved

    def classify(
        self,
        branch: str,
        current_branch: str | None,
        *,
        remote_name: str | None = None,
    ) -> Classification:
        name = short_name(branch, remote_name)
        # reserved wins over current
        if name in self._reserved:
            return Classification.PROTECTED
        if current_branch is not None and name == current_branch:
            return Classification.CURRENT
        return Classification.ELIGIBLE


__all__ = ["BranchClassifier", "short_name"]
