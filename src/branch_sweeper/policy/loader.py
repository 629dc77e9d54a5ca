"""Retention policy loading utilities."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import RetentionPolicy

DEFAULT_POLICY_FILENAME = ".branch-sweeper.yml"

logger = logging.getLogger(__name__)


class PolicyLoadError(RuntimeError):
    """Raised when a policy file cannot be read or validated."""


class PolicyLoader:
    """Loads the retention policy for a repository from YAML."""

    def __init__(self, repo_root: Path, explicit_path: Path | None = None) -> None:
        self._repo_root = Path(repo_root)
        self._explicit_path = Path(explicit_path) if explicit_path is not None else None

    @property
    def path(self) -> Path:
        """Return the file the policy is read from."""

        if self._explicit_path is not None:
            return self._explicit_path
        return self._repo_root / DEFAULT_POLICY_FILENAME

    def load(self) -> RetentionPolicy:
        """Load the policy.

        A missing repository-level file falls back to the default policy; an
        explicitly requested file must exist.
        """

        path = self.path
        if not path.exists():
            if self._explicit_path is not None:
                raise PolicyLoadError(f"Policy file {path} does not exist")
            return RetentionPolicy()

        try:
            document = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:
            raise PolicyLoadError(f"Failed to parse YAML in {path}: {exc}") from exc

        if document is None:
            return RetentionPolicy()
        if not isinstance(document, dict):
            raise PolicyLoadError(f"Policy file {path} must contain a mapping")

        try:
            policy = RetentionPolicy.model_validate(document)
        except ValidationError as exc:
            raise PolicyLoadError(f"Policy validation error in {path}: {exc}") from exc

        logger.debug(
            "Loaded retention policy",
            extra={"path": str(path), "reserved": list(policy.reserved_branches)},
        )
        return policy


def load_policy(repo_root: Path, explicit_path: Path | None = None) -> RetentionPolicy:
    """Convenience wrapper for loading the policy of a repository."""

    return PolicyLoader(repo_root, explicit_path).load()


__all__ = ["DEFAULT_POLICY_FILENAME", "PolicyLoadError", "PolicyLoader", "load_policy"]
