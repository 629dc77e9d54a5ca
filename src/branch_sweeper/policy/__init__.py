"""Retention policy model and loader exports."""

from .loader import DEFAULT_POLICY_FILENAME, PolicyLoadError, PolicyLoader, load_policy
from .models import RetentionPolicy

__all__ = [
    "DEFAULT_POLICY_FILENAME",
    "PolicyLoadError",
    "PolicyLoader",
    "RetentionPolicy",
    "load_policy",
]
