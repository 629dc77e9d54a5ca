"""Retention decisions: age evaluation, classification and the engine."""

from .age import age_in_days, is_stale
from .classifier import BranchClassifier, short_name
from .engine import BranchStore, RetentionEngine
from .models import (
    BranchReference,
    Classification,
    DecisionOutcome,
    Mode,
    OutcomeKind,
    SessionParameters,
)

__all__ = [
    "BranchClassifier",
    "BranchReference",
    "BranchStore",
    "Classification",
    "DecisionOutcome",
    "Mode",
    "OutcomeKind",
    "RetentionEngine",
    "SessionParameters",
    "age_in_days",
    "is_stale",
    "short_name",
]
