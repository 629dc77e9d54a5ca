"""Retention policy model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_RESERVED_BRANCHES = ("master", "develop")
DEFAULT_THRESHOLD_CHOICES = (30, 45, 60)


class RetentionPolicy(BaseModel):
    """Which branches are never swept and which age thresholds are offered."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    reserved_branches: tuple[str, ...] = Field(
        default=DEFAULT_RESERVED_BRANCHES,
        description="Short branch names that are never deleted, in display order.",
    )
    threshold_choices: tuple[int, ...] = Field(
        default=DEFAULT_THRESHOLD_CHOICES,
        description="Day thresholds offered when asking for the maximum branch age.",
    )
    default_threshold_index: int = Field(
        default=0,
        description="Index into threshold_choices selected when no answer is given.",
    )

    @field_validator("reserved_branches", mode="before")
    @classmethod
    def _normalize_reserved(cls, value: Any):
        if value is None:
            return DEFAULT_RESERVED_BRANCHES
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, (list, tuple)):
            raise TypeError("reserved_branches must be a list of branch names")
        names: list[str] = []
        for item in value:
            name = str(item).strip()
            if not name:
                raise ValueError("Reserved branch names must not be empty")
            if name not in names:
                names.append(name)
        return tuple(names)

    @field_validator("threshold_choices")
    @classmethod
    def _validate_thresholds(cls, value: tuple[int, ...]) -> tuple[int, ...]:
        if not value:
            raise ValueError("threshold_choices must offer at least one value")
        if any(days < 1 for days in value):
            raise ValueError("threshold_choices must be positive day counts")
        return value

    @model_validator(mode="after")
    def _validate_default_index(self) -> "RetentionPolicy":
        if not 0 <= self.default_threshold_index < len(self.threshold_choices):
            raise ValueError("default_threshold_index must point into threshold_choices")
        return self


__all__ = ["DEFAULT_RESERVED_BRANCHES", "DEFAULT_THRESHOLD_CHOICES", "RetentionPolicy"]
