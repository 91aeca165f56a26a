"""Validation data models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class CheckStatus(str, Enum):
    """Outcome of a single check."""

    passed = "pass"
    failed = "fail"
    warning = "warning"


class Check(BaseModel):
    """A single validation finding."""

    model_config = ConfigDict(frozen=True)

    name: str
    status: CheckStatus
    message: str
    details: str | None = None


class ValidationResult(BaseModel):
    """Aggregated result from the validation pipeline."""

    model_config = ConfigDict(frozen=True)

    valid: bool
    checks: list[Check] = Field(default_factory=list)
    summary: str = ""

    def to_dict(self) -> dict:
        """Transport form: statuses as strings, ``details`` omitted when unset."""
        return self.model_dump(mode="json", exclude_none=True)

    def to_json(self) -> str:
        return self.model_dump_json(exclude_none=True, indent=2)
