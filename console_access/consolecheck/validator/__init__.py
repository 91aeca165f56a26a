"""Compliance checks for private console access templates."""

from consolecheck.validator.aggregate import aggregate
from consolecheck.validator.models import Check, CheckStatus, ValidationResult
from consolecheck.validator.pipeline import DEFAULT_REGION, validate, validate_text
from consolecheck.validator.rules import run_all_rules

__all__ = [
    "Check",
    "CheckStatus",
    "DEFAULT_REGION",
    "ValidationResult",
    "aggregate",
    "run_all_rules",
    "validate",
    "validate_text",
]
