"""Fold check records into the overall verdict."""

from __future__ import annotations

from collections.abc import Sequence

from consolecheck.validator.models import Check, CheckStatus, ValidationResult


def count_statuses(checks: Sequence[Check]) -> dict[CheckStatus, int]:
    counts = {status: 0 for status in CheckStatus}
    for check in checks:
        counts[check.status] += 1
    return counts


def aggregate(checks: Sequence[Check]) -> ValidationResult:
    """Build the result: valid iff nothing failed."""
    counts = count_statuses(checks)
    passed = counts[CheckStatus.passed]
    failed = counts[CheckStatus.failed]
    warnings = counts[CheckStatus.warning]
    valid = failed == 0

    if valid:
        summary = (
            f"✓ Validation passed. All required checks passed "
            f"({passed} passed, {warnings} warnings)."
        )
    else:
        summary = (
            f"✗ Validation failed. {failed} check(s) failed, "
            f"{passed} passed, {warnings} warnings."
        )

    return ValidationResult(valid=valid, checks=list(checks), summary=summary)
