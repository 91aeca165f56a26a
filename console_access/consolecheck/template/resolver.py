"""Resolve the small set of intrinsic shapes used to build service names."""

from __future__ import annotations

from consolecheck.template.models import (
    REGION_PSEUDO_PARAMETER,
    JoinValue,
    LiteralValue,
    RefValue,
    Value,
)


def resolve(value: Value | None, region: str) -> str | None:
    """Reduce ``value`` to a literal string, or ``None`` if it cannot be.

    Handles string literals and ``Fn::Join`` whose parts are string literals,
    ``Ref`` to ``AWS::Region`` or nested joins. Every other shape is
    unresolvable. Never raises.
    """
    if isinstance(value, LiteralValue):
        return value.value if isinstance(value.value, str) else None

    if isinstance(value, JoinValue):
        resolved: list[str] = []
        for part in value.parts:
            text = _resolve_part(part, region)
            if text is None:
                return None
            resolved.append(text)
        return value.separator.join(resolved)

    return None


def _resolve_part(part: Value, region: str) -> str | None:
    if isinstance(part, RefValue):
        return region if part.name == REGION_PSEUDO_PARAMETER else None
    return resolve(part, region)
