"""Shared FastAPI dependencies."""

from __future__ import annotations

from consolecheck.options import Options

_options: Options | None = None


def get_options() -> Options:
    """FastAPI dependency: return the options loaded at startup."""
    assert _options is not None, "Options not initialised"
    return _options
