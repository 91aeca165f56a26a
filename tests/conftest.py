"""Shared test fixtures and configuration."""

import json
import sys
from pathlib import Path

# Add console_access/ to Python path so `from consolecheck.xxx` imports work
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "console_access"))

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def compliant_template_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / "compliant_template.json"


@pytest.fixture
def short_form_template_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / "short_form_template.yaml"


@pytest.fixture
def malformed_template_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / "malformed_template.json"


@pytest.fixture
def compliant_document(compliant_template_path: Path) -> dict:
    return json.loads(compliant_template_path.read_text(encoding="utf-8"))


@pytest.fixture(autouse=True)
def _isolated_options(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep a host /data/options.json or CONSOLECHECK_* env out of the tests."""
    monkeypatch.setenv("CONSOLECHECK_OPTIONS_PATH", str(tmp_path / "missing-options.json"))
    monkeypatch.delenv("CONSOLECHECK_DEFAULT_REGION", raising=False)
    monkeypatch.delenv("CONSOLECHECK_DEV_MODE", raising=False)
