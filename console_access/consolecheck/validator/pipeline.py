"""Validation pipeline: runs every rule and aggregates the result."""

from __future__ import annotations

import logging
from typing import Any

from consolecheck.template.loader import load_template
from consolecheck.template.models import Template
from consolecheck.validator.aggregate import aggregate
from consolecheck.validator.models import ValidationResult
from consolecheck.validator.rules import run_all_rules

logger = logging.getLogger(__name__)

DEFAULT_REGION = "us-east-1"


def validate(template: Template | dict[str, Any] | None, region: str = DEFAULT_REGION) -> ValidationResult:
    """Run the full rule set against a template.

    Accepts either a ``Template`` or an already-decoded document dict; a
    ``None`` document is treated as a template with no resources.
    """
    if not isinstance(template, Template):
        template = Template.from_dict(template or {})

    checks = run_all_rules(template, region)
    result = aggregate(checks)

    logger.info(
        "Validated %d resources for %s: %d checks, valid=%s",
        len(template),
        region,
        len(result.checks),
        result.valid,
    )
    return result


def validate_text(text: str, region: str = DEFAULT_REGION) -> ValidationResult:
    """Decode template text and validate it.

    Raises ``TemplateDecodeError`` if the text is not a decodable template;
    that is a failure of the call, not a failed check.
    """
    return validate(load_template(text), region)
