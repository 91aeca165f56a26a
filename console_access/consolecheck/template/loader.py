"""Decode CloudFormation template text (JSON or YAML) into a Template."""

from __future__ import annotations

import json
import logging
from io import StringIO
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML, YAMLError
from ruamel.yaml.constructor import DuplicateKeyError, SafeConstructor
from ruamel.yaml.nodes import MappingNode, SequenceNode

from consolecheck.template.models import Template

logger = logging.getLogger(__name__)

# Short-form intrinsic tags CloudFormation accepts in YAML templates
SHORT_FORM_FUNCTIONS = (
    "Base64",
    "Cidr",
    "FindInMap",
    "GetAtt",
    "GetAZs",
    "ImportValue",
    "Join",
    "Select",
    "Split",
    "Sub",
    "Transform",
    "And",
    "Equals",
    "If",
    "Not",
    "Or",
)

NESTING_TOO_DEEP = "Template nesting too deep"


class TemplateDecodeError(ValueError):
    """Raised when template text cannot be decoded into a document."""

    def __init__(self, message: str, line: int | None = None) -> None:
        super().__init__(message)
        self.line = line


class _CloudFormationConstructor(SafeConstructor):
    """Safe constructor that expands ``!Ref``/``!Join``/... into long form."""


def _short_form(key: str):
    def construct(constructor: SafeConstructor, node: Any) -> dict[str, Any]:
        if isinstance(node, SequenceNode):
            value: Any = constructor.construct_sequence(node, deep=True)
        elif isinstance(node, MappingNode):
            value = constructor.construct_mapping(node, deep=True)
        else:
            value = constructor.construct_scalar(node)
        return {key: value}

    return construct


_CloudFormationConstructor.add_constructor("!Ref", _short_form("Ref"))
_CloudFormationConstructor.add_constructor("!Condition", _short_form("Condition"))
for _name in SHORT_FORM_FUNCTIONS:
    _CloudFormationConstructor.add_constructor(f"!{_name}", _short_form(f"Fn::{_name}"))


def _yaml() -> YAML:
    yaml = YAML(typ="safe", pure=True)
    yaml.Constructor = _CloudFormationConstructor
    return yaml


def decode_document(text: str) -> dict[str, Any]:
    """Parse template text into a plain dict.

    JSON is tried first; anything else, including YAML flow mappings such as
    ``{Resources: {}}``, goes through the YAML loader, which also understands
    CloudFormation short-form tags.
    """
    if not text or not text.strip():
        raise TemplateDecodeError("Empty template")

    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        parsed = _decode_yaml(text)
    except RecursionError as e:
        raise TemplateDecodeError(NESTING_TOO_DEEP) from e

    if not isinstance(parsed, dict):
        raise TemplateDecodeError(
            f"Template must be a mapping, got {type(parsed).__name__}"
        )
    return parsed


def _decode_yaml(text: str) -> Any:
    try:
        return _yaml().load(StringIO(text))
    except (YAMLError, DuplicateKeyError) as e:
        line = None
        mark = getattr(e, "problem_mark", None)
        if mark is not None:
            line = mark.line + 1  # 0-indexed to 1-indexed
        raise TemplateDecodeError(str(e), line=line) from e
    except RecursionError as e:
        raise TemplateDecodeError(NESTING_TOO_DEEP) from e


def load_template(text: str) -> Template:
    """Decode template text and wrap it in the typed model."""
    document = decode_document(text)
    template = Template.from_dict(document)
    logger.debug("Decoded template with %d resources", len(template))
    return template


def load_template_file(path: str | Path) -> Template:
    """Read a template from disk. Unreadable files are decode failures."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise TemplateDecodeError(f"Cannot read template {path}: {e}") from e
    return load_template(text)
