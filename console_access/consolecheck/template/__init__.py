"""Template model, intrinsic resolver and loader."""

from consolecheck.template.loader import TemplateDecodeError, load_template, load_template_file
from consolecheck.template.models import Resource, Template, parse_value
from consolecheck.template.resolver import resolve

__all__ = [
    "Resource",
    "Template",
    "TemplateDecodeError",
    "load_template",
    "load_template_file",
    "parse_value",
    "resolve",
]
