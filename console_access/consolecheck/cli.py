"""Command-line entry point: validate a template file and set the exit code."""

from __future__ import annotations

import argparse
import logging
import sys

from consolecheck.options import configure_logging, load_options
from consolecheck.template.loader import TemplateDecodeError, load_template_file
from consolecheck.validator import CheckStatus, ValidationResult, validate

logger = logging.getLogger(__name__)

EXIT_VALID = 0
EXIT_INVALID = 1
EXIT_DECODE_ERROR = 2

STATUS_ICONS = {
    CheckStatus.passed: "✓",
    CheckStatus.failed: "✗",
    CheckStatus.warning: "⚠",
}


def format_report(result: ValidationResult) -> str:
    """Render a result as the human-readable report."""
    lines = [
        "",
        "=== AWS Console Private Access Validation Results ===",
        "",
        f"Valid: {'✓ YES' if result.valid else '✗ NO'}",
        "",
        "Checks:",
    ]
    for check in result.checks:
        lines.append(f"  {STATUS_ICONS[check.status]} {check.name}")
        lines.append(f"    Status: {check.status.value}")
        lines.append(f"    Message: {check.message}")
        if check.details:
            lines.append(f"    Details: {check.details}")
    lines.append("")
    lines.append(f"Summary: {result.summary}")
    return "\n".join(lines)


def build_parser(default_region: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="consolecheck",
        description="Validate a CloudFormation template for AWS Console Private Access",
    )
    parser.add_argument("template", help="Path to a JSON or YAML CloudFormation template")
    parser.add_argument(
        "--region",
        default=default_region,
        help=f"AWS region used to resolve service names (default: {default_region})",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON instead of the text report",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose (debug) logging",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    options = load_options()
    args = build_parser(options.default_region).parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose or options.dev_mode else logging.WARNING)

    try:
        template = load_template_file(args.template)
    except TemplateDecodeError as e:
        logger.debug("Decode failure for %s", args.template, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_DECODE_ERROR

    result = validate(template, args.region)
    print(result.to_json() if args.json else format_report(result))
    return EXIT_VALID if result.valid else EXIT_INVALID


if __name__ == "__main__":
    sys.exit(main())
