"""Command line interface for jsoncompare."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from .comparator import compare_json
from .config import CompareConfig, load_config
from .exceptions import ConfigError, JsonCompareError
from .session import render_result
from .templates import FileTemplateRepository
from .validation import format_json, validate_json

EXIT_EQUAL = 0
EXIT_DIFFERENT = 1
EXIT_INVALID = 2

DEFAULT_CONFIG_PATH = "~/.jsoncompare/config.yaml"


def _read_text(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def _describe_invalid(label: str, result) -> str:
    location = f"{result.location}: " if result.location else ""
    return f"{label}: {location}{result.error}"


def cmd_compare(args, config: CompareConfig, repository: FileTemplateRepository) -> int:
    excluded = list(config.excluded_fields)

    if args.template:
        template = repository.get(args.template)
        if template is None:
            print(f"Error: Template not found: {args.template}", file=sys.stderr)
            return EXIT_INVALID
        excluded.extend(template.excluded_fields)

    for name in args.exclude or []:
        name = name.strip()
        if name and name not in excluded:
            excluded.append(name)

    first = _read_text(args.first)
    second = _read_text(args.second)

    # Both inputs must be present and valid before comparing
    invalid = False
    for label, text in ((args.first, first), (args.second, second)):
        if not text.strip():
            print(f"{label}: Empty input", file=sys.stderr)
            invalid = True
            continue
        validation = validate_json(text)
        if not validation.is_valid:
            print(_describe_invalid(label, validation), file=sys.stderr)
            invalid = True
    if invalid:
        return EXIT_INVALID

    result = compare_json(first, second, excluded)

    if not args.quiet:
        print(render_result(result, excluded))

    if args.report:
        with open(args.report, 'w', encoding='utf-8') as f:
            json.dump(result.to_dict(), f, indent=2, ensure_ascii=False)
        if not args.quiet:
            print(f"\nReport saved to: {args.report}")

    return EXIT_EQUAL if result.is_equal else EXIT_DIFFERENT


def cmd_validate(args, config: CompareConfig, repository: FileTemplateRepository) -> int:
    exit_code = 0
    for path in args.files:
        result = validate_json(_read_text(path))
        if result.is_valid:
            print(f"{path}: Valid JSON")
        else:
            print(_describe_invalid(path, result))
            exit_code = 1
    return exit_code


def cmd_format(args, config: CompareConfig, repository: FileTemplateRepository) -> int:
    text = _read_text(args.file)
    validation = validate_json(text)
    if not validation.is_valid:
        print(_describe_invalid(args.file, validation), file=sys.stderr)
        return 1

    indent = args.indent if args.indent is not None else config.indent
    formatted = format_json(text, indent)

    if args.in_place and args.file != "-":
        Path(args.file).write_text(formatted + "\n", encoding='utf-8')
    else:
        print(formatted)
    return 0


def cmd_templates(args, config: CompareConfig, repository: FileTemplateRepository) -> int:
    if args.action == "list":
        templates = repository.list_all()
        if not templates:
            print("No templates saved.")
        for template in templates:
            print(f"{template.id}  {template.describe()}: {', '.join(template.excluded_fields)}")
        return 0

    if args.action == "save":
        fields = [f.strip() for f in args.exclude or [] if f.strip()]
        if not args.target or not args.target.strip() or not fields:
            print("Error: a name and at least one --exclude field are required", file=sys.stderr)
            return 1
        template = repository.create(args.target, list(dict.fromkeys(fields)))
        print(f"Saved template {template.id}: {template.describe()}")
        return 0

    if args.action == "delete":
        if not args.target:
            print("Error: template id is required", file=sys.stderr)
            return 1
        if repository.delete(args.target):
            print(f"Deleted template {args.target}")
            return 0
        print(f"Error: Template not found: {args.target}", file=sys.stderr)
        return 1

    return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jsoncompare",
        description="Compare, validate and format JSON documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  jsoncompare compare old.json new.json -x updatedAt -x traceId
  jsoncompare validate payload.json
  jsoncompare format payload.json --in-place
  jsoncompare templates save audit -x timestamp -x lastLogin
        """
    )
    parser.add_argument("-c", "--config", help="Path to YAML config file")
    parser.add_argument("--templates", help="Path to the template store")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    compare = subparsers.add_parser("compare", help="Compare two JSON files")
    compare.add_argument("first", help="First JSON file ('-' for stdin)")
    compare.add_argument("second", help="Second JSON file")
    compare.add_argument(
        "-x", "--exclude", action="append", metavar="FIELD",
        help="Field name to ignore at any depth (repeatable)"
    )
    compare.add_argument("-t", "--template", help="Template id whose fields to exclude")
    compare.add_argument("-r", "--report", help="Path to output JSON report file")
    compare.add_argument("-q", "--quiet", action="store_true", help="Suppress console output")
    compare.set_defaults(handler=cmd_compare)

    validate = subparsers.add_parser("validate", help="Validate JSON files")
    validate.add_argument("files", nargs="+", help="JSON files to validate")
    validate.set_defaults(handler=cmd_validate)

    fmt = subparsers.add_parser("format", help="Pretty-print a JSON file")
    fmt.add_argument("file", help="JSON file ('-' for stdin)")
    fmt.add_argument("-i", "--in-place", action="store_true", help="Rewrite the file")
    fmt.add_argument("--indent", type=int, help="Indentation width")
    fmt.set_defaults(handler=cmd_format)

    templates = subparsers.add_parser("templates", help="Manage exclusion templates")
    templates.add_argument("action", choices=["list", "save", "delete"])
    templates.add_argument(
        "target", nargs="?", metavar="NAME_OR_ID",
        help="Template name to save, or template id to delete"
    )
    templates.add_argument(
        "-x", "--exclude", action="append", metavar="FIELD",
        help="Field name to store in the template (repeatable)"
    )
    templates.set_defaults(handler=cmd_templates)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config or DEFAULT_CONFIG_PATH)
    except ConfigError as e:
        print(f"Error: {e.message} {e.details}", file=sys.stderr)
        return EXIT_INVALID

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.logging_level,
        format='%(levelname)s: %(message)s'
    )

    repository = FileTemplateRepository(args.templates or config.templates_path)

    try:
        return args.handler(args, config, repository)
    except FileNotFoundError as e:
        print(f"Error: File not found: {e.filename}", file=sys.stderr)
        return EXIT_INVALID
    except JsonCompareError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INVALID


if __name__ == "__main__":
    sys.exit(main())
