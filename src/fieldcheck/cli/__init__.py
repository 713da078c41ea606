"""fieldcheck CLI — inspect the rule set and validate annotated HTML.

Entry point registered as ``fieldcheck`` in ``pyproject.toml``::

    [project.scripts]
    fieldcheck = "fieldcheck.cli:main"
"""

import argparse
import logging
import sys

from fieldcheck.config import ValidationConfig


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``fieldcheck`` command."""
    parser = argparse.ArgumentParser(
        prog="fieldcheck",
        description="fieldcheck — declarative validation for annotated form fields.",
    )
    parser.add_argument(
        "--log-level",
        default=ValidationConfig().log_level,
        choices=("debug", "info", "warning", "error", "critical"),
        help="Logging verbosity (default: warning)",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- fieldcheck rules -------------------------------------------------
    subparsers.add_parser("rules", help="List the built-in rule keys")

    # -- fieldcheck check -------------------------------------------------
    check_parser = subparsers.add_parser("check", help="Validate the annotated fields of an HTML file")
    check_parser.add_argument("file", help="HTML file to validate")
    check_parser.add_argument(
        "--scope",
        default=None,
        help="Only validate fields inside the container with this id",
    )
    check_parser.add_argument(
        "--value",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Submitted value for a field (repeatable)",
    )
    check_parser.add_argument(
        "--render",
        action="store_true",
        help="Print the document with error markers inserted",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "rules":
        from fieldcheck.cli._rules import list_rules

        list_rules(args)
    elif args.command == "check":
        from fieldcheck.cli._check import run_check

        run_check(args)
