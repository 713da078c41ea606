"""``fieldcheck check`` — validate an HTML file from the command line.

Prints one line per failing field, or the whole document with markers
inserted when ``--render`` is given. Exits with code 1 if any field
fails and 2 if the input can't be read.
"""

import argparse
import sys
from pathlib import Path

from fieldcheck.engine import ValidationEngine
from fieldcheck.markup import HtmlFieldSource


def _parse_values(pairs: list[str]) -> dict[str, str]:
    values: dict[str, str] = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise ValueError(f"Expected NAME=VALUE, got {pair!r}")
        values[name] = value
    return values


def run_check(args: argparse.Namespace) -> None:
    """Validate ``args.file`` and report failures."""
    try:
        document = Path(args.file).read_text(encoding="utf-8")
        values = _parse_values(args.value)
    except (OSError, UnicodeDecodeError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc

    source = HtmlFieldSource(document, values=values)
    engine = ValidationEngine(source)
    outcome = engine.validate_scope(args.scope, clear_prior_errors=True)

    if args.render:
        from fieldcheck.render import render_markers_into

        print(render_markers_into(source, engine.board.markers))
    else:
        for failure in outcome.failures:
            print(f"{failure.field.field_id}: {failure.message} ({failure.failed_rule})")
        checked = len(outcome.outcomes)
        print(f"{checked} field(s) checked, {len(outcome.failures)} failed")

    if not outcome.passed:
        raise SystemExit(1)
