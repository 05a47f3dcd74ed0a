"""CLI command: tssgen validate -- report diagnostics for a stylesheet."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from tssgen.analysis import build_ast
from tssgen.model.diagnostic import Severity
from tssgen.parser import ParseError, parse_css
from tssgen.pipeline import collect, normalize_rules
from tssgen.validation import validate as run_validate


@click.command()
@click.argument("stylesheet", type=click.Path(exists=True, dir_okay=False))
def validate(stylesheet: str) -> None:
    """Parse a CSS file and check its class graph.

    Prints diagnostics (errors, warnings, info) and exits with code 0 if
    no errors are found, or code 1 if there are errors.
    """
    css_path = Path(stylesheet)

    # Parse
    try:
        ast = build_ast(parse_css(css_path.read_text(encoding="utf-8")))
    except ParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)

    # Validate
    diagnostics = run_validate(collect(normalize_rules(ast)))

    if not diagnostics:
        click.echo(f"OK: {css_path.name} is valid (0 diagnostics)")
        sys.exit(0)

    errors = [d for d in diagnostics if d.severity is Severity.ERROR]
    warnings = [d for d in diagnostics if d.severity is Severity.WARNING]
    infos = [d for d in diagnostics if d.severity is Severity.INFO]

    for diag in diagnostics:
        click.echo(str(diag))

    click.echo()
    click.echo(
        f"Summary: {len(errors)} error(s), {len(warnings)} warning(s), {len(infos)} info"
    )

    if errors:
        sys.exit(1)
    sys.exit(0)
