"""CLI command: tssgen build -- compile a stylesheet into a tss module."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from tssgen.config import CyclePolicy, TranspilerConfig
from tssgen.model.diagnostic import Severity
from tssgen.parser import ParseError
from tssgen.pipeline import DependencyCycleError
from tssgen.transpiler import compile_css
from tssgen.validation import ValidationError, validate_or_raise


@click.command()
@click.argument("stylesheet", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Write the module here instead of stdout.",
)
@click.option(
    "--runtime-module",
    default=TranspilerConfig.runtime_module,
    show_default=True,
    help="Module the generated code imports tss helpers from.",
)
@click.option(
    "--on-cycle",
    type=click.Choice([p.value for p in CyclePolicy]),
    default=CyclePolicy.ERROR.value,
    show_default=True,
    help="How to handle classes that reference each other.",
)
@click.option(
    "--max-pad",
    type=click.IntRange(min=0),
    default=TranspilerConfig.max_pad_width,
    show_default=True,
    help="Maximum key width used to align property values.",
)
def build(
    stylesheet: str,
    output: str | None,
    runtime_module: str,
    on_cycle: str,
    max_pad: int,
) -> None:
    """Compile a CSS file into a TypeScript tss module.

    Diagnostics are printed to stderr.  Exits with code 1 on parse errors,
    unresolved dependency cycles or ERROR diagnostics.
    """
    config = TranspilerConfig(
        runtime_module=runtime_module,
        max_pad_width=max_pad,
        cycle_policy=CyclePolicy(on_cycle),
    )
    css_path = Path(stylesheet)

    try:
        result = compile_css(css_path.read_text(encoding="utf-8"), config)
        diagnostics = validate_or_raise(result.collections)
    except ParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)
    except DependencyCycleError as exc:
        click.echo(f"Cycle error: {exc}", err=True)
        sys.exit(1)
    except ValidationError as exc:
        click.echo(f"Validation error: {exc}", err=True)
        sys.exit(1)

    for diag in diagnostics:
        if diag.severity is not Severity.INFO:
            click.echo(str(diag), err=True)

    if output:
        Path(output).write_text(result.code, encoding="utf-8")
        click.echo(
            f"Wrote {output} ({len(result.ordering.collections)} collection(s))", err=True
        )
    else:
        click.echo(result.code, nl=False)
