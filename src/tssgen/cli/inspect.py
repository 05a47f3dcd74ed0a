"""CLI command: tssgen inspect -- display the compiled class graph."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from tssgen.analysis import build_ast
from tssgen.config import CyclePolicy, TranspilerConfig
from tssgen.parser import ParseError, parse_css
from tssgen.pipeline import dependant_counts, run_pipeline


@click.command()
@click.argument("stylesheet", type=click.Path(exists=True, dir_okay=False))
def inspect(stylesheet: str) -> None:
    """Parse a CSS file and display its collections in emission order.

    Shows media labels, shared content blocks, keyframes, and every class
    with its rule count and dependencies.  Cycles are broken for display.
    """
    css_path = Path(stylesheet)

    try:
        ast = build_ast(parse_css(css_path.read_text(encoding="utf-8")))
    except ParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)

    ast, collections, ordering = run_pipeline(
        ast, TranspilerConfig(cycle_policy=CyclePolicy.BREAK)
    )
    dependants = dependant_counts(collections)

    click.echo(f"Stylesheet:  {css_path.name}")
    click.echo(f"Rules:       {len(ast.rules)}")
    click.echo(f"Shared:      {len(ast.common_content)}")
    click.echo(f"Keyframes:   {len(ast.keyframes)}")
    click.echo(f"Font-faces:  {len(ast.font_faces)}")
    click.echo(f"Collections: {len(collections)}")
    click.echo()

    # Media
    click.echo("Media:")
    for index, label in enumerate(ast.media):
        click.echo(f"  {index}  {label or '(none)'}")
    click.echo()

    # Collections
    click.echo("Collections (emission order):")
    for collection in ordering.collections:
        parts = [f"  {collection.name or '(global)'}"]
        parts.append(f"rules={collection.count}")
        parts.append(f"dependants={dependants[collection.name]}")
        if collection.dependencies:
            parts.append("deps=" + ",".join(collection.dependencies))
        if collection.name in ordering.cyclic:
            parts.append("cyclic")
        click.echo("  ".join(parts))
