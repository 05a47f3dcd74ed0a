"""tssgen CLI entry point: Click group with subcommands."""

import logging

import click

from tssgen import __version__


@click.group()
@click.version_option(version=__version__, prog_name="tssgen")
@click.option("-v", "--verbose", is_flag=True, help="Log pipeline details to stderr.")
def cli(verbose: bool) -> None:
    """tssgen - compile CSS stylesheets into dependency-ordered tss modules."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Import and register subcommands
from tssgen.cli.build import build  # noqa: E402
from tssgen.cli.validate import validate  # noqa: E402
from tssgen.cli.inspect import inspect  # noqa: E402

cli.add_command(build)
cli.add_command(validate)
cli.add_command(inspect)
