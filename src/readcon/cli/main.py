"""readcon CLI entrypoint.

A thin adapter over the engine API: it reads/writes through `readcon.io` and
turns engine errors into typer exit codes. The engine itself never prints.
"""

from __future__ import annotations

import logging

import typer

app = typer.Typer(
    name="readcon",
    add_completion=False,
    no_args_is_help=True,
    help="Inspect and rewrite CON atomistic-structure files.",
)


@app.callback()
def _callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress at INFO level."),
) -> None:
    """readcon CLI."""
    logging.basicConfig(
        format="{asctime} | {levelname:^8s} | {message}",
        style="{",
        level=logging.INFO if verbose else logging.WARNING,
    )


@app.command("version")
def version() -> None:
    """Print the installed readcon version."""
    from readcon import __version__

    typer.echo(__version__)


def _register_commands() -> None:
    """Register CLI subcommands.

    Importing these modules must remain lightweight so `readcon --help` is fast.
    """
    from readcon.cli.commands import convert as convert_cmd
    from readcon.cli.commands import summary as summary_cmd

    summary_cmd.register(app)
    convert_cmd.register(app)


_register_commands()
