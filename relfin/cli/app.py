from __future__ import annotations

import typer

from relfin import __version__
from relfin.cli.commands.clean import clean
from relfin.cli.commands.finalize import finalize
from relfin.cli.commands.hook import hook
from relfin.cli.commands.propose import propose_version


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


app.command()(finalize)
app.command("propose-version")(propose_version)
app.command()(hook)
app.command()(clean)


@app.callback(invoke_without_command=True)
def _main(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)


def main() -> None:
    app()
