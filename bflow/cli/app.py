from __future__ import annotations

from pathlib import Path

import typer

from bflow import __version__
from bflow.cli.commands.feature import feature_app
from bflow.cli.commands.patch import patch_app
from bflow.cli.commands.release import release_app
from bflow.cli.context import GlobalOptions


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    help="Feature, release and patch branches over master/development.",
)

app.add_typer(feature_app, name="feature")
app.add_typer(release_app, name="release")
app.add_typer(patch_app, name="patch")


@app.callback(invoke_without_command=True)
def _main(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    repo: Path | None = typer.Option(
        None,
        "--repo",
        help="Repository root (defaults to the current directory)",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="Config file (defaults to .bflow.toml in the repository root)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Echo git commands."),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)

    ctx.obj = GlobalOptions(repo=repo, config=config, verbose=verbose)


def main() -> None:
    app()
