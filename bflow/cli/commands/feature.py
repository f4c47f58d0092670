"""Feature branches: short-lived branches off development."""

from __future__ import annotations

import typer

from bflow.cli.commands._helpers import report
from bflow.cli.context import build_context

feature_app = typer.Typer(
    no_args_is_help=True,
    help="Start and finish feature branches.",
    add_completion=False,
)


@feature_app.command()
def start(
    ctx: typer.Context,
    name: str | None = typer.Argument(None, help="Feature name (branch becomes feature/NAME)"),
) -> None:
    """Start a new feature branch off development."""
    cli = build_context(ctx)
    report(cli.engine.start_feature(name), cli.console)


@feature_app.command()
def finish(
    ctx: typer.Context,
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the merge review prompt"),
) -> None:
    """Finish the current feature branch, merging it back into development."""
    cli = build_context(ctx, assume_yes=yes)
    report(cli.engine.finish_feature(), cli.console)
