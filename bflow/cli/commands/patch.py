from __future__ import annotations

import typer

from bflow.cli.commands._helpers import report
from bflow.cli.context import build_context

patch_app = typer.Typer(
    no_args_is_help=True,
    help="Start and finish patch branches off master.",
    add_completion=False,
)


@patch_app.command()
def start(ctx: typer.Context) -> None:
    """Start a new patch branch, incrementing by patch version (1.0.x)."""
    cli = build_context(ctx)
    report(cli.engine.start_patch(), cli.console)


@patch_app.command()
def finish(
    ctx: typer.Context,
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the merge review prompt"),
) -> None:
    """Finish the current patch branch: merge into both trunks and tag it."""
    cli = build_context(ctx, assume_yes=yes)
    report(cli.engine.finish_patch(), cli.console)
