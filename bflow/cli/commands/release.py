"""Release branches: version bumps stabilised before tagging master."""

from __future__ import annotations

from enum import StrEnum

import typer

from bflow.cli.commands._helpers import report
from bflow.cli.context import build_context

release_app = typer.Typer(
    no_args_is_help=True,
    help="Start and finish release branches.",
    add_completion=False,
)


class ReleaseBump(StrEnum):
    MINOR = "minor"
    MAJOR = "major"


@release_app.command()
def start(
    ctx: typer.Context,
    kind: ReleaseBump = typer.Argument(..., help="Version component to bump: minor|major"),
) -> None:
    """Start a new release branch off development."""
    cli = build_context(ctx)
    report(cli.engine.start_release(kind.value), cli.console)


@release_app.command()
def minor(ctx: typer.Context) -> None:
    """Start a new release branch, incrementing by minor version (1.x.0)."""
    cli = build_context(ctx)
    report(cli.engine.start_release("minor"), cli.console)


@release_app.command()
def major(ctx: typer.Context) -> None:
    """Start a new release branch, incrementing by major version (x.0.0)."""
    cli = build_context(ctx)
    report(cli.engine.start_release("major"), cli.console)


@release_app.command()
def finish(
    ctx: typer.Context,
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the merge review prompt"),
) -> None:
    """Finish the current release branch: merge into both trunks and tag it."""
    cli = build_context(ctx, assume_yes=yes)
    report(cli.engine.finish_release(), cli.console)
