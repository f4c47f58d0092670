from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from bflow.core.config import CONFIG_FILE_NAME, FlowConfig, load_config, load_config_or_default
from bflow.core.errors import ErrorCode
from bflow.core.result import Err
from bflow.git.repository import Repository
from bflow.output.console import ConsoleProtocol, RichConsole, Style
from bflow.platform.process import run as run_process
from bflow.services.flow import Confirm, FlowEngine


@dataclass(frozen=True, slots=True)
class GlobalOptions:
    """Options given before the subcommand (``bflow --repo X feature start``)."""

    repo: Path | None = None
    config: Path | None = None
    verbose: bool = False


@dataclass(frozen=True, slots=True)
class CLIContext:
    root: Path
    config: FlowConfig
    console: ConsoleProtocol
    engine: FlowEngine


def prompt_confirm(token: str) -> Confirm:
    """Confirmation read from stdin; only ``token``, exactly, counts as yes."""

    def confirm(question: str) -> bool:
        try:
            answer = typer.prompt(f"{question} [{token}/n]", default="", show_default=False)
        except typer.Abort:
            # stdin closed
            return False
        return answer == token

    return confirm


def _options(ctx: typer.Context) -> GlobalOptions:
    obj = ctx.find_root().obj
    return obj if isinstance(obj, GlobalOptions) else GlobalOptions()


def build_context(ctx: typer.Context, *, assume_yes: bool = False) -> CLIContext:
    options = _options(ctx)
    root = (options.repo or Path.cwd()).expanduser().resolve()
    console = RichConsole()

    if options.config is not None:
        config_result = load_config(options.config)
    else:
        config_result = load_config_or_default(root / CONFIG_FILE_NAME)
    if isinstance(config_result, Err):
        console.error(config_result.error.message)
        raise typer.Exit(code=int(ErrorCode.CONFIG_ERROR))
    config = config_result.value

    def echo_command(cmd: list[str]) -> None:
        console.print(" ".join(cmd), Style.DIM)

    repo = Repository(
        root,
        remote=config.remote,
        runner=run_process,
        on_command=echo_command if options.verbose else None,
    )
    confirm: Confirm = prompt_confirm(config.confirm_token)
    if assume_yes:
        confirm = lambda _question: True  # noqa: E731
    engine = FlowEngine(repo, config, confirm=confirm, console=console)

    return CLIContext(root=root, config=config, console=console, engine=engine)
