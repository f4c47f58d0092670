from __future__ import annotations

import typer

from bflow.core.result import Err, Result
from bflow.output.console import ConsoleProtocol
from bflow.output.errors import flow_error_exit_code, print_flow_error
from bflow.services.flow import FlowOutcome
from bflow.services.flow_errors import FlowError


def report(result: Result[FlowOutcome, FlowError], console: ConsoleProtocol) -> None:
    """Print the outcome of a workflow; exit non-zero on error."""
    if isinstance(result, Err):
        print_flow_error(result.error, console)
        raise typer.Exit(code=flow_error_exit_code(result.error))

    outcome = result.value
    if outcome.cancelled:
        console.info(f"Review not confirmed, {outcome.branch} left as it is.")
        return
    console.success(outcome.action, outcome.branch)
