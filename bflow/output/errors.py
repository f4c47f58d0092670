"""Error presentation utilities.

Centralized formatting and exit code mapping for workflow errors.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from bflow.core.errors import ErrorCode
from bflow.output.console import Style
from bflow.services.branches import BranchKind
from bflow.services.flow_errors import (
    CommandFailed,
    FlowError,
    InvalidBranch,
    MalformedVersionFile,
    MissingArgument,
    VersionFileError,
)

if TYPE_CHECKING:
    from bflow.output.console import ConsoleProtocol

__all__ = ["print_flow_error", "flow_error_exit_code"]

_KINDS = frozenset(str(kind) for kind in BranchKind)


def print_flow_error(error: FlowError, console: ConsoleProtocol) -> None:
    """Print a workflow error, with git's own output underneath when there is any."""
    match error:
        case CommandFailed(operation=operation, message=message, output=output):
            console.error(message)
            console.print(f"git {operation}", Style.DIM)
            if output:
                console.print(output, Style.DIM)
        case MalformedVersionFile(path=path):
            console.error(f"The version file contained a poorly formed version number ({path}).")
        case VersionFileError(path=path, reason=reason):
            console.error(f"Could not access the version file {path}: {reason}")
        case InvalidBranch(expected=expected, actual=actual) if expected in _KINDS:
            console.error(f"This is not a {expected} branch ({actual}).")
        case InvalidBranch(expected=expected, actual=actual) if "<" in expected:
            console.error(f"Branch {actual} does not match {expected}.")
        case InvalidBranch(actual=actual):
            console.error(f"Unknown branch format ({actual}).")
        case MissingArgument(hint=hint):
            console.error(hint)


def flow_error_exit_code(error: FlowError) -> int:
    """Get the exit code for a workflow error."""
    match error:
        case MissingArgument() | InvalidBranch():
            return int(ErrorCode.USER_ERROR)
        case CommandFailed():
            return int(ErrorCode.GIT_ERROR)
        case MalformedVersionFile() | VersionFileError():
            return int(ErrorCode.VERSION_ERROR)
