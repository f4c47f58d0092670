"""Subprocess execution with Result-based error handling.

Commands run synchronously with stderr folded into stdout, so a failure
carries exactly what the user would have seen in a terminal. No timeout is
applied: a merge or push blocks until git returns.

Usage:
    match run(["git", "status"], cwd=Path(".")):
        case Ok(output):
            print(output)
        case Err(error):
            print(f"Failed: {error.output}")
"""

from __future__ import annotations

import subprocess
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from bflow.core.result import Err, Ok, Result

__all__ = ["ProcessError", "Runner", "run"]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: Exit code, or -1 if the process could not be started.
        output: Combined stdout and stderr.
    """

    command: tuple[str, ...]
    returncode: int
    output: str

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        return f"{cmd_str} failed (exit {self.returncode})"


type Runner = Callable[[list[str], Path], Result[str, ProcessError]]


def run(cmd: list[str], cwd: Path) -> Result[str, ProcessError]:
    """Execute a command and return its combined output.

    Args:
        cmd: Command and arguments.
        cwd: Working directory.

    Returns:
        Ok(output) on zero exit status, Err(ProcessError) otherwise.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            check=False,
        )
    except OSError as e:
        return Err(ProcessError(command=tuple(cmd), returncode=-1, output=str(e)))

    if proc.returncode != 0:
        return Err(
            ProcessError(command=tuple(cmd), returncode=proc.returncode, output=proc.stdout)
        )

    return Ok(proc.stdout)
