from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from bflow.git.repository import GitError


@dataclass(frozen=True, slots=True)
class CommandFailed:
    operation: str
    message: str
    output: str
    returncode: int = 1

    @classmethod
    def from_git(cls, error: GitError) -> CommandFailed:
        return cls(
            operation=error.command,
            message=error.message,
            output=error.output,
            returncode=error.returncode,
        )


@dataclass(frozen=True, slots=True)
class MalformedVersionFile:
    path: Path
    content: str


@dataclass(frozen=True, slots=True)
class VersionFileError:
    path: Path
    reason: str


@dataclass(frozen=True, slots=True)
class InvalidBranch:
    expected: str
    actual: str


@dataclass(frozen=True, slots=True)
class MissingArgument:
    name: str
    hint: str


FlowError = (
    CommandFailed | MalformedVersionFile | VersionFileError | InvalidBranch | MissingArgument
)
