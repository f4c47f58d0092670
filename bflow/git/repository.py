"""Git repository abstraction.

Each method on ``Repository`` issues exactly one git command and returns
``Ok(output)`` or ``Err(GitError)``. Multi-command operations (merge then
push, delete then push the deletion) are composed in ``bflow.services.flow``.

Usage:
    repo = Repository(Path("."), remote="origin")

    match repo.checkout("development"):
        case Ok(_):
            ...
        case Err(e):
            print(f"{e.message}\\n{e.output}")
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from bflow.core.result import Err, Ok, Result
from bflow.platform.process import ProcessError, Runner
from bflow.platform.process import run as run_process

__all__ = ["GitError", "Repository"]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git subcommand line that failed (without ``git``).
        message: What bflow was trying to do, phrased for the user.
        output: Captured combined output of the failed command.
        returncode: Process return code.
    """

    command: str
    message: str
    output: str = ""
    returncode: int = 1


class Repository:
    """A working tree that git commands are run in.

    Attributes:
        path: Repository root.
        remote: Remote used by ``push``.
    """

    def __init__(
        self,
        path: Path,
        *,
        remote: str = "origin",
        runner: Runner = run_process,
        on_command: Callable[[list[str]], None] | None = None,
    ) -> None:
        """Initialize repository.

        Args:
            path: Repository root.
            remote: Remote pushed to.
            runner: Executes a command; replaced in tests.
            on_command: Called with the full command line before it runs.
        """
        self.path = path
        self.remote = remote
        self._runner = runner
        self._on_command = on_command

    def checkout(self, branch: str) -> Result[str, GitError]:
        return self._git(["checkout", branch], f"Could not check out {branch}.")

    def create_branch(self, branch: str) -> Result[str, GitError]:
        """Create ``branch`` at HEAD and switch to it."""
        return self._git(["checkout", "-b", branch], f"Could not start a new branch {branch}.")

    def push(self, ref: str) -> Result[str, GitError]:
        """Push a branch, a tag, or a ``:name`` deletion refspec."""
        return self._git(["push", self.remote, ref], f"Could not push up the branch {ref}.")

    def delete_local_branch(self, branch: str) -> Result[str, GitError]:
        return self._git(["branch", "-D", branch], f"Could not delete local branch {branch}.")

    def merge_no_ff(self, source: str, target: str) -> Result[str, GitError]:
        """Merge ``source`` into the checked out ``target`` with a merge commit."""
        return self._git(
            ["merge", "--no-ff", "-m", f"Merging {source} into {target}", source],
            f"Could not merge {source} into {target}. "
            "Try to manually merge to see if there are conflicts.",
        )

    def tag(self, name: str) -> Result[str, GitError]:
        return self._git(["tag", name], f"Could not create tag {name}.")

    def add(self, path: str) -> Result[str, GitError]:
        return self._git(["add", path], f"Couldn't add file {path}.")

    def commit(self, message: str, *, allow_empty: bool = False) -> Result[str, GitError]:
        flags = ["--allow-empty"] if allow_empty else []
        return self._git(["commit", *flags, "-m", message], "Could not commit changes.")

    def current_branch(self) -> Result[str, GitError]:
        """Name of the checked out branch (``HEAD`` when detached)."""
        result = self._git(
            ["rev-parse", "--abbrev-ref", "HEAD"], "Could not divine the current branch name."
        )
        return result.map(str.strip)

    def _git(self, args: list[str], message: str) -> Result[str, GitError]:
        cmd = ["git", *args]
        if self._on_command is not None:
            self._on_command(cmd)

        match self._runner(cmd, self.path):
            case Ok(output):
                return Ok(output)
            case Err(e):
                return Err(_git_error(args, message, e))


def _git_error(args: list[str], message: str, error: ProcessError) -> GitError:
    return GitError(
        command=" ".join(args),
        message=message,
        output=error.output.strip(),
        returncode=error.returncode,
    )
