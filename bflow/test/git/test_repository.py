"""Tests for git/repository.py."""

from __future__ import annotations

from pathlib import Path

from bflow.core.result import Err, Ok
from bflow.git.repository import GitError, Repository
from bflow.test._fakes import FakeGit


def _repo(git: FakeGit, **kwargs: object) -> Repository:
    return Repository(Path("/work"), runner=git, **kwargs)  # type: ignore[arg-type]


class TestCommands:
    def test_checkout(self) -> None:
        git = FakeGit()
        assert _repo(git).checkout("development") == Ok("")
        assert git.calls == [["git", "checkout", "development"]]

    def test_create_branch(self) -> None:
        git = FakeGit()
        _repo(git).create_branch("feature/login")
        assert git.commands == ["checkout -b feature/login"]

    def test_push_uses_remote(self) -> None:
        git = FakeGit()
        _repo(git, remote="upstream").push("v1.2.0")
        assert git.commands == ["push upstream v1.2.0"]

    def test_push_deletion_refspec(self) -> None:
        git = FakeGit()
        _repo(git).push(":feature/login")
        assert git.commands == ["push origin :feature/login"]

    def test_delete_local_branch(self) -> None:
        git = FakeGit()
        _repo(git).delete_local_branch("feature/login")
        assert git.commands == ["branch -D feature/login"]

    def test_merge_no_ff_message_is_one_argument(self) -> None:
        git = FakeGit()
        _repo(git).merge_no_ff("feature/login", "development")
        assert git.calls == [
            [
                "git",
                "merge",
                "--no-ff",
                "-m",
                "Merging feature/login into development",
                "feature/login",
            ]
        ]

    def test_tag(self) -> None:
        git = FakeGit()
        _repo(git).tag("v1.3.0")
        assert git.commands == ["tag v1.3.0"]

    def test_add_and_commit(self) -> None:
        git = FakeGit()
        repo = _repo(git)
        repo.add("version")
        repo.commit("Updating application version to 1.0.0.")
        assert git.calls == [
            ["git", "add", "version"],
            ["git", "commit", "-m", "Updating application version to 1.0.0."],
        ]

    def test_commit_allow_empty(self) -> None:
        git = FakeGit()
        _repo(git).commit("Updating application version to 1.0.0.", allow_empty=True)
        assert git.calls == [
            ["git", "commit", "--allow-empty", "-m", "Updating application version to 1.0.0."],
        ]

    def test_current_branch_is_stripped(self) -> None:
        git = FakeGit(branch="release/v1.2.0")
        assert _repo(git).current_branch() == Ok("release/v1.2.0")
        assert git.commands == ["rev-parse --abbrev-ref HEAD"]


class TestErrors:
    def test_failure_becomes_git_error(self) -> None:
        git = FakeGit()
        git.fail("checkout", output="error: pathspec 'nope' did not match\n")

        result = _repo(git).checkout("nope")

        assert isinstance(result, Err)
        assert result.error == GitError(
            command="checkout nope",
            message="Could not check out nope.",
            output="error: pathspec 'nope' did not match",
            returncode=1,
        )

    def test_merge_failure_suggests_manual_merge(self) -> None:
        git = FakeGit()
        git.fail("merge", output="CONFLICT (content): Merge conflict in app.py")

        result = _repo(git).merge_no_ff("development", "feature/login")

        assert isinstance(result, Err)
        assert "Try to manually merge" in result.error.message
        assert "CONFLICT" in result.error.output

    def test_current_branch_failure(self) -> None:
        git = FakeGit()
        git.fail("rev-parse", output="fatal: not a git repository")

        result = _repo(git).current_branch()

        assert isinstance(result, Err)
        assert result.error.message == "Could not divine the current branch name."


def test_on_command_sees_full_command_line() -> None:
    git = FakeGit()
    seen: list[list[str]] = []

    _repo(git, on_command=seen.append).tag("v2.0.0")

    assert seen == [["git", "tag", "v2.0.0"]]


def test_runner_receives_repository_path() -> None:
    seen: list[Path] = []

    def runner(cmd: list[str], cwd: Path) -> Ok[str]:
        del cmd
        seen.append(cwd)
        return Ok("")

    Repository(Path("/work/tree"), runner=runner).checkout("master")

    assert seen == [Path("/work/tree")]
