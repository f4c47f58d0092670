"""End-to-end workflows against a real git binary and a local bare remote."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import pytest

from bflow.core.config import FlowConfig
from bflow.core.result import Err, Ok
from bflow.git.repository import Repository
from bflow.output.console import MockConsole
from bflow.services.flow import FlowEngine

pytestmark = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


def _git(cwd: Path, *args: str) -> str:
    proc = subprocess.run(
        ["git", *args], cwd=str(cwd), check=True, capture_output=True, text=True
    )
    return proc.stdout.strip()


@pytest.fixture
def work(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    gitconfig = tmp_path / "gitconfig"
    gitconfig.write_text("")
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(gitconfig))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    for var in ("GIT_AUTHOR_NAME", "GIT_COMMITTER_NAME"):
        monkeypatch.setenv(var, "bflow tests")
    for var in ("GIT_AUTHOR_EMAIL", "GIT_COMMITTER_EMAIL"):
        monkeypatch.setenv(var, "bflow@example.invalid")

    remote = tmp_path / "remote.git"
    remote.mkdir()
    _git(remote, "init", "--bare")

    work = tmp_path / "work"
    work.mkdir()
    _git(work, "init")
    _git(work, "symbolic-ref", "HEAD", "refs/heads/master")
    (work / "README").write_text("hello\n")
    _git(work, "add", "README")
    _git(work, "commit", "-m", "initial")
    _git(work, "remote", "add", "origin", str(remote))
    _git(work, "push", "origin", "master")
    _git(work, "checkout", "-b", "development")
    _git(work, "push", "origin", "development")
    return work


def _engine(work: Path, console: MockConsole) -> FlowEngine:
    return FlowEngine(Repository(work), FlowConfig(), confirm=lambda _q: True, console=console)


def _remote_heads(work: Path) -> str:
    return _git(work, "ls-remote", "--heads", "--tags", "origin")


def test_feature_round_trip(work: Path) -> None:
    engine = _engine(work, MockConsole())

    assert isinstance(engine.start_feature("login"), Ok)
    assert _git(work, "rev-parse", "--abbrev-ref", "HEAD") == "feature/login"
    assert "refs/heads/feature/login" in _remote_heads(work)

    (work / "login.txt").write_text("login\n")
    _git(work, "add", "login.txt")
    _git(work, "commit", "-m", "add login")

    assert isinstance(engine.finish_feature(), Ok)
    assert _git(work, "rev-parse", "--abbrev-ref", "HEAD") == "development"
    assert (work / "login.txt").exists()
    assert "feature/login" not in _git(work, "branch", "--list")
    assert "feature/login" not in _remote_heads(work)
    assert "Merging feature/login into development" in _git(work, "log", "-1", "--format=%s")


def test_release_then_patch(work: Path) -> None:
    console = MockConsole()
    engine = _engine(work, console)

    started = engine.start_release("minor")
    assert isinstance(started, Ok)
    assert started.value.branch == "release/v0.1.0"
    assert console.has_warning()
    assert (work / "version").read_text() == "0.1.0.beta1"

    assert isinstance(engine.finish_release(), Ok)
    assert _git(work, "rev-parse", "--abbrev-ref", "HEAD") == "master"
    assert (work / "version").read_text() == "0.1.0"
    assert "refs/tags/v0.1.0" in _remote_heads(work)
    assert "release/v0.1.0" not in _remote_heads(work)

    patched = engine.start_patch()
    assert isinstance(patched, Ok)
    assert patched.value.branch == "patch/v0.1.1"

    assert isinstance(engine.finish_patch(), Ok)
    assert _git(work, "show", "development:version") == "0.1.1"
    assert _git(work, "show", "master:version") == "0.1.1"
    assert "refs/tags/v0.1.1" in _remote_heads(work)


def test_git_failure_is_returned(work: Path) -> None:
    engine = _engine(work, MockConsole())
    _git(work, "tag", "v9.9.9")

    result = engine.create_tag("v9.9.9")

    assert isinstance(result, Err)
    assert "already exists" in result.error.output  # type: ignore[union-attr]


def test_same_version_written_twice_commits_twice(work: Path) -> None:
    engine = _engine(work, MockConsole())
    before = int(_git(work, "rev-list", "--count", "HEAD"))

    assert isinstance(engine.versions.write("1.0.0"), Ok)
    assert isinstance(engine.versions.write("1.0.0"), Ok)

    assert int(_git(work, "rev-list", "--count", "HEAD")) == before + 2
    assert _git(work, "show", "HEAD:version") == "1.0.0"


def test_release_finish_after_declined_review(work: Path) -> None:
    declining = FlowEngine(
        Repository(work), FlowConfig(), confirm=lambda _q: False, console=MockConsole()
    )
    assert isinstance(declining.start_release("minor"), Ok)

    declined = declining.finish_release()
    assert isinstance(declined, Ok)
    assert declined.value.cancelled
    assert "refs/tags/v0.1.0" not in _remote_heads(work)

    finished = _engine(work, MockConsole()).finish_release()

    assert isinstance(finished, Ok)
    assert not finished.value.cancelled
    assert "refs/tags/v0.1.0" in _remote_heads(work)
    assert _git(work, "show", "master:version") == "0.1.0"
