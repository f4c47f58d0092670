"""Semantic version parsing and the tracked version file.

The version file holds ``major.minor.patch`` optionally followed by a
pre-release label (``1.3.0.beta1``). Only the leading triple is parsed.
Every write is staged and committed so the file on disk never diverges from
what the repository tracks.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from bflow.core.result import Err, Ok, Result
from bflow.git.repository import Repository
from bflow.services.flow_errors import (
    CommandFailed,
    FlowError,
    MalformedVersionFile,
    VersionFileError,
)

if TYPE_CHECKING:
    from bflow.output.console import ConsoleProtocol

__all__ = [
    "BumpKind",
    "DEFAULT_VERSION",
    "Version",
    "VersionStore",
    "extract_version",
    "parse_version",
]

BumpKind = Literal["major", "minor", "patch"]

DEFAULT_VERSION = "0.0.0"

_LEADING_RE = re.compile(r"^(\d+)\.(\d+)\.(\d+)")
_EMBEDDED_RE = re.compile(r"\d+\.\d+\.\d+")

_DEFAULT_NOTICE = (
    "Writing out a default version file as none was found. "
    "Make sure your code reads its version from this file; it is updated "
    "and committed on every release and patch so the repository stays clean. "
    "Follow semantic versioning: https://semver.org"
)


@dataclass(frozen=True, slots=True, order=True)
class Version:
    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def with_suffix(self, label: str) -> str:
        """Render with a pre-release label, e.g. ``1.3.0.beta1``."""
        return f"{self}.{label}" if label else str(self)

    def bump(self, kind: BumpKind) -> Version:
        match kind:
            case "major":
                return Version(self.major + 1, 0, 0)
            case "minor":
                return Version(self.major, self.minor + 1, 0)
            case "patch":
                return Version(self.major, self.minor, self.patch + 1)
            case _:
                raise AssertionError(f"unexpected bump kind: {kind}")


def parse_version(text: str) -> Version | None:
    """Parse the leading ``major.minor.patch``; any suffix is ignored."""
    m = _LEADING_RE.match(text)
    if m is None:
        return None
    return Version(int(m.group(1)), int(m.group(2)), int(m.group(3)))


def extract_version(text: str) -> str | None:
    """First ``major.minor.patch`` found anywhere in ``text`` (``v1.3.0`` -> ``1.3.0``)."""
    m = _EMBEDDED_RE.search(text)
    return m.group(0) if m else None


class VersionStore:
    """Reads and commits the version file of a repository."""

    def __init__(
        self,
        repo: Repository,
        version_file: str,
        *,
        console: ConsoleProtocol | None = None,
    ) -> None:
        self._repo = repo
        self._version_file = version_file
        self._console = console

    @property
    def path(self) -> Path:
        return self._repo.path / self._version_file

    def read(self) -> Result[Version, FlowError]:
        """Current version.

        A missing file is created with ``0.0.0`` and committed. A file whose
        content does not start with a version triple is an error and nothing
        is run in git.
        """
        if not self.path.exists():
            if self._console is not None:
                self._console.warning(_DEFAULT_NOTICE)
            return self.write(DEFAULT_VERSION).map(lambda _: Version(0, 0, 0))

        try:
            content = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            return Err(VersionFileError(path=self.path, reason=str(e)))

        version = parse_version(content)
        if version is None:
            return Err(MalformedVersionFile(path=self.path, content=content))
        return Ok(version)

    def write(self, value: str) -> Result[str, FlowError]:
        """Overwrite the file with ``value``, then stage and commit it.

        Fails if any of the three steps fails; a failed commit after a
        successful write is reported, not ignored. The commit is made even
        when the content is unchanged, so writing a value twice commits twice.
        """
        try:
            self.path.write_text(value, encoding="utf-8")
        except OSError as e:
            return Err(VersionFileError(path=self.path, reason=str(e)))

        match self._repo.add(self._version_file):
            case Err(e):
                return Err(CommandFailed.from_git(e))
            case Ok(_):
                pass

        message = f"Updating application version to {value}."
        match self._repo.commit(message, allow_empty=True):
            case Err(e):
                return Err(CommandFailed.from_git(e))
            case Ok(output):
                return Ok(output)
