"""Branch workflow engine.

Primitive operations wrap one or a few git commands; the feature, release
and patch workflows are fixed sequences of primitives. Every sequence stops
at the first failure: later steps are not run, nothing is retried and
nothing already done is rolled back. If a merge lands but the following push
is rejected, the merge commit stays and has to be resolved by hand.

Only one workflow should run per checkout at a time; no locking is done.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from bflow.core.config import FlowConfig
from bflow.core.result import Err, Ok, Result
from bflow.git.repository import GitError, Repository
from bflow.services.branches import Branch, BranchKind, Unclassified, classify_branch
from bflow.services.flow_errors import CommandFailed, FlowError, InvalidBranch, MissingArgument
from bflow.services.versioning import BumpKind, VersionStore, extract_version

if TYPE_CHECKING:
    from bflow.output.console import ConsoleProtocol

__all__ = [
    "Confirm",
    "FlowEngine",
    "FlowOutcome",
    "OutcomeStatus",
    "run_steps",
]

type Confirm = Callable[[str], bool]
type Step = Callable[[], Result[object, FlowError]]


class OutcomeStatus(StrEnum):
    DONE = "done"
    CANCELLED = "cancelled"


@dataclass(frozen=True, slots=True)
class FlowOutcome:
    """What a workflow did.

    Attributes:
        action: Headline, e.g. ``STARTED FEATURE``.
        branch: Full name of the branch the workflow acted on.
        status: ``CANCELLED`` when the review prompt was declined.
    """

    action: str
    branch: str
    status: OutcomeStatus = OutcomeStatus.DONE

    @property
    def cancelled(self) -> bool:
        return self.status is OutcomeStatus.CANCELLED


def run_steps(*steps: Step) -> Result[None, FlowError]:
    """Run steps in order, returning the first Err without running the rest."""
    for step in steps:
        result = step()
        if isinstance(result, Err):
            return result
    return Ok(None)


def _lift(result: Result[str, GitError]) -> Result[str, FlowError]:
    return result.map_err(CommandFailed.from_git)


class FlowEngine:
    """Runs the feature, release and patch workflows against one repository."""

    def __init__(
        self,
        repo: Repository,
        config: FlowConfig,
        *,
        confirm: Confirm,
        console: ConsoleProtocol | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            repo: Repository the git commands run in.
            config: Trunk names, remote, version file and labels.
            confirm: Asked before a finish merges anything; receives the
                question and returns True only on an explicit yes.
            console: Receives warnings such as the default version notice.
        """
        self.repo = repo
        self.config = config
        self.versions = VersionStore(repo, config.version_file, console=console)
        self._confirm = confirm

    # Primitives

    def checkout(self, branch: str) -> Result[str, FlowError]:
        return _lift(self.repo.checkout(branch))

    def push(self, ref: str) -> Result[str, FlowError]:
        """Push a branch, a tag, or a ``:branch`` deletion."""
        return _lift(self.repo.push(ref))

    def new_branch(self, source: str, name: str) -> Result[str, FlowError]:
        """Branch ``name`` off ``source`` and publish it."""
        return (
            self.checkout(source)
            .flat_map(lambda _: _lift(self.repo.create_branch(name)))
            .flat_map(lambda _: self.push(name))
        )

    def delete_branch(self, name: str) -> Result[str, FlowError]:
        """Delete the branch locally, then on the remote."""
        return _lift(self.repo.delete_local_branch(name)).flat_map(
            lambda _: self.push(f":{name}")
        )

    def merge(self, source: str, target: str) -> Result[str, FlowError]:
        """Merge ``source`` into ``target`` with a merge commit and push ``target``."""
        return (
            self.checkout(target)
            .flat_map(lambda _: _lift(self.repo.merge_no_ff(source, target)))
            .flat_map(lambda _: self.push(target))
        )

    def create_tag(self, tag: str) -> Result[str, FlowError]:
        """Tag the tip of the master trunk."""
        return self.checkout(self.config.master).flat_map(lambda _: _lift(self.repo.tag(tag)))

    def current_branch(self) -> Result[Branch, FlowError]:
        """Classify the checked out branch; an unrecognised name is an error."""
        result = _lift(self.repo.current_branch())
        if isinstance(result, Err):
            return result

        match classify_branch(result.value):
            case Branch() as branch:
                return Ok(branch)
            case Unclassified(name=name):
                return Err(InvalidBranch(expected="feature, release or patch", actual=name))

    def require_branch(self, kind: BranchKind) -> Result[Branch, FlowError]:
        result = self.current_branch()
        if isinstance(result, Err):
            return result
        branch = result.value
        if branch.kind is not kind:
            return Err(InvalidBranch(expected=str(kind), actual=branch.full_name))
        return Ok(branch)

    # Feature

    def start_feature(self, name: str | None) -> Result[FlowOutcome, FlowError]:
        name = (name or "").strip()
        if not name:
            return Err(
                MissingArgument(
                    name="name",
                    hint="Please specify a feature name. (Ex. bflow feature start mybranch)",
                )
            )

        branch = f"{BranchKind.FEATURE}/{name}"
        return self.new_branch(self.config.development, branch).map(
            lambda _: FlowOutcome("STARTED FEATURE", branch)
        )

    def finish_feature(self) -> Result[FlowOutcome, FlowError]:
        """Bring development into the feature, fold the feature back, delete it."""
        result = self.require_branch(BranchKind.FEATURE)
        if isinstance(result, Err):
            return result

        branch = result.value.full_name
        development = self.config.development
        if not self._confirm(_review_question(branch)):
            return Ok(FlowOutcome("FINISHED FEATURE", branch, OutcomeStatus.CANCELLED))

        return run_steps(
            lambda: self.merge(development, branch),
            lambda: self.merge(branch, development),
            lambda: self.delete_branch(branch),
        ).map(lambda _: FlowOutcome("FINISHED FEATURE", branch))

    # Release

    def start_release(self, kind: str) -> Result[FlowOutcome, FlowError]:
        if kind not in ("minor", "major"):
            return Err(
                MissingArgument(
                    name="kind",
                    hint="Please specify a release kind: minor or major.",
                )
            )
        bump: BumpKind = "major" if kind == "major" else "minor"
        return self._start(
            BranchKind.RELEASE,
            bump,
            source=self.config.development,
            action=f"STARTED {kind.upper()} RELEASE",
        )

    def finish_release(self) -> Result[FlowOutcome, FlowError]:
        return self._finish(BranchKind.RELEASE, action="FINISHED RELEASE")

    # Patch

    def start_patch(self) -> Result[FlowOutcome, FlowError]:
        return self._start(
            BranchKind.PATCH, "patch", source=self.config.master, action="STARTED PATCH"
        )

    def finish_patch(self) -> Result[FlowOutcome, FlowError]:
        return self._finish(BranchKind.PATCH, action="FINISHED PATCH")

    # Shared release/patch sequences

    def _start(
        self,
        kind: BranchKind,
        bump: BumpKind,
        *,
        source: str,
        action: str,
    ) -> Result[FlowOutcome, FlowError]:
        result = self.versions.read()
        if isinstance(result, Err):
            return result

        version = result.value.bump(bump)
        branch = f"{kind}/v{version}"
        return run_steps(
            lambda: self.new_branch(source, branch),
            lambda: self.versions.write(version.with_suffix(self.config.prerelease)),
        ).map(lambda _: FlowOutcome(action, branch))

    def _finish(self, kind: BranchKind, *, action: str) -> Result[FlowOutcome, FlowError]:
        """Merge into both trunks, tag master, push the tag, delete the branch.

        The bare version is committed on the branch before the review prompt
        so that the merges carry it.
        """
        result = self.require_branch(kind)
        if isinstance(result, Err):
            return result

        current = result.value
        branch = current.full_name
        tag = current.name
        version = extract_version(tag)
        if version is None:
            return Err(InvalidBranch(expected=f"{kind}/v<major>.<minor>.<patch>", actual=branch))

        written = self.versions.write(version)
        if isinstance(written, Err):
            return written

        if not self._confirm(_review_question(branch)):
            return Ok(FlowOutcome(action, branch, OutcomeStatus.CANCELLED))

        return run_steps(
            lambda: self.merge(branch, self.config.development),
            lambda: self.merge(branch, self.config.master),
            lambda: self.create_tag(tag),
            lambda: self.push(tag),
            lambda: self.delete_branch(branch),
        ).map(lambda _: FlowOutcome(action, branch))


def _review_question(branch: str) -> str:
    return f"Has a merge request been cleared for {branch}"
