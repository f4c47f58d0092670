"""Classification of branch names by their workflow prefix."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

__all__ = ["Branch", "BranchKind", "Classification", "Unclassified", "classify_branch"]


class BranchKind(StrEnum):
    FEATURE = "feature"
    RELEASE = "release"
    PATCH = "patch"


@dataclass(frozen=True, slots=True)
class Branch:
    """A workflow branch, e.g. ``Branch(FEATURE, "login")`` for ``feature/login``."""

    kind: BranchKind
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.kind}/{self.name}"


@dataclass(frozen=True, slots=True)
class Unclassified:
    """A branch outside the workflow (``master``, ``main``, detached ``HEAD``)."""

    name: str


type Classification = Branch | Unclassified


def classify_branch(name: str) -> Classification:
    name = name.strip()
    for kind in BranchKind:
        prefix = f"{kind}/"
        if name.startswith(prefix) and len(name) > len(prefix):
            return Branch(kind, name[len(prefix) :])
    return Unclassified(name)
