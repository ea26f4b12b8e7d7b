"""Dataclasses shared across modules."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True, order=True)
class RemoteBranch:
    """A branch as seen through a remote-tracking ref."""

    remote: str
    branch: str


@dataclass(frozen=True)
class ShelfTarget:
    """The ref whose working tree is being shelved."""

    ref: str
    detached: bool = False

    @property
    def push_source(self) -> str:
        # The short hash of a detached HEAD names the commit before the shelf commit.
        return "HEAD" if self.detached else self.ref


@dataclass(frozen=True)
class ShelfPlan:
    """Everything decided before the working tree is touched."""

    target: ShelfTarget
    email: str
    identifier: str
    remote: str
    amend: bool
    requested_remote: str

    @property
    def relocated(self) -> bool:
        return self.remote != self.requested_remote

    @property
    def refspec(self) -> str:
        return f"{self.target.push_source}:refs/heads/{self.identifier}"


class ShelfOutcome(str, Enum):
    SHELVED = "shelved"
    NOTHING_TO_SHELF = "nothing-to-shelf"
    PUSH_FAILED = "push-failed"
    DRY_RUN = "dry-run"


@dataclass(frozen=True)
class ShelfResult:
    outcome: ShelfOutcome
    returncode: int
    plan: ShelfPlan

    @property
    def ok(self) -> bool:
        return self.returncode == 0
