"""High-level orchestration for shelving the working tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from . import git
from .config import Config
from .exceptions import IdentityError, ShelfDesyncError
from .markers import ShelfMarkerStore, marker_key
from .models import RemoteBranch, ShelfOutcome, ShelfPlan, ShelfResult, ShelfTarget


def shelf_identifier(email: str, ref: str, namespace: str = Config.namespace) -> str:
    return f"{namespace}/{email}/{ref}"


def find_shelf_remote(
    identifier: str, branches: Iterable[RemoteBranch], preferred: str | None = None
) -> str | None:
    """Return the remote hosting ``identifier``, favouring ``preferred`` on ties."""

    hosts = sorted({record.remote for record in branches if record.branch == identifier})
    if not hosts:
        return None
    if preferred in hosts:
        return preferred
    return hosts[0]


@dataclass
class ShelfService:
    repo_path: Path
    markers: ShelfMarkerStore = field(init=False)

    def __post_init__(self) -> None:
        self.markers = ShelfMarkerStore(self.repo_path)

    def resolve_target(self) -> ShelfTarget:
        branch = git.current_branch(self.repo_path)
        if branch:
            return ShelfTarget(ref=branch)
        return ShelfTarget(ref=git.short_head(self.repo_path), detached=True)

    def resolve_email(self) -> str:
        email = git.config_get(self.repo_path, "user.email")
        if not email:
            raise IdentityError(
                "No user email configured. Shelves are namespaced by email; "
                "run `git config user.email you@example.com` first."
            )
        return email

    def remote_exists(self, remote: str) -> bool:
        return git.remote_reachable(self.repo_path, remote)

    def plan(self, requested_remote: str) -> ShelfPlan:
        """Resolve ref, identity and the remote to publish to.

        Raises IdentityError or ShelfDesyncError before anything is written.
        """

        target = self.resolve_target()
        email = self.resolve_email()
        identifier = shelf_identifier(email, target.ref)
        amend = self.markers.is_shelved(target.ref)
        remote = requested_remote
        if amend:
            found = find_shelf_remote(
                identifier, git.remote_tracking_branches(self.repo_path), preferred=requested_remote
            )
            if found is None:
                raise ShelfDesyncError(
                    f"'{target.ref}' is marked as shelved ({marker_key(target.ref)}) but no remote "
                    f"has a branch named {identifier}. Local and remote shelf state are out of sync; "
                    "nothing was changed."
                )
            remote = found
        else:
            git.fetch_all(self.repo_path)
            found = find_shelf_remote(
                identifier, git.remote_tracking_branches(self.repo_path), preferred=requested_remote
            )
            if found is not None:
                raise ShelfDesyncError(
                    f"{found}/{identifier} already exists but '{target.ref}' has no local shelf marker "
                    f"({marker_key(target.ref)}). Local and remote shelf state are out of sync; "
                    "nothing was changed."
                )
        return ShelfPlan(
            target=target,
            email=email,
            identifier=identifier,
            remote=remote,
            amend=amend,
            requested_remote=requested_remote,
        )

    def execute(self, plan: ShelfPlan, *, dry_run: bool = False) -> ShelfResult:
        if dry_run:
            return ShelfResult(ShelfOutcome.DRY_RUN, 0, plan)
        git.add_all(self.repo_path)
        committed = git.commit(self.repo_path, Config.commit_message, amend=plan.amend)
        if committed.returncode != 0:
            return ShelfResult(ShelfOutcome.NOTHING_TO_SHELF, committed.returncode, plan)
        pushed = git.push(self.repo_path, plan.remote, plan.refspec, force=plan.amend)
        if pushed.returncode != 0:
            return ShelfResult(ShelfOutcome.PUSH_FAILED, pushed.returncode, plan)
        marked = self.markers.mark_shelved(plan.target.ref)
        return ShelfResult(ShelfOutcome.SHELVED, marked.returncode, plan)

    def shelve(self, requested_remote: str, *, dry_run: bool = False) -> ShelfResult:
        return self.execute(self.plan(requested_remote), dry_run=dry_run)
