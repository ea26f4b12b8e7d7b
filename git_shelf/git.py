"""Thin wrappers around git CLI commands."""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Iterable

from .exceptions import GitCommandError
from .models import RemoteBranch

logger = logging.getLogger(__name__)

REMOTES_PREFIX = "refs/remotes/"


def run_git(
    args: Iterable[str],
    *,
    cwd: Path,
    raise_on_error: bool = True,
    capture: bool = True,
) -> subprocess.CompletedProcess[str]:
    """Execute a git command and optionally raise on failure.

    With ``capture=False`` git writes straight to the terminal, which is what
    the user wants to see for commit and push.
    """

    cmd = ["git", *args]
    logger.debug("Running command: %s", " ".join(cmd))
    proc = subprocess.run(
        cmd,
        cwd=str(cwd),
        capture_output=capture,
        text=True,
        check=False,
    )
    logger.debug("Exit status %s: %s", proc.returncode, " ".join(cmd))
    if raise_on_error and proc.returncode != 0:
        raise GitCommandError(cmd, proc.returncode, proc.stderr)
    return proc


def git_available() -> bool:
    return shutil.which("git") is not None


def is_inside_work_tree(path: Path) -> bool:
    proc = run_git(["rev-parse", "--is-inside-work-tree"], cwd=path, raise_on_error=False)
    return proc.returncode == 0 and proc.stdout.strip() == "true"


def current_branch(path: Path) -> str | None:
    """Short branch name, or None when HEAD is detached."""
    proc = run_git(["symbolic-ref", "--short", "-q", "HEAD"], cwd=path, raise_on_error=False)
    if proc.returncode == 0:
        return proc.stdout.strip() or None
    return None


def short_head(path: Path) -> str:
    proc = run_git(["rev-parse", "--short", "HEAD"], cwd=path)
    return proc.stdout.strip()


def config_get(path: Path, key: str, *, as_bool: bool = False, local: bool = False) -> str | None:
    """Return a config value, or None when the key is unset."""
    args = ["config"]
    if local:
        args.append("--local")
    if as_bool:
        args.append("--bool")
    args.extend(["--get", key])
    proc = run_git(args, cwd=path, raise_on_error=False)
    if proc.returncode == 1:
        return None
    if proc.returncode != 0:
        raise GitCommandError(["git", *args], proc.returncode, proc.stderr)
    return proc.stdout.strip()


def config_set_local(
    path: Path, key: str, value: str, *, as_bool: bool = False
) -> subprocess.CompletedProcess[str]:
    args = ["config", "--local"]
    if as_bool:
        args.append("--bool")
    args.extend([key, value])
    return run_git(args, cwd=path, raise_on_error=False)


def list_remotes(path: Path) -> list[str]:
    proc = run_git(["remote"], cwd=path)
    return [line.strip() for line in proc.stdout.splitlines() if line.strip()]


def remote_reachable(path: Path, remote: str) -> bool:
    proc = run_git(["ls-remote", "--heads", remote], cwd=path, raise_on_error=False)
    return proc.returncode == 0


def remote_tracking_branches(path: Path) -> set[RemoteBranch]:
    remotes = list_remotes(path)
    proc = run_git(["for-each-ref", "--format=%(refname)", REMOTES_PREFIX], cwd=path)
    return parse_remote_refs(proc.stdout.splitlines(), remotes)


def parse_remote_refs(lines: Iterable[str], remotes: Iterable[str]) -> set[RemoteBranch]:
    """Split ``refs/remotes/<remote>/<branch>`` lines into records.

    Remote names may contain slashes, so the longest known remote that
    prefixes the ref wins. Refs under an unknown remote are dropped, as are
    the symbolic ``<remote>/HEAD`` pointers.
    """

    ordered = sorted({remote for remote in remotes if remote}, key=len, reverse=True)
    records: set[RemoteBranch] = set()
    for raw in lines:
        line = raw.strip()
        if not line.startswith(REMOTES_PREFIX):
            continue
        name = line[len(REMOTES_PREFIX):]
        for remote in ordered:
            prefix = f"{remote}/"
            if name.startswith(prefix):
                branch = name[len(prefix):]
                if branch and branch != "HEAD":
                    records.add(RemoteBranch(remote=remote, branch=branch))
                break
    return records


def fetch_all(path: Path) -> None:
    run_git(["fetch", "--all", "--quiet"], cwd=path)


def add_all(path: Path) -> None:
    run_git(["add", "--all"], cwd=path)


def commit(path: Path, message: str, *, amend: bool = False) -> subprocess.CompletedProcess[str]:
    args = ["commit", "--no-gpg-sign", "-m", message]
    if amend:
        args.insert(1, "--amend")
    return run_git(args, cwd=path, raise_on_error=False, capture=False)


def push(path: Path, remote: str, refspec: str, *, force: bool = False) -> subprocess.CompletedProcess[str]:
    args = ["push", remote, refspec]
    if force:
        args.insert(1, "--force")
    return run_git(args, cwd=path, raise_on_error=False, capture=False)
