"""Runtime defaults and environment checks."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from . import git
from .exceptions import EnvironmentUnavailable


@dataclass
class Config:
    """Application configuration."""
    default_remote: str = "origin"
    namespace: str = "shelf"
    commit_message: str = "SHELF"


def get_default_remote() -> str:
    """Get the default remote from env or config."""
    return os.getenv("GIT_SHELF_REMOTE") or Config.default_remote


def resolve_repo_path(cwd: Path | None = None) -> Path:
    """Return the directory to run git in, or raise when shelving does not apply here."""

    path = cwd or Path.cwd()
    if not git.git_available():
        raise EnvironmentUnavailable("git executable not found")
    if not git.is_inside_work_tree(path):
        raise EnvironmentUnavailable(f"{path} is not inside a git work tree")
    return path
