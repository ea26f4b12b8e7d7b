"""Per-ref shelf markers kept in the repository's local git config."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path

from . import git


def marker_key(ref: str) -> str:
    return f"branch.{ref}.shelf"


@dataclass
class ShelfMarkerStore:
    repo_path: Path

    def is_shelved(self, ref: str) -> bool:
        return git.config_get(self.repo_path, marker_key(ref), as_bool=True, local=True) == "true"

    def mark_shelved(self, ref: str) -> subprocess.CompletedProcess[str]:
        return git.config_set_local(self.repo_path, marker_key(ref), "true", as_bool=True)
