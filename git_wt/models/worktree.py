"""Worktree data models."""

from dataclasses import dataclass
from pathlib import Path


@dataclass
class WorktreeInfo:
    """Information about a git worktree, as listed by git's registry."""

    path: str
    branch_name: str
    commit_sha: str
    is_main: bool  # Is this the main working tree?
    is_orphaned: bool  # Directory missing?
    is_detached: bool = False

    def __str__(self) -> str:
        """String representation of worktree."""
        status = "orphaned" if self.is_orphaned else "active"
        main_marker = " (main)" if self.is_main else ""
        branch = self.branch_name or "detached"
        return f"{branch} @ {self.path}{main_marker} [{status}]"


@dataclass(frozen=True)
class WorktreeRef:
    """Where the worktree for a branch lives and whether it is there yet."""

    branch: str
    directory: Path
    exists: bool
