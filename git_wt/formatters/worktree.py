"""Worktree list formatting."""

from git_wt.constants import LIST_PATH_WIDTH
from git_wt.models.worktree import WorktreeInfo


def format_worktree_branch(worktree: WorktreeInfo) -> str:
    """Branch column for `wt list`: the branch name, or 'detached'."""
    if worktree.branch_name:
        return worktree.branch_name
    return "detached"


def format_worktree_line(worktree: WorktreeInfo) -> str:
    """
    Format one registered worktree as a `wt list` line.

    Example:
        "/home/me/src/proj-worktrees/feature-x<padding> [feature/x]"
    """
    return f"{worktree.path:<{LIST_PATH_WIDTH}} [{format_worktree_branch(worktree)}]"
