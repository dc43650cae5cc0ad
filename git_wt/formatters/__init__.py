"""Formatting utilities for git-wt output."""

from .worktree import format_worktree_branch, format_worktree_line

__all__ = [
    "format_worktree_branch",
    "format_worktree_line",
]
