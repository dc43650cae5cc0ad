"""Core worktree lifecycle and reconciliation."""

from .reconciler import PruneReport, Reconciler
from .worktree_manager import WorktreeManager

__all__ = ["WorktreeManager", "Reconciler", "PruneReport"]
