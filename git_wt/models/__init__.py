"""Data models for git-wt."""

from .manifest import Manifest, Rule, RuleAction, RuleOption
from .worktree import WorktreeInfo, WorktreeRef

__all__ = [
    "Manifest",
    "Rule",
    "RuleAction",
    "RuleOption",
    "WorktreeInfo",
    "WorktreeRef",
]
