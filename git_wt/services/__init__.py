"""Services used by the git-wt core."""

from .confirmation import ConfirmationGate
from .git_service import GitService, discover_repo_root, parse_worktree_porcelain
from .paths import PathResolver, sanitize_branch_name
from .placement import PlacementEngine, PlacementOutcome, PlacementResult
from .runner import CommandRunner

__all__ = [
    "ConfirmationGate",
    "GitService",
    "discover_repo_root",
    "parse_worktree_porcelain",
    "PathResolver",
    "sanitize_branch_name",
    "PlacementEngine",
    "PlacementOutcome",
    "PlacementResult",
    "CommandRunner",
]
