"""Where worktrees live on disk."""
import os
from pathlib import Path

from git_wt.constants import BRANCH_DIR_SEPARATOR, BRANCH_PATH_SEPARATORS, DEFAULT_ROOT_SUFFIX
from git_wt.models.manifest import Manifest
from git_wt.models.worktree import WorktreeRef


def sanitize_branch_name(branch: str) -> str:
    """Turn a branch name into a flat directory name (feature/x -> feature-x).

    One-way: ``feature/x`` and ``feature-x`` map to the same directory.
    """
    sanitized = branch
    for separator in BRANCH_PATH_SEPARATORS:
        sanitized = sanitized.replace(separator, BRANCH_DIR_SEPARATOR)
    return sanitized


class PathResolver:
    """Computes the worktree root and per-branch worktree directories.

    Paths are computed, not checked: nothing here requires the directories to
    exist (apart from :meth:`worktree_ref`, which reports whether they do).
    """

    def __init__(self, repo_root: Path, manifest: Manifest):
        self.repo_root = Path(repo_root)
        self.manifest = manifest

    def default_root(self) -> Path:
        """<parent-of-repo>/<repo-name>-worktrees"""
        return self.repo_root.parent / f"{self.repo_root.name}{DEFAULT_ROOT_SUFFIX}"

    def worktree_root(self) -> Path:
        """The single directory all worktrees of this repository live in."""
        override = self.manifest.root
        if override:
            root = Path(os.path.expanduser(override))
            if not root.is_absolute():
                root = self.repo_root / root
        else:
            root = self.default_root()
        # Lexical only, so "../x" roots compare equal to the paths git reports
        return Path(os.path.normpath(root))

    def worktree_dir(self, branch: str) -> Path:
        return self.worktree_root() / sanitize_branch_name(branch)

    def worktree_ref(self, branch: str) -> WorktreeRef:
        directory = self.worktree_dir(branch)
        return WorktreeRef(branch=branch, directory=directory, exists=directory.is_dir())
