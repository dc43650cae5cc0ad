"""Reconciles the worktree root directory with git's worktree registry."""

import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from git_wt.config import Config
from git_wt.constants import LABEL_UNREGISTERED_DIR
from git_wt.logging_config import get_logger
from git_wt.models.manifest import Manifest
from git_wt.services.confirmation import ConfirmationGate
from git_wt.services.git_service import GitService
from git_wt.services.paths import PathResolver

logger = get_logger(__name__)


@dataclass
class PruneReport:
    """Directories handled by one prune pass."""
    removed: List[Path] = field(default_factory=list)
    skipped: List[Path] = field(default_factory=list)
    failed: List[Path] = field(default_factory=list)


class Reconciler:
    """Deletes directories under the worktree root that git does not know about."""

    def __init__(self, git_service: GitService, resolver: PathResolver,
                 gate: Optional[ConfirmationGate] = None):
        self.git_service = git_service
        self.resolver = resolver
        self.gate = gate or ConfirmationGate()

    @classmethod
    def for_repo(cls, repo_root: Path, manifest: Manifest, config: Config,
                 gate: Optional[ConfirmationGate] = None) -> "Reconciler":
        return cls(
            git_service=GitService(repo_root, remote_name=config.remote_name),
            resolver=PathResolver(repo_root, manifest),
            gate=gate or ConfirmationGate(global_override=config.assume_yes),
        )

    def prune_all(self, auto_confirm: bool = False) -> PruneReport:
        """Offer every unregistered directory under the root for deletion.

        A declined or failed deletion skips that directory only. git's own
        registry is pruned last so this pass's deletions are reflected.
        """
        report = PruneReport()
        root = self.resolver.worktree_root()

        if not root.is_dir():
            logger.info(f"Nothing to prune (no root dir: {root})")
            self.git_service.prune_worktrees()
            return report

        registered = self.git_service.registered_paths()

        for entry in sorted(root.iterdir()):
            if not entry.is_dir():
                continue
            if entry.resolve() in registered:
                continue

            if not self.gate.confirm(LABEL_UNREGISTERED_DIR, entry, auto_confirm=auto_confirm):
                logger.info(f"Skipped: {entry}")
                report.skipped.append(entry)
                continue

            logger.info(f"Deleting unregistered directory: {entry}")
            try:
                if entry.is_symlink():
                    entry.unlink()
                else:
                    shutil.rmtree(entry)
            except OSError as e:
                logger.error(f"Failed to delete {entry}: {e}")
                report.failed.append(entry)
                continue
            report.removed.append(entry)

        self.git_service.prune_worktrees()
        return report
