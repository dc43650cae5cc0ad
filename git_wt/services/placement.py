"""Applies manifest placement rules to a worktree directory."""
import os
import shutil
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, List

from git_wt.exceptions import PathConflictError, SourceNotFoundError
from git_wt.logging_config import get_logger
from git_wt.models.manifest import Rule, RuleAction, RuleOption

logger = get_logger(__name__)


class PlacementOutcome(Enum):
    """What applying a rule did."""
    COPIED = "copied"
    LINKED = "linked"
    SKIPPED_MISSING_SOURCE = "skipped-missing-source"
    SKIPPED_EXISTING = "skipped-existing"


@dataclass(frozen=True)
class PlacementResult:
    rule: Rule
    destination: Path
    outcome: PlacementOutcome


def _remove_path(path: Path) -> None:
    """Delete a file, symlink or directory tree (rm -rf)."""
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


class PlacementEngine:
    """Copies or links files from the repository into worktrees.

    Sources resolve against the repository root, destinations against the
    worktree. Destination conflicts are governed by the rule's options:

    ==============  ==========================================
    ``if-missing``  existing destination is left alone
    ``force``       existing destination is deleted first
    neither         :class:`PathConflictError`
    ==============  ==========================================

    ``optional`` only concerns a missing source. A failed copy is not
    cleaned up.
    """

    def __init__(self, repo_root: Path):
        self.repo_root = Path(repo_root)

    def source_path(self, rule: Rule) -> Path:
        """Absolute source path; may point outside the repository."""
        return Path(os.path.normpath(self.repo_root / rule.src))

    @staticmethod
    def destination_path(rule: Rule, worktree_dir: Path) -> Path:
        """Destination inside the worktree; a leading separator does not escape it."""
        return Path(worktree_dir) / rule.dest.lstrip("/\\")

    def apply_rules(self, rules: Iterable[Rule], worktree_dir: Path) -> List[PlacementResult]:
        """Apply rules in order; the first failure propagates."""
        return [self.apply_rule(rule, worktree_dir) for rule in rules]

    def apply_rule(self, rule: Rule, worktree_dir: Path) -> PlacementResult:
        src = self.source_path(rule)
        dest = self.destination_path(rule, worktree_dir)

        if not os.path.lexists(src):
            if rule.has(RuleOption.OPTIONAL):
                logger.info(f"optional missing: {rule}")
                return PlacementResult(rule, dest, PlacementOutcome.SKIPPED_MISSING_SOURCE)
            raise SourceNotFoundError(rule.src, rule.action.value)

        if rule.has(RuleOption.MKDIRS):
            dest.parent.mkdir(parents=True, exist_ok=True)

        if os.path.lexists(dest):
            if rule.has(RuleOption.IF_MISSING):
                logger.debug(f"Keeping existing {dest} ({rule})")
                return PlacementResult(rule, dest, PlacementOutcome.SKIPPED_EXISTING)
            if rule.has(RuleOption.FORCE):
                logger.debug(f"Replacing existing {dest} ({rule})")
                _remove_path(dest)
            else:
                raise PathConflictError(dest, "Destination exists (use opts: force | if-missing)")

        if rule.action is RuleAction.COPY:
            self._copy(src, dest)
            logger.debug(f"Copied {src} -> {dest} ({rule})")
            return PlacementResult(rule, dest, PlacementOutcome.COPIED)

        os.symlink(src, dest, target_is_directory=src.is_dir())
        logger.debug(f"Linked {dest} -> {src} ({rule})")
        return PlacementResult(rule, dest, PlacementOutcome.LINKED)

    @staticmethod
    def _copy(src: Path, dest: Path) -> None:
        if src.is_dir():
            shutil.copytree(src, dest, symlinks=True, dirs_exist_ok=True)
        else:
            shutil.copy2(src, dest)
