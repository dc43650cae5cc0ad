"""Worktree lifecycle: create, switch and remove branch worktrees.

Layout
------
Every worktree of a repository lives directly under one root directory::

    ~/src/
    ├── proj/                   # the repository (holds .workspaces)
    └── proj-worktrees/         # default root, or `root:` from .workspaces
        ├── feature-x/          # worktree for branch feature/x
        └── bugfix-login/       # worktree for branch bugfix/login

Whether a worktree "exists" is decided by its directory alone; branches are
git's business.

Provisioning
------------
After git has created or checked out a worktree, the manifest rules are
applied in order and then the ``post_create`` command runs inside the
worktree. The first failure aborts the command. Nothing is rolled back: a
worktree whose provisioning failed stays on disk until ``wt remove``.
"""

from pathlib import Path
from typing import List, Optional

from git_wt.config import Config
from git_wt.exceptions import PathConflictError, PostCreateError, UserAbortedError, WorktreeNotFoundError
from git_wt.logging_config import get_logger
from git_wt.models.manifest import Manifest
from git_wt.models.worktree import WorktreeInfo
from git_wt.services.confirmation import ConfirmationGate
from git_wt.services.git_service import GitService
from git_wt.services.paths import PathResolver
from git_wt.services.placement import PlacementEngine, PlacementResult
from git_wt.services.runner import CommandRunner

logger = get_logger(__name__)


class WorktreeManager:
    """Creates, switches to and removes the worktree bound to a branch."""

    def __init__(
        self,
        git_service: GitService,
        resolver: PathResolver,
        placement: PlacementEngine,
        manifest: Manifest,
        runner: Optional[CommandRunner] = None,
        gate: Optional[ConfirmationGate] = None,
    ):
        self.git_service = git_service
        self.resolver = resolver
        self.placement = placement
        self.manifest = manifest
        self.runner = runner or CommandRunner()
        self.gate = gate or ConfirmationGate()

    @classmethod
    def for_repo(cls, repo_root: Path, manifest: Manifest, config: Config,
                 runner: Optional[CommandRunner] = None,
                 gate: Optional[ConfirmationGate] = None) -> "WorktreeManager":
        """Wire the default services for a repository."""
        return cls(
            git_service=GitService(repo_root, remote_name=config.remote_name),
            resolver=PathResolver(repo_root, manifest),
            placement=PlacementEngine(repo_root),
            manifest=manifest,
            runner=runner,
            gate=gate or ConfirmationGate(global_override=config.assume_yes),
        )

    def create(self, branch: str, base_ref: Optional[str] = None) -> Path:
        """Create the worktree for ``branch`` and provision it.

        An existing local branch is checked out as is (``base_ref`` is
        ignored); otherwise a new branch is created from ``base_ref``, the
        remote's default branch, or HEAD, in that order.

        Raises:
            PathConflictError: the worktree directory already exists
        """
        worktree_dir = self.resolver.worktree_dir(branch)
        if worktree_dir.exists() or worktree_dir.is_symlink():
            raise PathConflictError(worktree_dir, "Worktree path already exists")

        worktree_dir.parent.mkdir(parents=True, exist_ok=True)

        if self.git_service.local_branch_exists(branch):
            logger.info(f"Adding worktree: {worktree_dir}  [branch: {branch}]")
            self.git_service.add_worktree(worktree_dir, branch)
        else:
            base = base_ref or self.git_service.resolve_base_ref()
            logger.info(f"Adding worktree: {worktree_dir}  [new branch: {branch}, base: {base}]")
            self.git_service.add_worktree_new_branch(worktree_dir, branch, base)

        self.provision(worktree_dir)
        return worktree_dir

    def switch(self, branch: str) -> Path:
        """Make sure the worktree for ``branch`` exists with ``branch`` checked out.

        A missing worktree is created first. Then the branch is checked out,
        tracking ``<remote>/<branch>`` when only the remote has it, and the
        worktree is provisioned again; rule options decide what happens to
        files placed by an earlier run, so a rule without ``if-missing`` or
        ``force`` fails on every switch, including the first.

        Returns the worktree directory. Moving the caller's shell there is
        left to the shell integration.
        """
        worktree_dir = self.resolver.worktree_dir(branch)
        if not worktree_dir.is_dir():
            self.create(branch)

        if self.git_service.local_branch_exists(branch):
            self.git_service.checkout(worktree_dir, branch)
        elif self.git_service.remote_branch_exists(branch):
            remote_ref = f"{self.git_service.remote_name}/{branch}"
            logger.info(f"Creating {branch} tracking {remote_ref}")
            self.git_service.checkout(worktree_dir, branch, create=True, start_point=remote_ref, track=True)
        else:
            logger.info(f"Creating new branch {branch} in {worktree_dir}")
            self.git_service.checkout(worktree_dir, branch, create=True)

        self.provision(worktree_dir)
        return worktree_dir

    def remove(self, branch: str, auto_confirm: bool = False) -> Path:
        """Remove the worktree for ``branch`` after confirmation.

        Raises:
            WorktreeNotFoundError: there is no worktree directory for the branch
            UserAbortedError: the operator declined
        """
        worktree_dir = self.resolver.worktree_dir(branch)
        if not worktree_dir.is_dir():
            raise WorktreeNotFoundError(branch, worktree_dir)

        label = f'worktree for branch "{branch}"'
        if not self.gate.confirm(label, worktree_dir, auto_confirm=auto_confirm):
            raise UserAbortedError(label, worktree_dir)

        logger.info(f"Removing worktree: {worktree_dir}")
        self.git_service.remove_worktree(worktree_dir)
        return worktree_dir

    def provision(self, worktree_dir: Path) -> List[PlacementResult]:
        """Apply the manifest rules, then run post_create inside the worktree."""
        results = self.placement.apply_rules(self.manifest.rules, worktree_dir)

        command = self.manifest.post_create
        if command:
            returncode = self.runner.run(command, worktree_dir)
            if returncode != 0:
                raise PostCreateError(command, returncode, worktree_dir)

        return results

    def list_worktrees(self) -> List[WorktreeInfo]:
        """Worktrees currently registered with git."""
        return self.git_service.list_worktrees()
