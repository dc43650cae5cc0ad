"""Git operations service for git-wt.

Everything git-wt asks of version control goes through :class:`GitService`:
repository discovery, branch queries, and the worktree registry
(add/remove/list/prune). Failures surface as
:class:`~git_wt.exceptions.GitOperationError` carrying git's stderr.
"""
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Union

import git

from git_wt.constants import DEFAULT_REMOTE
from git_wt.exceptions import GitOperationError
from git_wt.logging_config import get_logger
from git_wt.models.worktree import WorktreeInfo

logger = get_logger(__name__)


def discover_repo_root(start: Union[str, Path, None] = None) -> Path:
    """Return the top-level directory of the working tree containing ``start``.

    Inside a linked worktree this is the worktree's own top level, the same
    answer as ``git rev-parse --show-toplevel``.
    """
    start = Path(start) if start is not None else Path.cwd()
    try:
        repo = git.Repo(start, search_parent_directories=True)
    except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
        raise GitOperationError("discover_root", str(start), "Not inside a git repository") from e

    try:
        if repo.working_tree_dir is None:
            raise GitOperationError("discover_root", str(start), "Bare repositories have no working tree")
        return Path(repo.working_tree_dir)
    finally:
        repo.close()


def _command_error(operation: str, target: Optional[str], e: git.exc.GitCommandError) -> GitOperationError:
    """Build a GitOperationError from a failed git command."""
    stderr = (e.stderr if hasattr(e, "stderr") and e.stderr else str(e)).strip()
    status = e.status if hasattr(e, "status") else "unknown"

    if stderr:
        error_msg = f"exit {status}: {stderr}"
    else:
        error_msg = f"exit code {status}"

    logger.debug(f"git {operation} failed: {error_msg}")
    return GitOperationError(operation, target, error_msg)


def parse_worktree_porcelain(output: str) -> List[WorktreeInfo]:
    """Parse ``git worktree list --porcelain`` output.

    Format::

        worktree /path/to/worktree
        HEAD commit_sha
        branch refs/heads/branch-name
        (blank line between worktrees)

    Detached worktrees carry a ``detached`` line instead of ``branch``.
    """
    worktree_list: List[WorktreeInfo] = []
    current: Dict[str, Any] = {}

    def flush() -> None:
        path = current.get("path", "")
        if path:
            worktree_list.append(
                WorktreeInfo(
                    path=path,
                    branch_name=current.get("branch", ""),
                    commit_sha=current.get("HEAD", ""),
                    # First worktree in list is always the main one
                    is_main=not worktree_list,
                    is_orphaned=not os.path.exists(path),
                    is_detached=current.get("detached", False),
                )
            )
        current.clear()

    for line in output.split("\n"):
        line = line.strip()

        if not line:
            flush()
            continue

        if line.startswith("worktree "):
            current["path"] = line.split(" ", 1)[1]
        elif line.startswith("HEAD "):
            current["HEAD"] = line.split(" ", 1)[1]
        elif line.startswith("branch "):
            branch_ref = line.split(" ", 1)[1]
            if branch_ref.startswith("refs/heads/"):
                current["branch"] = branch_ref[len("refs/heads/"):]
            else:
                current["branch"] = branch_ref
        elif line == "detached":
            current["detached"] = True

    # Handle last entry if no trailing blank line
    flush()
    return worktree_list


class GitService:
    """Service for the git operations git-wt depends on."""

    def __init__(self, repo_path: Union[str, Path], remote_name: str = DEFAULT_REMOTE):
        """Initialize the service.

        Args:
            repo_path: Path to the repository's working tree
            remote_name: Remote consulted for default and tracking branches
        """
        self.repo_path = Path(repo_path)
        self.remote_name = remote_name

    def _get_repo(self) -> git.Repo:
        """Open the repository.

        GitPython repos are lightweight - they don't clone, just open the
        existing repo - so a fresh one per call keeps no stale state around.
        """
        return git.Repo(self.repo_path)

    def _ref_exists(self, ref: str) -> bool:
        try:
            self._get_repo().git.show_ref("--verify", "--quiet", ref)
            return True
        except git.exc.GitCommandError:
            return False

    def local_branch_exists(self, branch: str) -> bool:
        """Check whether refs/heads/<branch> exists."""
        return self._ref_exists(f"refs/heads/{branch}")

    def remote_branch_exists(self, branch: str) -> bool:
        """Check whether the remote-tracking ref <remote>/<branch> exists."""
        return self._ref_exists(f"refs/remotes/{self.remote_name}/{branch}")

    def remote_default_branch(self) -> Optional[str]:
        """Short name of the remote's default branch (e.g. ``main``), if known."""
        try:
            ref = self._get_repo().git.symbolic_ref(
                "--quiet", "--short", f"refs/remotes/{self.remote_name}/HEAD"
            ).strip()
        except git.exc.GitCommandError:
            logger.debug(f"No symbolic HEAD for remote '{self.remote_name}'")
            return None

        prefix = f"{self.remote_name}/"
        if ref.startswith(prefix):
            ref = ref[len(prefix):]
        return ref or None

    def resolve_base_ref(self) -> str:
        """Base for a new branch when the caller gave none.

        The remote's default branch, as a local branch when one exists and as
        the remote-tracking ref otherwise; ``HEAD`` when the remote has no
        default.
        """
        default = self.remote_default_branch()
        if not default:
            return "HEAD"
        if self.local_branch_exists(default):
            return default
        return f"{self.remote_name}/{default}"

    def add_worktree(self, path: Path, branch: str) -> None:
        """Add a worktree at ``path`` checking out the existing ``branch``."""
        try:
            self._get_repo().git.worktree("add", str(path), branch)
        except git.exc.GitCommandError as e:
            raise _command_error("worktree add", branch, e) from e

    def add_worktree_new_branch(self, path: Path, branch: str, base: str) -> None:
        """Add a worktree at ``path`` creating ``branch`` from ``base``."""
        try:
            self._get_repo().git.worktree("add", "-b", branch, str(path), base)
        except git.exc.GitCommandError as e:
            raise _command_error("worktree add", branch, e) from e

    def checkout(self, worktree_path: Path, branch: str, create: bool = False,
                 start_point: Optional[str] = None, track: bool = False) -> None:
        """Check out ``branch`` inside an existing worktree.

        Args:
            worktree_path: Worktree to run the checkout in
            branch: Branch to check out
            create: Create the branch (``checkout -b``)
            start_point: Where the new branch starts; HEAD when omitted
            track: Set ``start_point`` as the upstream of the new branch
        """
        args = ["git", "-C", str(worktree_path), "checkout"]
        if create:
            args += ["-b", branch]
            if track:
                args.append("--track")
            if start_point:
                args.append(start_point)
        else:
            args.append(branch)

        try:
            self._get_repo().git.execute(args)
        except git.exc.GitCommandError as e:
            raise _command_error("checkout", branch, e) from e

    def list_worktrees(self) -> List[WorktreeInfo]:
        """Get detailed information about all registered worktrees."""
        try:
            output = self._get_repo().git.worktree("list", "--porcelain")
        except git.exc.GitCommandError as e:
            raise _command_error("worktree list", None, e) from e

        worktree_list = parse_worktree_porcelain(output)
        logger.debug(f"Found {len(worktree_list)} worktrees")
        for wt in worktree_list:
            logger.debug(f"  {wt}")
        return worktree_list

    def registered_paths(self) -> Set[Path]:
        """Resolved paths of every registered worktree."""
        return {Path(wt.path).resolve() for wt in self.list_worktrees()}

    def remove_worktree(self, path: Path, force: bool = False) -> None:
        """Remove the worktree at ``path`` and its registry entry."""
        args = ["remove", str(path)]
        if force:
            args.append("--force")

        try:
            self._get_repo().git.worktree(*args)
        except git.exc.GitCommandError as e:
            raise _command_error("worktree remove", str(path), e) from e
        logger.debug(f"Removed worktree at {path}")

    def prune_worktrees(self) -> None:
        """Prune registry entries whose directories are gone."""
        try:
            self._get_repo().git.worktree("prune")
        except git.exc.GitCommandError as e:
            raise _command_error("worktree prune", None, e) from e
        logger.debug("Pruned stale worktree metadata")
