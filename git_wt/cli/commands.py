"""Handlers for the `wt` subcommands.

Each handler receives the parsed arguments, the repository root and the
runtime Config, and returns the process exit status. Errors propagate to
:func:`git_wt.cli.main.main`, which reports them.
"""

import argparse
from pathlib import Path
from typing import Callable, Dict

from rich.console import Console

from git_wt.config import Config
from git_wt.core import Reconciler, WorktreeManager
from git_wt.exceptions import WtError
from git_wt.formatters import format_worktree_line
from git_wt.logging_config import get_logger
from git_wt.manifest import load_manifest, write_starter_manifest
from git_wt.services.git_service import GitService

console = Console(highlight=False)
logger = get_logger(__name__)


def _print_plain(text: str) -> None:
    console.print(text, markup=False, soft_wrap=True)


def _manifest_path(repo_root: Path, config: Config) -> Path:
    return repo_root / config.manifest_name


def _manager(repo_root: Path, config: Config) -> WorktreeManager:
    manifest = load_manifest(_manifest_path(repo_root, config))
    return WorktreeManager.for_repo(repo_root, manifest, config)


def _run_keeping_partial(manager: WorktreeManager, branch: str, action: Callable[[], Path]) -> Path:
    """Run create/switch, pointing at `wt remove` when a failure leaves a worktree behind."""
    worktree_dir = manager.resolver.worktree_dir(branch)
    existed = worktree_dir.exists()
    try:
        return action()
    except (WtError, OSError):
        if not existed and worktree_dir.is_dir():
            logger.warning(
                f"Worktree left in place at {worktree_dir}; run 'wt remove {branch}' to clean it up"
            )
        raise


def cmd_init(args: argparse.Namespace, repo_root: Path, config: Config) -> int:
    write_starter_manifest(_manifest_path(repo_root, config), force=args.force)
    return 0


def cmd_new(args: argparse.Namespace, repo_root: Path, config: Config) -> int:
    manager = _manager(repo_root, config)
    worktree_dir = _run_keeping_partial(
        manager, args.branch, lambda: manager.create(args.branch, args.base_ref)
    )
    _print_plain(str(worktree_dir))
    return 0


def cmd_switch(args: argparse.Namespace, repo_root: Path, config: Config) -> int:
    manager = _manager(repo_root, config)
    worktree_dir = _run_keeping_partial(manager, args.branch, lambda: manager.switch(args.branch))
    if args.cd_file:
        Path(args.cd_file).write_text(str(worktree_dir), encoding="utf-8")
    else:
        _print_plain(str(worktree_dir))
    return 0


def cmd_remove(args: argparse.Namespace, repo_root: Path, config: Config) -> int:
    manager = _manager(repo_root, config)
    manager.remove(args.branch, auto_confirm=args.yes)
    return 0


def cmd_prune(args: argparse.Namespace, repo_root: Path, config: Config) -> int:
    manifest = load_manifest(_manifest_path(repo_root, config))
    report = Reconciler.for_repo(repo_root, manifest, config).prune_all(auto_confirm=args.yes)
    logger.debug(
        f"Prune finished: {len(report.removed)} removed, {len(report.skipped)} skipped, "
        f"{len(report.failed)} failed"
    )
    return 0


def cmd_list(args: argparse.Namespace, repo_root: Path, config: Config) -> int:
    for worktree in GitService(repo_root, remote_name=config.remote_name).list_worktrees():
        _print_plain(format_worktree_line(worktree))
    return 0


COMMANDS: Dict[str, Callable[[argparse.Namespace, Path, Config], int]] = {
    "init": cmd_init,
    "new": cmd_new,
    "switch": cmd_switch,
    "remove": cmd_remove,
    "prune": cmd_prune,
    "list": cmd_list,
}

