"""Command-line argument parsing for git-wt."""

import argparse
from typing import Optional, Sequence

from git_wt.__version__ import __version__
from git_wt.constants import ENV_ASSUME_YES, MANIFEST_FILENAME
from git_wt.shell import SUPPORTED_SHELLS

EPILOG = f"""\
Config ({MANIFEST_FILENAME} in repo root, YAML; optional):
  root: ../<repo>-worktrees
  post_create: npm ci
  rules:
    - action: copy|symlink
      src:  RELATIVE/TO/REPO
      dest: RELATIVE/TO/WORKTREE
      opts: [if-missing, mkdirs, force, optional]

Env:
  {ENV_ASSUME_YES}=1    Global non-interactive mode (same as providing --yes)
"""


def build_parser() -> argparse.ArgumentParser:
    """Build the `wt` argument parser."""
    parser = argparse.ArgumentParser(
        prog="wt",
        description="Git worktree helper with YAML provisioning rules",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"git-wt {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only show warnings and errors")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    init = subparsers.add_parser(
        "init", help=f"Create a starter {MANIFEST_FILENAME} config (symlink .env & node_modules)"
    )
    init.add_argument("--force", action="store_true", help=f"Overwrite an existing {MANIFEST_FILENAME}")

    new = subparsers.add_parser("new", help=f"Create a new worktree and apply {MANIFEST_FILENAME} rules")
    new.add_argument("branch", help="Branch to create or check out")
    new.add_argument(
        "base_ref", nargs="?", default=None,
        help="Base for a new branch (default: the remote's default branch, else HEAD)",
    )

    switch = subparsers.add_parser("switch", help="Create if needed, checkout, apply rules, cd into it")
    switch.add_argument("branch", help="Branch to switch to")
    switch.add_argument(
        "--cd-file", metavar="FILE", default=None,
        help="Write the worktree path to FILE instead of stdout (used by the shell function)",
    )

    remove = subparsers.add_parser("remove", help="Remove the worktree for branch (with confirmation)")
    remove.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")
    remove.add_argument("branch", help="Branch whose worktree to remove")

    prune = subparsers.add_parser(
        "prune", help="Prompt to delete each unregistered ROOT/* dir; then git worktree prune"
    )
    prune.add_argument("--all", dest="prune_all", action="store_true", required=True,
                       help="Reconcile every directory under the worktree root")
    prune.add_argument("--yes", action="store_true", help="Skip confirmation prompts")

    subparsers.add_parser("list", help="List registered worktrees")
    subparsers.add_parser("help", help="Show this help")

    shell_init = subparsers.add_parser("shell-init", help="Print the shell function that lets `wt switch` cd")
    shell_init.add_argument("shell", nargs="?", choices=SUPPORTED_SHELLS, default="bash")

    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    return build_parser().parse_args(argv)
