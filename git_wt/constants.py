"""Shared constants for git-wt."""

# Manifest file at the repository root (YAML, no extension)
MANIFEST_FILENAME = ".workspaces"

# Default worktree root is <parent-of-repo>/<repo-name><suffix>
DEFAULT_ROOT_SUFFIX = "-worktrees"

# Characters replaced when turning a branch name into a directory name
BRANCH_PATH_SEPARATORS = ("/", "\\")
BRANCH_DIR_SEPARATOR = "-"

DEFAULT_REMOTE = "origin"

# Environment variable that enables non-interactive mode globally
ENV_ASSUME_YES = "WT_YES"

AFFIRMATIVE_ANSWERS = frozenset({"y", "yes"})

# Column width used by `wt list`
LIST_PATH_WIDTH = 70

# Confirmation labels
LABEL_UNREGISTERED_DIR = "unregistered directory"


STARTER_MANIFEST = """\
# wt config (YAML) - stored at .workspaces (no extension)
# root: ../<repo>-worktrees   # uncomment to override default location
post_create: ""               # e.g., "npm ci"

rules:
  # Share your .env file across all worktrees (if present in repo root)
  - action: symlink
    src: .env
    dest: .env
    opts: [optional, if-missing]

  # Share node_modules across all worktrees (use with care)
  - action: symlink
    src: node_modules
    dest: node_modules
    opts: [optional, mkdirs, if-missing]
"""
