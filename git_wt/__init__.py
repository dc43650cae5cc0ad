"""
git-wt - Git worktree helper with YAML provisioning rules
"""

from .__version__ import __version__
from .cli.main import main

__all__ = ["main", "__version__"]
