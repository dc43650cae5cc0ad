"""Checks for external tools git-wt relies on."""
import shutil

from git_wt.exceptions import MissingDependencyError


def require_executable(name: str) -> str:
    """Return the full path of ``name`` on PATH, or raise MissingDependencyError."""
    path = shutil.which(name)
    if path is None:
        raise MissingDependencyError(name)
    return path
