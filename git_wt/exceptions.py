"""Custom exceptions for git-wt"""

from pathlib import Path
from typing import Optional, Union

PathLike = Union[str, Path]


class WtError(Exception):
    """Base exception for all git-wt errors."""
    pass


class MissingDependencyError(WtError):
    """Exception raised when a required external tool is not installed."""

    def __init__(self, tool: str):
        self.tool = tool
        super().__init__(f"Missing dependency: {tool}")


class ConfigError(WtError):
    """Exception raised for a malformed or conflicting manifest."""

    def __init__(self, message: str, path: Optional[PathLike] = None):
        self.message = message
        self.path = Path(path) if path is not None else None

        error_msg = message
        if self.path is not None:
            error_msg = f"{self.path}: {message}"

        super().__init__(error_msg)


class PathConflictError(WtError):
    """Exception raised when a path that should be created already exists."""

    def __init__(self, path: PathLike, message: str):
        self.path = Path(path)
        self.message = message
        super().__init__(f"{message}: {self.path}")


class SourceNotFoundError(WtError):
    """Exception raised when a placement source is missing and not optional."""

    def __init__(self, src: str, action: Optional[str] = None):
        self.src = src
        self.action = action

        error_msg = f"Source not found: {src}"
        if action:
            error_msg += f" (rule action: {action})"

        super().__init__(error_msg)


class GitOperationError(WtError):
    """Exception raised for errors in Git operations."""

    def __init__(self, operation: str, target: Optional[str] = None, message: Optional[str] = None):
        self.operation = operation
        self.target = target
        self.message = message

        error_msg = f"Git operation '{operation}' failed"
        if target:
            error_msg += f" for '{target}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class UserAbortedError(WtError):
    """Exception raised when the operator declines a destructive action."""

    def __init__(self, label: str, path: Optional[PathLike] = None):
        self.label = label
        self.path = Path(path) if path is not None else None
        super().__init__(f"Aborted: not deleting {label}")


class WorktreeNotFoundError(WtError):
    """Exception raised when no worktree directory exists for a branch."""

    def __init__(self, branch: str, path: PathLike):
        self.branch = branch
        self.path = Path(path)
        super().__init__(f"No worktree directory for branch: {branch} ({self.path})")


class PostCreateError(WtError):
    """Exception raised when the post_create command exits nonzero."""

    def __init__(self, command: str, returncode: int, cwd: PathLike):
        self.command = command
        self.returncode = returncode
        self.cwd = Path(cwd)
        super().__init__(f"post_create command '{command}' exited with status {returncode} in {self.cwd}")
