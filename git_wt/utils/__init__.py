"""Utility functions for git-wt."""

from .dependencies import require_executable

__all__ = ["require_executable"]
