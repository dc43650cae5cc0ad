"""Runs the manifest's post_create command."""
import subprocess
from pathlib import Path

from git_wt.logging_config import get_logger

logger = get_logger(__name__)


class CommandRunner:
    """Runs a shell command in a directory with the caller's stdio.

    The command is not sandboxed or timed out; it blocks until it exits.
    """

    def run(self, command: str, cwd: Path) -> int:
        logger.info(f"post_create: {command}")
        result = subprocess.run(command, shell=True, cwd=cwd, check=False)
        return result.returncode
