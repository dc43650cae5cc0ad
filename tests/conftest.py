"""Pytest fixtures for git-wt tests"""
import tempfile
from pathlib import Path
from typing import List, Optional, Tuple

import pytest
import git

from git_wt.config import Config
from git_wt.core import Reconciler, WorktreeManager
from git_wt.manifest import load_manifest
from git_wt.services.confirmation import ConfirmationGate
from git_wt.services.runner import CommandRunner


class RecordingRunner(CommandRunner):
    """CommandRunner stand-in that records calls instead of spawning a shell."""

    def __init__(self, returncode: int = 0):
        self.returncode = returncode
        self.calls: List[Tuple[str, Path]] = []

    def run(self, command: str, cwd: Path) -> int:
        self.calls.append((command, Path(cwd)))
        return self.returncode


class ScriptedInput:
    """Input function returning canned answers and recording prompts."""

    def __init__(self, *answers: str):
        self.answers = list(answers)
        self.prompts: List[str] = []

    def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {prompt}")
        return self.answers.pop(0)


def _configure_identity(repo: git.Repo) -> None:
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository named 'proj' with one commit on main."""
    repo_path = temp_dir / "proj"
    repo_path.mkdir()

    repo = git.Repo.init(repo_path)
    _configure_identity(repo)

    (repo_path / "README.md").write_text("# Test Repository\n")
    (repo_path / ".env.example").write_text("API_KEY=changeme\n")
    repo.index.add(["README.md", ".env.example"])
    repo.index.commit("Initial commit")

    # Rename master to main if needed
    repo.git.branch("-M", "main")

    yield repo

    repo.close()


@pytest.fixture
def repo_root(git_repo):
    """Working tree path of git_repo."""
    return Path(git_repo.working_dir)


@pytest.fixture
def cloned_repo(temp_dir, git_repo):
    """A clone of git_repo, with origin/HEAD set and a remote-only branch."""
    git_repo.git.branch("remote-only")
    clone = git.Repo.clone_from(git_repo.working_dir, temp_dir / "clone")
    _configure_identity(clone)
    # Only origin/remote-only should exist in the clone
    if "remote-only" in [head.name for head in clone.heads]:
        clone.delete_head("remote-only", force=True)

    yield clone

    clone.close()


@pytest.fixture
def write_manifest(repo_root):
    """Write a .workspaces manifest at the repository root."""
    def _write(text: str, root: Optional[Path] = None) -> Path:
        path = (root or repo_root) / ".workspaces"
        path.write_text(text)
        return path
    return _write


@pytest.fixture
def runner():
    return RecordingRunner()


@pytest.fixture
def make_manager(runner):
    """Build a WorktreeManager for a repository from its manifest on disk."""
    def _make(root: Path, gate: Optional[ConfirmationGate] = None,
              config: Optional[Config] = None) -> WorktreeManager:
        config = config or Config()
        manifest = load_manifest(root / config.manifest_name)
        return WorktreeManager.for_repo(
            root, manifest, config, runner=runner,
            gate=gate or ConfirmationGate(input_func=ScriptedInput()),
        )
    return _make


@pytest.fixture
def make_reconciler():
    """Build a Reconciler for a repository from its manifest on disk."""
    def _make(root: Path, gate: ConfirmationGate, config: Optional[Config] = None) -> Reconciler:
        config = config or Config()
        manifest = load_manifest(root / config.manifest_name)
        return Reconciler.for_repo(root, manifest, config, gate=gate)
    return _make


@pytest.fixture
def scripted_input():
    """Factory for input functions answering confirmation prompts."""
    return ScriptedInput
