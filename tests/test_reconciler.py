"""Tests for `wt prune --all`"""
import os
import shutil
from unittest.mock import patch

import pytest

from git_wt.services.confirmation import ConfirmationGate


@pytest.fixture
def worktree_root(temp_dir):
    return temp_dir / "proj-worktrees"


@pytest.fixture
def populated(git_repo, worktree_root):
    """Two registered worktrees and two stray directories under the root."""
    worktree_root.mkdir()
    git_repo.git.worktree("add", "-b", "feature/x", str(worktree_root / "feature-x"))
    git_repo.git.worktree("add", "-b", "feature/y", str(worktree_root / "feature-y"))

    (worktree_root / "old-experiment" / "src").mkdir(parents=True)
    (worktree_root / "old-experiment" / "src" / "main.py").write_text("print('hi')\n")
    (worktree_root / "scratch").mkdir()
    (worktree_root / "notes.txt").write_text("not a directory\n")
    return worktree_root


class TestPruneAll:
    """Test reconciling the root directory with git's registry."""

    def test_global_override_deletes_only_unregistered(self, repo_root, populated, make_reconciler):
        """Unregistered directories go, registered worktrees and files stay."""
        gate = ConfirmationGate(global_override=True)

        report = make_reconciler(repo_root, gate).prune_all()

        assert report.removed == [populated / "old-experiment", populated / "scratch"]
        assert sorted(p.name for p in populated.iterdir()) == ["feature-x", "feature-y", "notes.txt"]
        assert (populated / "feature-x" / "README.md").exists()

    def test_prompts_in_order_and_respects_answers(self, repo_root, populated, make_reconciler, scripted_input):
        """Each unregistered directory is confirmed on its own."""
        answers = scripted_input("n", "yes")

        report = make_reconciler(repo_root, ConfirmationGate(input_func=answers)).prune_all()

        assert report.skipped == [populated / "old-experiment"]
        assert report.removed == [populated / "scratch"]
        assert (populated / "old-experiment").is_dir()
        assert not (populated / "scratch").exists()
        assert len(answers.prompts) == 2

    def test_auto_confirm(self, repo_root, populated, make_reconciler, scripted_input):
        """--yes skips every prompt."""
        answers = scripted_input()

        report = make_reconciler(repo_root, ConfirmationGate(input_func=answers)).prune_all(auto_confirm=True)

        assert len(report.removed) == 2
        assert answers.prompts == []

    def test_registered_worktrees_never_prompt(self, git_repo, repo_root, worktree_root, make_reconciler, scripted_input):
        """A root holding only registered worktrees asks nothing."""
        worktree_root.mkdir()
        git_repo.git.worktree("add", "-b", "feature/x", str(worktree_root / "feature-x"))
        answers = scripted_input()

        report = make_reconciler(repo_root, ConfirmationGate(input_func=answers)).prune_all()

        assert report.removed == [] and report.skipped == []
        assert (worktree_root / "feature-x").is_dir()

    def test_relative_root_matches_registered_paths(self, git_repo, repo_root, write_manifest,
                                                    make_reconciler, temp_dir):
        """A '../' root still recognizes registered worktrees."""
        write_manifest("root: ../elsewhere\n")
        root = temp_dir / "elsewhere"
        root.mkdir()
        git_repo.git.worktree("add", "-b", "feature/x", str(root / "feature-x"))
        (root / "stray").mkdir()

        report = make_reconciler(repo_root, ConfirmationGate(global_override=True)).prune_all()

        assert report.removed == [root / "stray"]
        assert (root / "feature-x").is_dir()

    def test_symlinked_directory_is_unlinked(self, repo_root, worktree_root, make_reconciler, temp_dir):
        """A symlink to a directory is removed without touching its target."""
        target = temp_dir / "keep-me"
        target.mkdir()
        (target / "data").write_text("precious\n")
        worktree_root.mkdir()
        os.symlink(target, worktree_root / "linked")

        report = make_reconciler(repo_root, ConfirmationGate(global_override=True)).prune_all()

        assert report.removed == [worktree_root / "linked"]
        assert not os.path.lexists(worktree_root / "linked")
        assert (target / "data").exists()

    def test_failed_delete_continues(self, repo_root, populated, make_reconciler):
        """A directory that cannot be deleted is reported and skipped."""
        real_rmtree = shutil.rmtree

        def flaky_rmtree(path, *args, **kwargs):
            if path.name == "old-experiment":
                raise PermissionError(13, "Permission denied", str(path))
            return real_rmtree(path, *args, **kwargs)

        with patch("git_wt.core.reconciler.shutil.rmtree", side_effect=flaky_rmtree):
            report = make_reconciler(repo_root, ConfirmationGate(global_override=True)).prune_all()

        assert report.failed == [populated / "old-experiment"]
        assert report.removed == [populated / "scratch"]

    def test_prunes_stale_registry_entries(self, git_repo, repo_root, worktree_root, make_reconciler):
        """git's registry forgets worktrees deleted by hand."""
        worktree_root.mkdir()
        git_repo.git.worktree("add", "-b", "gone", str(worktree_root / "gone"))
        shutil.rmtree(worktree_root / "gone")

        make_reconciler(repo_root, ConfirmationGate(global_override=True)).prune_all()

        assert str(worktree_root / "gone") not in git_repo.git.worktree("list", "--porcelain")

    def test_missing_root(self, git_repo, repo_root, temp_dir, make_reconciler, scripted_input):
        """Without a root directory only the registry is pruned."""
        stale = temp_dir / "stale"
        git_repo.git.worktree("add", "-b", "stale", str(stale))
        shutil.rmtree(stale)
        answers = scripted_input()

        report = make_reconciler(repo_root, ConfirmationGate(input_func=answers)).prune_all()

        assert report.removed == []
        assert answers.prompts == []
        assert not (temp_dir / "proj-worktrees").exists()
        assert str(stale) not in git_repo.git.worktree("list", "--porcelain")
