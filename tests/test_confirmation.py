"""Tests for the confirmation gate"""
from pathlib import Path
from unittest.mock import Mock

import pytest

from git_wt.services.confirmation import ConfirmationGate


class TestBypass:
    """Flag and global override skip the prompt."""

    def test_auto_confirm_flag(self):
        """--yes proceeds without asking."""
        input_func = Mock()
        gate = ConfirmationGate(input_func=input_func)

        assert gate.confirm("unregistered directory", Path("/tmp/x"), auto_confirm=True) is True
        input_func.assert_not_called()

    def test_global_override(self):
        """WT_YES=1 (resolved by the caller) proceeds without asking."""
        input_func = Mock()
        gate = ConfirmationGate(global_override=True, input_func=input_func)

        assert gate.confirm("unregistered directory", Path("/tmp/x")) is True
        input_func.assert_not_called()


class TestPrompt:
    """Interactive answers."""

    @pytest.mark.parametrize("answer", ["y", "Y", "yes", "YES", "Yes", "  y  "])
    def test_affirmative(self, answer, scripted_input):
        """y/yes in any case proceeds."""
        gate = ConfirmationGate(input_func=scripted_input(answer))
        assert gate.confirm("thing", "/tmp/x") is True

    @pytest.mark.parametrize("answer", ["", "n", "no", "yep", "sure", "1"])
    def test_anything_else_declines(self, answer, scripted_input):
        """Everything else, including an empty line, declines."""
        gate = ConfirmationGate(input_func=scripted_input(answer))
        assert gate.confirm("thing", "/tmp/x") is False

    def test_no_reprompt(self, scripted_input):
        """A bad answer is final."""
        answers = scripted_input("maybe", "y")
        gate = ConfirmationGate(input_func=answers)

        assert gate.confirm("thing", "/tmp/x") is False
        assert len(answers.prompts) == 1

    def test_eof_declines(self):
        """Closed stdin counts as a decline."""
        gate = ConfirmationGate(input_func=Mock(side_effect=EOFError))
        assert gate.confirm("thing", "/tmp/x") is False

    def test_prompt_shows_label_and_path(self, capsys, scripted_input):
        """The operator sees what would be deleted."""
        answers = scripted_input("n")
        gate = ConfirmationGate(input_func=answers)

        gate.confirm('worktree for branch "feature/x"', Path("/wt/feature-x"))

        err = capsys.readouterr().err
        assert 'About to delete worktree for branch "feature/x"' in err
        assert "Path: /wt/feature-x" in err
        assert answers.prompts == ["Proceed? [y/N] "]
