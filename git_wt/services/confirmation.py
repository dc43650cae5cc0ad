"""Confirmation before destructive actions."""
from pathlib import Path
from typing import Callable, Optional, Union

from rich.console import Console
from rich.markup import escape

from git_wt.constants import AFFIRMATIVE_ANSWERS
from git_wt.logging_config import get_logger

console = Console(stderr=True)
logger = get_logger(__name__)


def _ask(prompt: str) -> str:
    return console.input(escape(prompt))


class ConfirmationGate:
    """Decides whether a deletion proceeds.

    An explicit per-command flag or the global override (``WT_YES=1``,
    resolved by the caller) proceed without asking. Otherwise the operator is
    asked once; only ``y``/``yes`` proceeds and there is no reprompt.
    """

    def __init__(self, global_override: bool = False,
                 input_func: Optional[Callable[[str], str]] = None):
        self.global_override = global_override
        self.input_func = input_func or _ask

    def confirm(self, label: str, path: Union[str, Path], auto_confirm: bool = False) -> bool:
        if auto_confirm or self.global_override:
            return True

        console.print(f"[wt] About to delete {label}", markup=False, highlight=False, soft_wrap=True)
        console.print(f"[wt] Path: {path}", markup=False, highlight=False, soft_wrap=True)
        try:
            reply = self.input_func("Proceed? [y/N] ")
        except EOFError:
            reply = ""

        if reply.strip().lower() in AFFIRMATIVE_ANSWERS:
            return True
        logger.info("Aborted.")
        return False
