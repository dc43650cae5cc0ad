"""Manifest model and related enums"""
from enum import Enum
from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Tuple


class RuleAction(Enum):
    """How a placement rule puts its source into a worktree."""
    COPY = "copy"
    SYMLINK = "symlink"


class RuleOption(Enum):
    """Options that change how a placement rule treats conflicts."""
    IF_MISSING = "if-missing"
    MKDIRS = "mkdirs"
    FORCE = "force"
    OPTIONAL = "optional"


@dataclass(frozen=True)
class Rule:
    """A single file placement from the repository into a worktree."""
    action: RuleAction
    src: str  # relative to the repository root, may start with ../
    dest: str  # relative to the worktree directory
    opts: FrozenSet[RuleOption] = frozenset()

    def has(self, option: RuleOption) -> bool:
        return option in self.opts

    def __str__(self) -> str:
        opts = ",".join(sorted(opt.value for opt in self.opts))
        return f"{self.action.value} {self.src} -> {self.dest}" + (f" [{opts}]" if opts else "")


@dataclass(frozen=True)
class Manifest:
    """Provisioning config read from the repository's .workspaces file."""
    root: Optional[str] = None
    post_create: Optional[str] = None
    rules: Tuple[Rule, ...] = field(default_factory=tuple)

