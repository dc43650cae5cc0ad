"""Runtime configuration handling for git-wt"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from git_wt.constants import DEFAULT_REMOTE, ENV_ASSUME_YES, MANIFEST_FILENAME


@dataclass
class Config:
    """Options for a single wt invocation, with validation.

    The per-repository settings live in the manifest; this only carries what
    the command line and environment decide.
    """

    # Confirmation bypass for every destructive command (WT_YES=1)
    assume_yes: bool = False

    # Output
    verbose: bool = False
    debug: bool = False
    quiet: bool = False

    manifest_name: str = MANIFEST_FILENAME
    remote_name: str = DEFAULT_REMOTE

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_manifest_name()
        self._validate_remote_name()

    def _validate_manifest_name(self):
        """Validate manifest_name is a bare file name."""
        if not self.manifest_name or not self.manifest_name.strip():
            raise ValueError("manifest_name cannot be empty")
        if "/" in self.manifest_name or "\\" in self.manifest_name:
            raise ValueError(f"manifest_name must be a file name, got '{self.manifest_name}'")

    def _validate_remote_name(self):
        """Validate remote_name is not empty."""
        if not self.remote_name or not self.remote_name.strip():
            raise ValueError("remote_name cannot be empty")
        self.remote_name = self.remote_name.strip()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "Config":
        """Create Config from the process environment plus explicit overrides."""
        if environ is None:
            environ = os.environ
        values = {"assume_yes": environ.get(ENV_ASSUME_YES, "") == "1"}
        values.update(overrides)
        return cls(**values)
