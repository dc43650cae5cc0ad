"""Loading and writing the .workspaces manifest.

The manifest is YAML with three optional top-level keys::

    root: ../my-repo-worktrees
    post_create: npm ci
    rules:
      - action: copy|symlink
        src:  path/relative/to/repo
        dest: path/relative/to/worktree
        opts: [if-missing, mkdirs, force, optional]

Everything is validated here, once, so the rest of the package only ever
sees a well-formed :class:`~git_wt.models.manifest.Manifest`. Unknown
top-level keys are ignored.
"""

from pathlib import Path
from typing import Any, List, Optional

import yaml

from git_wt.constants import STARTER_MANIFEST
from git_wt.exceptions import ConfigError
from git_wt.logging_config import get_logger
from git_wt.models.manifest import Manifest, Rule, RuleAction, RuleOption

logger = get_logger(__name__)

_ACTIONS = ", ".join(action.value for action in RuleAction)
_OPTIONS = ", ".join(option.value for option in RuleOption)


def load_manifest(path: Path) -> Manifest:
    """Read and validate the manifest at ``path``.

    A missing file is not an error: it yields an empty manifest so that all
    defaults apply.
    """
    if not path.is_file():
        logger.debug(f"No manifest at {path}, using defaults")
        return Manifest()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML: {e}", path) from e
    except OSError as e:
        raise ConfigError(f"cannot read manifest: {e}", path) from e

    manifest = parse_manifest(data, path)
    logger.debug(f"Loaded manifest from {path} with {len(manifest.rules)} rule(s)")
    return manifest


def parse_manifest(data: Any, source: Optional[Path] = None) -> Manifest:
    """Validate already-parsed YAML data and build a Manifest."""
    if data is None:
        return Manifest()
    if not isinstance(data, dict):
        raise ConfigError(
            f"manifest must be a mapping, got {type(data).__name__}", source
        )

    root = _optional_string(data, "root", source)
    post_create = _optional_string(data, "post_create", source)

    raw_rules = data.get("rules")
    if raw_rules is None:
        raw_rules = []
    if not isinstance(raw_rules, list):
        raise ConfigError("'rules' must be a list", source)

    rules = tuple(_parse_rule(raw, index, source) for index, raw in enumerate(raw_rules))
    return Manifest(root=root, post_create=post_create, rules=rules)


def _optional_string(data: dict, key: str, source: Optional[Path]) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"'{key}' must be a string, got {type(value).__name__}", source)
    # An empty value means "not set", same as leaving the key out
    if not value.strip():
        return None
    return value


def _parse_rule(raw: Any, index: int, source: Optional[Path]) -> Rule:
    where = f"rules[{index}]"
    if not isinstance(raw, dict):
        raise ConfigError(f"{where} must be a mapping", source)

    action_name = raw.get("action")
    try:
        action = RuleAction(action_name)
    except ValueError:
        raise ConfigError(
            f"{where}: unknown action '{action_name}' (expected one of: {_ACTIONS})", source
        ) from None

    paths = {}
    for key in ("src", "dest"):
        value = raw.get(key)
        if not isinstance(value, str) or not value.strip():
            raise ConfigError(f"{where}: '{key}' must be a non-empty string", source)
        paths[key] = value

    if paths["dest"].startswith(("/", "\\")) or Path(paths["dest"]).is_absolute():
        raise ConfigError(f"{where}: 'dest' must be relative to the worktree, got '{paths['dest']}'", source)

    return Rule(action=action, src=paths["src"], dest=paths["dest"],
                opts=frozenset(_parse_opts(raw.get("opts"), where, source)))


def _parse_opts(raw: Any, where: str, source: Optional[Path]) -> List[RuleOption]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ConfigError(f"{where}: 'opts' must be a list", source)

    opts = []
    for value in raw:
        try:
            opts.append(RuleOption(value))
        except ValueError:
            raise ConfigError(
                f"{where}: unknown option '{value}' (expected any of: {_OPTIONS})", source
            ) from None
    return opts


def write_starter_manifest(path: Path, force: bool = False) -> Path:
    """Write the starter manifest, refusing to overwrite unless ``force``."""
    if path.exists() and not force:
        raise ConfigError("config already exists (use 'wt init --force' to overwrite)", path)

    path.write_text(STARTER_MANIFEST, encoding="utf-8")
    logger.info(f"Wrote starter config: {path}")
    logger.info("Edit 'post_create' or add more rules as needed.")
    return path
