"""Shell integration for `wt switch`.

A child process cannot change its parent shell's directory, so `wt switch`
only reports where to go. The function printed by `wt shell-init` wraps the
`wt` executable: for `switch` it passes a temporary file through
``--cd-file``, then changes into the directory written there. The
post_create command keeps the terminal's stdin/stdout either way.

Usage (in ~/.bashrc or ~/.zshrc)::

    eval "$(wt shell-init)"
"""

SUPPORTED_SHELLS = ("bash", "zsh")

SHELL_FUNCTION = r'''wt() {
  if [ "${1:-}" = "switch" ]; then
    shift
    local __wt_cd_file __wt_dir
    __wt_cd_file="$(mktemp "${TMPDIR:-/tmp}/wt-cd.XXXXXX")" || return 1
    if ! command wt switch --cd-file "$__wt_cd_file" "$@"; then
      rm -f -- "$__wt_cd_file"
      return 1
    fi
    __wt_dir="$(cat -- "$__wt_cd_file")"
    rm -f -- "$__wt_cd_file"
    [ -n "$__wt_dir" ] || return 1
    cd -- "$__wt_dir" && pwd
  else
    command wt "$@"
  fi
}
'''


def shell_init_script(shell: str = "bash") -> str:
    """Return the `wt` wrapper function for ``shell``."""
    if shell not in SUPPORTED_SHELLS:
        raise ValueError(f"Unsupported shell '{shell}' (expected one of: {', '.join(SUPPORTED_SHELLS)})")
    return SHELL_FUNCTION
