"""Main entry point for the `wt` command."""

import sys
from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape

from git_wt.cli.args import build_parser
from git_wt.config import Config
from git_wt.logging_config import setup_logging
from git_wt.shell import shell_init_script
from git_wt.utils import require_executable

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the application."""
    parser = build_parser()
    parsed_args = parser.parse_args(argv)

    if parsed_args.command in (None, "help"):
        console.print(parser.format_help(), markup=False, soft_wrap=True, end="")
        return 0
    if parsed_args.command == "shell-init":
        console.print(shell_init_script(parsed_args.shell), markup=False, soft_wrap=True, end="")
        return 0

    setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug, quiet=parsed_args.quiet)

    try:
        config = Config.from_env(
            verbose=parsed_args.verbose, debug=parsed_args.debug, quiet=parsed_args.quiet
        )

        require_executable("git")

        # Imports GitPython
        from git_wt.cli.commands import COMMANDS
        from git_wt.services.git_service import discover_repo_root

        repo_root = discover_repo_root()
        return COMMANDS[parsed_args.command](parsed_args, repo_root, config)
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except Exception as e:
        err_console.print(f"[red]ERROR: {escape(str(e))}[/red]", soft_wrap=True)
        if parsed_args.debug:
            err_console.print_exception()
        return 1


if __name__ == "__main__":
    sys.exit(main())
