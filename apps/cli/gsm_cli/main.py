"""gsm CLI entry point.

Orchestrator for the gsm command-line interface. Without a subcommand
it launches the interactive TUI; subcommands offer the same stash
operations for scripts.

Execution Context:
    CLI application - run via `gsm` command

Dependencies:
    - click: CLI framework
    - gsm_core: Core library
    - gsm_client: TUI application

Metadata:
    Version: 0.1.0
    Author: gsm Team
"""
from __future__ import annotations

import sys
from pathlib import Path

import click

from gsm_core.config import configure_logging
from gsm_core.config import load_config

from gsm_cli import __version__
from gsm_cli.commands.stash import stash_apply
from gsm_cli.commands.stash import stash_drop
from gsm_cli.commands.stash import stash_list
from gsm_cli.commands.stash import stash_pop
from gsm_cli.commands.stash import stash_push
from gsm_cli.commands.stash import stash_show


# ---- CLI Group ----------------------------------------------------------------------------------------------


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="gsm")
@click.option(
    "--repo", "-C",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Path to git repository (default: current directory).",
)
@click.option(
    "--env-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Load settings from this .env file.",
)
@click.pass_context
def cli(
        ctx: click.Context,
        repo: Path | None,
        env_file: Path | None,
) -> None:
    """gsm - Interactive manager for the git stash list.

    Without a subcommand, opens the TUI: browse and search stashes, view
    their diff or changed files, and apply, pop, drop or create stashes.

    Examples:
        gsm                  # Open the TUI
        gsm -C ../other      # Open the TUI for another repository
        gsm list             # Print the stash list
    """
    try:
        config = load_config(env_path=env_file, repo_path=repo)
    except ValueError as config_error:
        raise click.ClickException(str(config_error)) from config_error

    configure_logging(config)
    ctx.obj = config

    if ctx.invoked_subcommand is None:
        from gsm_client.app import run_app
        ctx.exit(run_app(config))


# ---- Register Commands --------------------------------------------------------------------------------------


cli.add_command(stash_list)
cli.add_command(stash_show)
cli.add_command(stash_apply)
cli.add_command(stash_pop)
cli.add_command(stash_drop)
cli.add_command(stash_push)


# ---- Main Function ------------------------------------------------------------------------------------------


def main() -> int:
    """Main entry point for gsm CLI.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    try:
        cli()
        return 0
    except Exception as cli_error:
        click.echo(f"Error: {cli_error}", err=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
