"""gsm stash commands.

Scriptable counterparts of the TUI actions: list, show, apply, pop,
drop and push.

Execution Context:
    CLI command - invoked via `gsm <subcommand>`

Dependencies:
    - click: CLI framework
    - rich: Terminal output
    - gsm_core: Stash gateway

Metadata:
    Version: 0.1.0
    Author: gsm Team
"""
from __future__ import annotations

import click
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from gsm_core.gateway import GatewayError

from .utils import get_gateway
from .utils import resolve_stash

console = Console()

index_argument = click.argument(
    "index",
    type=int,
    default=0,
    required=False,
)


# ---- Stash Commands -----------------------------------------------------------------------------------------


@click.command(name="list")
@click.pass_context
def stash_list(
        ctx: click.Context,
) -> None:
    """List all stash entries.

    Shows every stash with its index, name, branch, message and age.

    Examples:
        gsm list
    """
    gateway = get_gateway(ctx)
    try:
        stashes = gateway.list_stashes()
    except GatewayError as stash_error:
        msg = f"Stash list failed: {stash_error}"
        raise click.ClickException(msg) from stash_error

    if not stashes:
        console.print("[dim]No stash entries.[/dim]")
        return

    branch = gateway.current_branch()
    table = Table(title=f"Stash List ({branch})" if branch else "Stash List")
    table.add_column("Index", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Branch", style="yellow")
    table.add_column("Message")
    table.add_column("Date", style="dim")

    for stash in stashes:
        table.add_row(
            str(stash.index),
            stash.name,
            stash.branch,
            stash.short_msg[:50],
            stash.date,
        )

    console.print(table)


@click.command(name="show")
@index_argument
@click.option(
    "--stat",
    is_flag=True,
    help="Show the changed files instead of the patch.",
)
@click.pass_context
def stash_show(
        ctx: click.Context,
        index: int,
        stat: bool,
) -> None:
    """Show the changes recorded in a stash.

    INDEX is the stash index (0 = most recent, default).

    Examples:
        gsm show            # Patch of most recent stash
        gsm show 2 --stat   # Files changed in stash@{2}
    """
    gateway = get_gateway(ctx)
    try:
        stash = resolve_stash(gateway, index)
        if stat:
            console.print(gateway.get_file_stat(stash.name), highlight=False)
            return
        patch = gateway.get_diff(stash.name)
    except GatewayError as stash_error:
        msg = f"Stash show failed: {stash_error}"
        raise click.ClickException(msg) from stash_error

    console.print(f"[bold]{stash.name}[/bold] [dim]{stash.message}[/dim]")
    console.print(Syntax(patch, "diff", theme="ansi_dark", word_wrap=False))


@click.command(name="apply")
@index_argument
@click.pass_context
def stash_apply(
        ctx: click.Context,
        index: int,
) -> None:
    """Apply a stash entry and keep it in the list.

    Examples:
        gsm apply       # Apply most recent stash
        gsm apply 1     # Apply second most recent
    """
    gateway = get_gateway(ctx)
    try:
        stash = resolve_stash(gateway, index)
        gateway.apply(stash.name)
    except GatewayError as stash_error:
        msg = f"Stash apply failed: {stash_error}"
        raise click.ClickException(msg) from stash_error

    console.print("[green]Stash applied successfully.[/green]")
    console.print(f"  [bold]Stash:[/bold] {stash.name}")
    console.print(f"  [bold]Message:[/bold] {stash.short_msg}")


@click.command(name="pop")
@index_argument
@click.pass_context
def stash_pop(
        ctx: click.Context,
        index: int,
) -> None:
    """Apply and remove a stash entry.

    INDEX is the stash index (0 = most recent, default).

    Examples:
        gsm pop        # Apply most recent stash
        gsm pop 1      # Apply second most recent
    """
    gateway = get_gateway(ctx)
    try:
        stash = resolve_stash(gateway, index)
        gateway.pop(stash.name)
    except GatewayError as stash_error:
        msg = f"Stash pop failed: {stash_error}"
        raise click.ClickException(msg) from stash_error

    console.print("[green]Stash popped successfully.[/green]")
    console.print(f"  [bold]Stash:[/bold] {stash.name}")
    console.print(f"  [bold]Message:[/bold] {stash.short_msg}")


@click.command(name="drop")
@index_argument
@click.option(
    "--force", "-f",
    is_flag=True,
    help="Skip confirmation prompt.",
)
@click.pass_context
def stash_drop(
        ctx: click.Context,
        index: int,
        force: bool,
) -> None:
    """Remove a stash entry without applying.

    INDEX is the stash index (0 = most recent, default).

    Examples:
        gsm drop          # Drop most recent stash
        gsm drop 1 -f     # Drop second most recent without asking
    """
    gateway = get_gateway(ctx)
    try:
        stash = resolve_stash(gateway, index)
        if not force:
            console.print(f"[yellow]This will permanently delete {stash.name}: {stash.short_msg}[/yellow]")
            if not click.confirm("Continue?", default=False):
                console.print("[dim]Drop cancelled.[/dim]")
                return
        gateway.drop(stash.name)
    except GatewayError as stash_error:
        msg = f"Stash drop failed: {stash_error}"
        raise click.ClickException(msg) from stash_error

    console.print("[green]Stash dropped.[/green]")
    console.print(f"  [bold]Stash:[/bold] {stash.name}")
    console.print(f"  [bold]Message:[/bold] {stash.short_msg}")


@click.command(name="push")
@click.option(
    "--message", "-m",
    required=True,
    help="Message describing the stash.",
)
@click.option(
    "--include-untracked", "-u",
    is_flag=True,
    help="Also stash untracked files.",
)
@click.pass_context
def stash_push(
        ctx: click.Context,
        message: str,
        include_untracked: bool,
) -> None:
    """Save working tree changes as a new stash.

    Examples:
        gsm push -m "WIP feature"
        gsm push -m "Experiment" -u
    """
    text = message.strip()
    if not text:
        raise click.BadParameter("Message must not be empty.", param_hint="--message")

    gateway = get_gateway(ctx)
    try:
        gateway.create(text, include_untracked)
    except GatewayError as stash_error:
        msg = f"Stash push failed: {stash_error}"
        raise click.ClickException(msg) from stash_error

    console.print(f"[green]Stash '{text}' created.[/green]")
    if include_untracked:
        console.print("  [dim]Untracked files included[/dim]")
