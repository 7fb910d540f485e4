"""gsm Client TUI Application.

Main application entry point for the gsm terminal user interface.
Every key press is handed to the core dispatcher on textual's message
loop, and the view is redrawn from the application state afterwards
and on a periodic timer.

Execution Context:
    TUI application - run via `gsm` or `gsm-client` command

Dependencies:
    - textual: TUI framework
    - rich: Terminal formatting
    - gsm_core: Core library

Metadata:
    Version: 0.1.0
    Author: gsm Team
"""
from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from rich.console import Console
from textual.app import App, ComposeResult
from textual.widgets import Static

from gsm_core.config import DEFAULT_POLL_INTERVAL
from gsm_core.config import GsmConfig
from gsm_core.config import configure_logging
from gsm_core.config import load_config
from gsm_core.dispatcher import KeyEvent
from gsm_core.dispatcher import dispatch
from gsm_core.gateway import GatewayError
from gsm_core.state import AppState

from gsm_client.render import render_body
from gsm_client.render import render_dialog
from gsm_client.render import render_footer
from gsm_client.render import render_header
from gsm_client.widgets.stash_board import StashBoard

console = Console()
logger = logging.getLogger(__name__)


# ---- Main Application ---------------------------------------------------------------------------------------


class StashManagerApp(App):
    """gsm TUI Application.

    Interactive terminal interface for browsing and manipulating the
    git stash list. Holds no state of its own beyond the AppState it
    is given.
    """

    CSS = """
    Screen {
        layout: vertical;
        background: $background;
    }

    #header {
        height: 1;
        padding: 0 1;
    }

    #body {
        height: 1fr;
    }

    #dialog {
        height: auto;
        margin: 0 8;
        display: none;
    }

    #footer {
        height: auto;
        border: solid rgb(60,60,80);
        content-align: center middle;
        text-align: center;
    }
    """

    TITLE = "gsm"
    SUB_TITLE = "Git Stash Manager"

    def __init__(
            self,
            state: AppState,
            poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        """Initialize gsm client.

        Args:
            state: Application state, already loaded.
            poll_interval: Seconds between periodic re-renders.
        """
        super().__init__()
        self.state = state
        self.poll_interval = poll_interval

    def compose(
            self,
    ) -> ComposeResult:
        """Compose the UI layout.

        Yields:
            UI widgets in layout order.
        """
        yield Static("", id="header")
        yield StashBoard("", id="body")
        yield Static("", id="dialog")
        yield Static("", id="footer")

    def on_mount(
            self,
    ) -> None:
        """Focus the board and start the render timer."""
        self.query_one(StashBoard).focus()
        self.refresh_view()
        self.set_interval(self.poll_interval, self.refresh_view)

    def handle_key(
            self,
            event: KeyEvent,
    ) -> None:
        """Dispatch a key press and redraw, or exit on quit.

        Args:
            event: Key press translated from textual.
        """
        if dispatch(self.state, event):
            logger.debug("Quit requested")
            self.exit(0)
            return
        self.refresh_view()

    def refresh_view(
            self,
    ) -> None:
        """Redraw every region from the current state."""
        board = self.query_one(StashBoard)
        self.query_one("#header", Static).update(render_header(self.state))
        board.update(render_body(self.state, board.text_height))
        self.query_one("#footer", Static).update(render_footer(self.state))

        dialog = self.query_one("#dialog", Static)
        panel = render_dialog(self.state)
        dialog.display = panel is not None
        dialog.update(panel if panel is not None else "")


# ---- Main Function ------------------------------------------------------------------------------------------


def run_app(
        config: GsmConfig,
) -> int:
    """Check the repository, load stashes and run the TUI.

    Args:
        config: Loaded configuration.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    configure_logging(config)
    gateway = config.create_gateway()
    try:
        gateway.ensure_repository()
    except GatewayError as repo_error:
        console.print(f"[red]Error: {repo_error}[/red]")
        return 1

    state = AppState.load(gateway)
    logger.info(f"Starting TUI with {len(state.stashes)} stash(es)")
    app = StashManagerApp(state, poll_interval=config.poll_interval)
    app.run()
    return 0


def main() -> int:
    """Main entry point for gsm Client TUI.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = argparse.ArgumentParser(
        description="gsm TUI Client - Interactive git stash manager"
    )
    parser.add_argument(
        "--repo",
        "-r",
        type=str,
        help="Path to git repository (default: current directory)",
    )
    parser.add_argument(
        "--cwd",
        "-C",
        type=str,
        help="Change to this directory before starting",
    )

    args = parser.parse_args()

    if args.cwd:
        try:
            os.chdir(args.cwd)
        except OSError as chdir_error:
            console.print(f"[red]Failed to change directory: {chdir_error}[/red]")
            return 1

    try:
        config = load_config(repo_path=Path(args.repo) if args.repo else None)
        return run_app(config)
    except KeyboardInterrupt:
        console.print("\n[yellow]Exited by user[/yellow]")
        return 0
    except ValueError as config_error:
        console.print(f"[red]Error: {config_error}[/red]")
        return 1


if __name__ == "__main__":
    sys.exit(main())
