"""Widgets of the gsm TUI."""
from __future__ import annotations

from gsm_client.widgets.stash_board import StashBoard

__all__ = ["StashBoard"]
