"""Stash Board Widget.

Main area of the screen. Holds focus for the whole session so every
key press reaches the dispatcher through one path.

Metadata:
    Version: 0.1.0
    Author: gsm Team
"""
from __future__ import annotations

from textual import events
from textual.widgets import Static

from gsm_core.dispatcher import KeyEvent


class StashBoard(Static, can_focus=True):
    """Focusable body showing the stash list or the content view."""

    def on_key(
            self,
            event: events.Key,
    ) -> None:
        """Forward the key press to the application dispatcher.

        Args:
            event: Key event from textual.
        """
        event.stop()
        event.prevent_default()
        self.app.handle_key(KeyEvent(key=event.key, character=event.character))

    @property
    def text_height(
            self,
    ) -> int:
        """Rows available inside the panel border."""
        return max(self.size.height - 2, 0)
