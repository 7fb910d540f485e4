"""Input dispatcher for the stash manager.

Maps a key event to state mutations and the next mode. Every gateway
call happens synchronously on the caller's thread; failures are turned
into error messages, never raised to the event loop.

Execution Context:
    Library module - called by the client for every key press

Dependencies:
    - gsm_core.state: Application state
    - gsm_core.models: Mode variants

Metadata:
    Version: 0.1.0
    Author: gsm Team
"""
from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from gsm_core.gateway import GatewayError
from gsm_core.models import Confirm
from gsm_core.models import ConfirmAction
from gsm_core.models import ContentKind
from gsm_core.models import ContentView
from gsm_core.models import Message
from gsm_core.models import NewStashForm
from gsm_core.models import Normal
from gsm_core.state import ERROR_PREFIX
from gsm_core.state import PAGE_SCROLL
from gsm_core.state import AppState

logger = logging.getLogger(__name__)


# ---- Constants ----------------------------------------------------------------------------------------------


ESCAPE = "escape"
ENTER = "enter"
BACKSPACE = "backspace"
TAB = "tab"
UP = "up"
DOWN = "down"
PAGE_UP = "pageup"
PAGE_DOWN = "pagedown"
DELETE = "delete"

CONFIRM_SUCCESS = {
    ConfirmAction.APPLY: "Stash applied successfully.",
    ConfirmAction.POP: "Stash popped successfully.",
    ConfirmAction.DROP: "Stash dropped.",
}


# ---- Key Events ---------------------------------------------------------------------------------------------


@dataclass(frozen=True)
class KeyEvent:
    """A key press, named the way textual names keys.

    Attributes:
        key: Key name (``"enter"``, ``"up"``, ``"j"``, ``"slash"`` ...).
        character: Character produced by the key, if any.
    """

    key: str
    character: str | None = None

    @property
    def char(self) -> str | None:
        """Printable character of the event, None for control keys."""
        if self.character and len(self.character) == 1 and self.character.isprintable():
            return self.character
        return None


# ---- Dispatch Entry Point -----------------------------------------------------------------------------------


def dispatch(
        state: AppState,
        event: KeyEvent,
) -> bool:
    """Apply a key event to the state.

    Args:
        state: Application state, mutated in place.
        event: Key press to handle.

    Returns:
        True if the application should quit.
    """
    mode = state.mode
    if isinstance(mode, Normal):
        if state.is_searching:
            _handle_search(state, event)
            return False
        return _handle_normal(state, event)
    if isinstance(mode, ContentView):
        _handle_content(state, event)
    elif isinstance(mode, Confirm):
        _handle_confirm(state, event, mode.action)
    elif isinstance(mode, NewStashForm):
        _handle_new_stash(state, event)
    elif isinstance(mode, Message):
        state.mode = Normal()
    else:
        raise TypeError(f"Unhandled mode: {mode!r}")
    return False


# ---- Helpers ------------------------------------------------------------------------------------------------


def _run_gateway_call(
        state: AppState,
        call: Callable[[], None],
        success_text: str,
) -> None:
    """Run a mutating gateway call, reload and report the outcome.

    Args:
        state: Application state.
        call: Gateway mutation to perform.
        success_text: Message shown when both the call and reload succeed.
    """
    try:
        call()
        state.reload()
    except GatewayError as call_error:
        logger.warning(f"Stash operation failed: {call_error}")
        state.show_message(f"{ERROR_PREFIX}{call_error}")
        return
    state.show_message(success_text)


def _open_content(
        state: AppState,
        kind: ContentKind,
) -> None:
    if state.selected_record() is None:
        return
    try:
        state.load_content(kind)
    except GatewayError as load_error:
        state.show_message(f"{ERROR_PREFIX}{load_error}")
        return
    state.mode = ContentView(kind)


def _reload(
        state: AppState,
) -> None:
    try:
        state.reload()
    except GatewayError as reload_error:
        state.show_message(f"{ERROR_PREFIX}{reload_error}")
        return
    state.status_message = f"Reloaded {len(state.stashes)} stash(es)."


# ---- Mode Handlers ------------------------------------------------------------------------------------------


def _handle_search(
        state: AppState,
        event: KeyEvent,
) -> None:
    """Keys while the search query is being typed."""
    if event.key == ESCAPE:
        state.cancel_search()
    elif event.key == ENTER:
        state.commit_search()
    elif event.key == BACKSPACE:
        state.search_query = state.search_query[:-1]
        state.selected = 0
    elif event.char:
        state.search_query += event.char
        state.selected = 0


def _handle_normal(
        state: AppState,
        event: KeyEvent,
) -> bool:
    """Keys on the stash list."""
    key, char = event.key, event.char
    has_selection = state.selected_record() is not None

    if char == "q" or key == ESCAPE:
        return True
    if key == UP or char == "k":
        state.move_selection(-1)
    elif key == DOWN or char == "j":
        state.move_selection(1)
    elif key == ENTER or char == "d":
        _open_content(state, ContentKind.DIFF)
    elif char == "f":
        _open_content(state, ContentKind.FILES)
    elif char == "a":
        if has_selection:
            state.mode = Confirm(ConfirmAction.APPLY)
    elif char == "p":
        if has_selection:
            state.mode = Confirm(ConfirmAction.POP)
    elif char == "x" or key == DELETE:
        if has_selection:
            state.mode = Confirm(ConfirmAction.DROP)
    elif char == "n":
        state.reset_new_stash_form()
        state.mode = NewStashForm()
    elif char == "/":
        state.start_search()
    elif char == "c":
        state.clear_search()
    elif char == "r":
        _reload(state)
    return False


def _handle_content(
        state: AppState,
        event: KeyEvent,
) -> None:
    """Keys in the diff and file views."""
    key, char = event.key, event.char
    if key == ESCAPE or char == "q":
        state.mode = Normal()
    elif key == UP or char == "k":
        state.scroll_content(-1)
    elif key == DOWN or char == "j":
        state.scroll_content(1)
    elif key == PAGE_UP:
        state.scroll_content(-PAGE_SCROLL)
    elif key == PAGE_DOWN:
        state.scroll_content(PAGE_SCROLL)


def _handle_confirm(
        state: AppState,
        event: KeyEvent,
        action: ConfirmAction,
) -> None:
    """Keys in the yes/no dialog."""
    key, char = event.key, event.char
    if char == "y" or key == ENTER:
        record = state.selected_record()
        if record is None:
            return
        operations = {
            ConfirmAction.APPLY: state.gateway.apply,
            ConfirmAction.POP: state.gateway.pop,
            ConfirmAction.DROP: state.gateway.drop,
        }
        operation = operations[action]
        _run_gateway_call(state, lambda: operation(record.name), CONFIRM_SUCCESS[action])
    elif char == "n" or key == ESCAPE:
        state.mode = Normal()


def _handle_new_stash(
        state: AppState,
        event: KeyEvent,
) -> None:
    """Keys in the new-stash dialog."""
    key, char = event.key, event.char
    if key == ESCAPE:
        state.mode = Normal()
    elif key == ENTER:
        message = state.new_stash_text.strip()
        if not message:
            return
        include_untracked = state.new_stash_include_untracked
        _run_gateway_call(
            state,
            lambda: state.gateway.create(message, include_untracked),
            f"Stash '{message}' created.",
        )
    elif key == BACKSPACE:
        state.new_stash_text = state.new_stash_text[:-1]
    elif key == TAB:
        state.new_stash_include_untracked = not state.new_stash_include_untracked
    elif char == "u" and not state.new_stash_text:
        state.new_stash_include_untracked = not state.new_stash_include_untracked
    elif char:
        state.new_stash_text += char
