"""Application state for the interactive stash manager.

Owns the stash collection and everything the UI derives from it:
selection, mode, search query, content buffer and the new-stash form.
The state is constructed once at startup and mutated only through the
dispatcher; presentation code reads it and never writes.

Execution Context:
    Library module - imported by the dispatcher and the client

Dependencies:
    - gsm_core.gateway: Stash data source
    - gsm_core.models: Records and modes

Metadata:
    Version: 0.1.0
    Author: gsm Team
"""
from __future__ import annotations

import logging

from gsm_core.gateway import GatewayError
from gsm_core.gateway import StashGateway
from gsm_core.models import ContentKind
from gsm_core.models import Message
from gsm_core.models import Mode
from gsm_core.models import Normal
from gsm_core.models import StashRecord

logger = logging.getLogger(__name__)


# ---- Constants ----------------------------------------------------------------------------------------------


PAGE_SCROLL = 20
ERROR_PREFIX = "Error: "


# ---- Application State --------------------------------------------------------------------------------------


class AppState:
    """Single in-memory state of the stash manager.

    Attributes:
        gateway: Source of stash data and target of mutations.
        stashes: Stash collection, replaced wholesale on reload.
        selected: Index into ``filtered_view()``.
        mode: Active mode variant.
        content_buffer: Lines of the loaded diff or file listing.
        content_scroll: First visible line of the content buffer.
        search_query: Active filter text.
        is_searching: True while the query is being typed.
        new_stash_text: Message typed into the new-stash form.
        new_stash_include_untracked: Untracked flag of the new-stash form.
        status_message: Last result message, kept after it is dismissed.
        current_branch: Checked-out branch, empty when unknown.
    """

    def __init__(
            self,
            gateway: StashGateway,
            stashes: list[StashRecord] | None = None,
            current_branch: str = "",
    ) -> None:
        """Initialize state without touching the gateway.

        Args:
            gateway: Stash gateway.
            stashes: Initial collection.
            current_branch: Initial branch name.
        """
        self.gateway = gateway
        self.stashes: list[StashRecord] = list(stashes or [])
        self.selected = 0
        self.mode: Mode = Normal()
        self.content_buffer: list[str] = []
        self.content_scroll = 0
        self.search_query = ""
        self.is_searching = False
        self.new_stash_text = ""
        self.new_stash_include_untracked = False
        self.status_message: str | None = None
        self.current_branch = current_branch

    @classmethod
    def load(
            cls,
            gateway: StashGateway,
    ) -> AppState:
        """Create state and fetch the initial stash list.

        A failed initial fetch does not abort startup: the state starts
        empty and shows the error as a message.

        Args:
            gateway: Stash gateway.

        Returns:
            Populated AppState instance.
        """
        state = cls(gateway)
        try:
            state.reload()
        except GatewayError as load_error:
            logger.warning(f"Initial stash load failed: {load_error}")
            state.show_message(f"{ERROR_PREFIX}{load_error}")
        return state

    # ---- Queries --------------------------------------------------------------------------------------------

    def filtered_view(self) -> list[StashRecord]:
        """Return stashes matching the search query, in list order."""
        if not self.search_query:
            return list(self.stashes)
        query = self.search_query.lower()
        return [
            stash for stash in self.stashes
            if query in stash.short_msg.lower() or query in stash.branch.lower()
        ]

    def selected_record(self) -> StashRecord | None:
        """Return the selected record of the filtered view, if any."""
        view = self.filtered_view()
        if 0 <= self.selected < len(view):
            return view[self.selected]
        return None

    # ---- Mutations ------------------------------------------------------------------------------------------

    def reload(self) -> None:
        """Re-fetch stashes and current branch from the gateway.

        Nothing is modified unless the stash list was fetched successfully.

        Raises:
            GatewayError: If listing stashes fails.
        """
        stashes = self.gateway.list_stashes()
        current_branch = self.gateway.current_branch()

        self.stashes = stashes
        self.current_branch = current_branch

        view_length = len(self.filtered_view())
        if view_length == 0:
            self.selected = 0
        elif self.selected >= view_length:
            self.selected = view_length - 1
        logger.debug(f"Reloaded {len(stashes)} stash(es), selected={self.selected}")

    def load_content(
            self,
            kind: ContentKind,
    ) -> None:
        """Load the diff or file listing of the selected stash.

        Args:
            kind: Which text to load.

        Raises:
            GatewayError: If the gateway call fails; the buffer is untouched.
        """
        record = self.selected_record()
        if record is None:
            return

        if kind is ContentKind.DIFF:
            raw = self.gateway.get_diff(record.name)
        else:
            raw = self.gateway.get_file_stat(record.name)

        self.content_buffer = raw.splitlines()
        self.content_scroll = 0

    def move_selection(
            self,
            delta: int,
    ) -> None:
        """Move the selection, clamped to the filtered view."""
        view_length = len(self.filtered_view())
        if view_length == 0:
            return
        self.selected = max(0, min(self.selected + delta, view_length - 1))

    def scroll_content(
            self,
            delta: int,
    ) -> None:
        """Scroll the content buffer, clamped to its last line."""
        last_line = max(len(self.content_buffer) - 1, 0)
        self.content_scroll = max(0, min(self.content_scroll + delta, last_line))

    def show_message(
            self,
            text: str,
    ) -> None:
        """Switch to message mode and remember the text as status."""
        self.status_message = text
        self.mode = Message(text)

    def reset_new_stash_form(self) -> None:
        """Clear the new-stash form fields."""
        self.new_stash_text = ""
        self.new_stash_include_untracked = False

    # ---- Search ---------------------------------------------------------------------------------------------

    def start_search(self) -> None:
        """Clear the query and begin typing a new one."""
        self.search_query = ""
        self.is_searching = True
        self.selected = 0

    def cancel_search(self) -> None:
        """Abandon search entry and drop the query."""
        self.search_query = ""
        self.is_searching = False
        self.selected = 0

    def commit_search(self) -> None:
        """Stop typing and keep the query as a persistent filter."""
        self.is_searching = False

    def clear_search(self) -> None:
        """Drop the persistent filter."""
        self.search_query = ""
        self.selected = 0
