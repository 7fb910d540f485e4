"""Frame rendering for the gsm TUI.

Pure functions that turn the application state into rich renderables.
Nothing here mutates the state; every reachable state, including an
empty stash list or an empty content buffer, renders without error.

Metadata:
    Version: 0.1.0
    Author: gsm Team
"""
from __future__ import annotations

from rich.console import RenderableType
from rich.panel import Panel
from rich.text import Text

from gsm_core.models import Confirm
from gsm_core.models import ConfirmAction
from gsm_core.models import ContentKind
from gsm_core.models import ContentView
from gsm_core.models import Message
from gsm_core.models import NewStashForm
from gsm_core.state import AppState


# ---- Palette ------------------------------------------------------------------------------------------------


BRAND = "rgb(255,135,0)"
ADDED = "green"
REMOVED = "red"
DIM = "bright_black"
HIGHLIGHT_BG = "on rgb(45,45,60)"
LIST_BORDER = "rgb(80,80,100)"
FOOTER_BORDER = "rgb(60,60,80)"

BRANCH_WIDTH = 20
MESSAGE_WIDTH = 35

CONFIRM_DIALOGS = {
    ConfirmAction.APPLY: ("Apply Stash", "Apply this stash? (it stays in the stash list)", "green"),
    ConfirmAction.POP: ("Pop Stash", "Apply and remove this stash from the list?", "yellow"),
    ConfirmAction.DROP: ("Drop Stash", "Permanently delete this stash? This cannot be undone.", "red"),
}


# ---- Helpers ------------------------------------------------------------------------------------------------


def truncate(
        text: str,
        width: int,
) -> str:
    """Shorten text to width characters, marking the cut with an ellipsis."""
    if len(text) <= width:
        return text
    return f"{text[:width - 1]}…"


def _key_hint(
        key: str,
        description: str,
) -> Text:
    return Text.assemble((f"[{key}]", f"bold {BRAND}"), (f" {description}", "grey70"))


def _join_hints(
        hints: list[Text],
        separator: str = "  ",
) -> Text:
    return Text(separator).join(hints)


def colorize_diff_line(
        line: str,
) -> Text:
    """Style one line of a unified diff."""
    if line.startswith("+") and not line.startswith("+++"):
        style = ADDED
    elif line.startswith("-") and not line.startswith("---"):
        style = REMOVED
    elif line.startswith("@@"):
        style = "cyan"
    elif line.startswith(("diff ", "index ", "---", "+++")):
        style = "bold yellow"
    else:
        style = "grey70"
    return Text(line, style=style)


# ---- Rendering ----------------------------------------------------------------------------------------------


def render_header(
        state: AppState,
) -> Text:
    """Title line with branch, stash count and search indicator."""
    mode = state.mode
    if isinstance(mode, ContentView):
        label = " Files " if mode.kind is ContentKind.FILES else " Diff "
        record = state.selected_record()
        info = f"{record.name} - {record.short_msg}" if record else ""
        return Text.assemble((label, f"bold black on {BRAND}"), (f"  {info}", "grey70"))

    if state.is_searching:
        search = f"  search: /{state.search_query}"
    elif state.search_query:
        search = f"  filter: /{state.search_query}"
    else:
        search = ""
    return Text.assemble(
        (" gsm ", f"bold black on {BRAND}"),
        (f"  branch: {state.current_branch}  stashes: {len(state.stashes)}{search}", "grey70"),
    )


def list_window(
        selected: int,
        total: int,
        height: int,
) -> tuple[int, int]:
    """Start and end of the rows to draw so that the selected row is visible.

    Args:
        selected: Position of the selected row.
        total: Number of rows in the view.
        height: Rows available inside the panel border.

    Returns:
        Half-open range of view positions.
    """
    height = max(height, 1)
    start = min(max(selected - height + 1, 0), max(total - height, 0))
    return start, min(start + height, total)


def render_stash_list(
        state: AppState,
        height: int,
) -> Panel:
    """Window of the stash list around the highlighted selection.

    Args:
        state: Application state.
        height: Rows available for text inside the panel border.
    """
    view = state.filtered_view()
    if not view:
        if state.stashes:
            empty = "No stashes match your search."
        else:
            empty = "No stashes found. Press 'n' to create one."
        return Panel(
            Text(empty, style=DIM, justify="center"),
            title=" Stashes ",
            border_style=DIM,
        )

    start, end = list_window(state.selected, len(view), height)
    rows = []
    for position, stash in enumerate(view[start:end], start=start):
        is_selected = position == state.selected
        row = Text.assemble(
            ("▶ " if is_selected else "  ", BRAND),
            (f"{stash.index:<3}", BRAND),
            " ",
            (f"{truncate(stash.branch, BRANCH_WIDTH):<{BRANCH_WIDTH}}", "italic cyan"),
            " ",
            (f"{truncate(stash.short_msg, MESSAGE_WIDTH):<{MESSAGE_WIDTH}}",
             "bold white" if is_selected else "grey70"),
            " ",
            (stash.date, DIM),
        )
        if is_selected:
            row.stylize(HIGHLIGHT_BG)
        rows.append(row)

    return Panel(
        Text("\n").join(rows),
        title=f" Stashes ({state.selected + 1}/{len(view)}) ",
        title_align="left",
        border_style=LIST_BORDER,
    )


def render_content(
        state: AppState,
        height: int,
) -> Panel:
    """Visible window of the content buffer.

    Args:
        state: Application state.
        height: Rows available for text inside the panel border.
    """
    visible = state.content_buffer[state.content_scroll:state.content_scroll + max(height, 0)]
    return Panel(
        Text("\n").join(colorize_diff_line(line) for line in visible),
        border_style=LIST_BORDER,
    )


def render_body(
        state: AppState,
        height: int,
) -> RenderableType:
    """Main area: the content view or the stash list."""
    if isinstance(state.mode, ContentView):
        return render_content(state, height)
    return render_stash_list(state, height)


def render_footer(
        state: AppState,
) -> Text:
    """Key hints for the active mode, plus the last status message."""
    if isinstance(state.mode, ContentView):
        if state.content_buffer:
            scroll_info = f"line {state.content_scroll + 1}/{len(state.content_buffer)}"
        else:
            scroll_info = "line 0/0"
        footer = _join_hints(
            [
                _key_hint("↑↓/jk", "scroll"),
                _key_hint("PgUp/PgDn", "fast scroll"),
                _key_hint("Esc/q", "back"),
            ],
            separator="   ",
        )
        footer.append(f"   {scroll_info}")
        return footer

    if state.is_searching:
        return _join_hints([_key_hint("Enter", "confirm"), _key_hint("Esc", "cancel search")])

    footer = _join_hints([
        _key_hint("↑↓/jk", "navigate"),
        _key_hint("Enter/d", "diff"),
        _key_hint("f", "files"),
        _key_hint("a", "apply"),
        _key_hint("p", "pop"),
        _key_hint("x", "drop"),
        _key_hint("n", "new"),
        _key_hint("/", "search"),
        _key_hint("r", "reload"),
        _key_hint("q", "quit"),
    ])
    if state.status_message:
        footer.append(f"   {state.status_message}", style=DIM)
    return footer


def render_dialog(
        state: AppState,
) -> Panel | None:
    """Dialog for confirm, new-stash and message modes, None otherwise."""
    mode = state.mode
    if isinstance(mode, Confirm):
        title, body, color = CONFIRM_DIALOGS[mode.action]
        content = Text.assemble(
            (body, "white"),
            "\n\n",
            ("[y] Yes", "bold green"),
            "    ",
            ("[n] No", "red"),
            justify="center",
        )
        return Panel(content, title=f" {title} ", border_style=color)

    if isinstance(mode, NewStashForm):
        if state.new_stash_include_untracked:
            untracked = ("[Tab] Include untracked: ON ", "green")
        else:
            untracked = ("[Tab] Include untracked: off", DIM)
        content = Text.assemble(
            ("Stash message:", "grey70"),
            "\n",
            (f"{state.new_stash_text}_", "bold white"),
            "\n\n",
            untracked,
            "\n\n",
            ("[Enter]", BRAND),
            " save   ",
            ("[Esc]", "red"),
            " cancel",
            justify="center",
        )
        return Panel(content, title=" New Stash ", border_style=BRAND)

    if isinstance(mode, Message):
        is_error = mode.text.startswith("Error")
        content = Text.assemble(
            (mode.text, "white"),
            "\n\n",
            ("Press any key to continue", DIM),
            justify="center",
        )
        return Panel(
            content,
            title=" Error " if is_error else " Done ",
            border_style="red" if is_error else "green",
        )

    return None
