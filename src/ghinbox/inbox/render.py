"""Render inbox state to a styled text frame.

Everything here is a pure function of its arguments: same state and theme,
same frame.
"""

from __future__ import annotations

from rich.cells import cell_len, set_cell_size
from rich.text import Text

from ..config import ThemeConfig
from ..models import NotificationRecord
from .state import AppState

TITLE = "GitHub Notifications"
HELP = "↑↓:Navigate  Enter:Open  r:Mark Read  f:Refresh  Tab:Summary  q:Quit"
HEADER = f"   {'Status':<8} {'Repository':<20} {'Type':<10} Title"
EMPTY = "No notifications found"

CHROME_LINES = 8  # title, header, status and help lines
REPO_WIDTH = 20
FIXED_COLUMNS_WIDTH = 45
MIN_TITLE_WIDTH = 20


def truncate(value: str, limit: int) -> str:
    """Cut value to at most limit terminal cells, ending in '...' if cut.

    Wide (CJK, emoji) characters count as two cells.
    """
    if cell_len(value) <= limit:
        return value
    return set_cell_size(value, max(limit - 3, 0)) + "..."


def title_width(width: int) -> int:
    return max(width - FIXED_COLUMNS_WIDTH, MIN_TITLE_WIDTH)


def visible_window(selected: int, total: int, height: int) -> tuple[int, int]:
    """Return the [start, end) slice of rows to show.

    When the list doesn't fit, the window is centred on the selected row and
    clamped to the list bounds.
    """
    rows = max(height - CHROME_LINES, 1)
    if total <= rows:
        return 0, total

    start = max(selected - rows // 2, 0)
    end = start + rows
    if end > total:
        end = total
        start = max(end - rows, 0)
    return start, end


def format_row(record: NotificationRecord, index: int, width: int) -> str:
    """Format one row as plain text (no styling)."""
    repo = set_cell_size(truncate(record.repository, REPO_WIDTH), REPO_WIDTH)
    title = truncate(record.title, title_width(width))
    return (
        f"{index + 1:2d} {record.status_icon} {repo} {record.type_label:<10} {title}"
    )


def render_row(record: NotificationRecord, index: int, state: AppState, theme: ThemeConfig) -> Text:
    line = Text(format_row(record, index, state.width))
    # index column is at least 2 wide, followed by a space, then the glyph
    glyph_at = len(f"{index + 1:2d}") + 1
    line.stylize(theme.unread if record.unread else theme.read, glyph_at, glyph_at + 1)
    if index == state.selected:
        line.stylize(theme.selected)
    return line


def _title(theme: ThemeConfig) -> Text:
    return Text(TITLE, style=theme.title)


def render_loading(theme: ThemeConfig) -> Text:
    return Text.assemble("\n  ", _title(theme), "\n\n  Loading notifications...\n")


def render_error(error: str, theme: ThemeConfig) -> Text:
    return Text.assemble(
        "\n  ",
        _title(theme),
        f"\n\n  Error: {error}\n\n  Press 'q' to quit, 'f' to retry\n",
    )


def render_list(state: AppState, theme: ThemeConfig) -> Text:
    frame = Text()
    frame.append_text(_title(theme))
    frame.append("\n\n")

    if state.items:
        frame.append(HEADER, style=theme.header)
        frame.append("\n")
        start, end = visible_window(state.selected, len(state.items), state.height)
        for i in range(start, end):
            frame.append_text(render_row(state.items[i], i, state, theme))
            frame.append("\n")
    else:
        frame.append(f"{EMPTY}\n")

    frame.append("\n")
    frame.append(state.status, style=theme.status)
    frame.append("\n\n")
    frame.append(HELP, style=theme.dim)
    return frame


def render(state: AppState, theme: ThemeConfig) -> Text:
    """Render a full frame. Loading wins over errors, errors over the list."""
    if state.loading:
        frame = render_loading(theme)
    elif state.error is not None:
        frame = render_error(state.error, theme)
    else:
        frame = render_list(state, theme)
    frame.no_wrap = True
    frame.overflow = "crop"
    return frame
