"""Main ghinbox TUI application."""

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.message import Message
from textual.widgets import Static

from ...config import Config, load_config
from ...github import GhGateway
from ...log import get_logger
from ..commands import Gateway, execute
from ..render import render
from ..state import (
    AppState,
    Command,
    CursorDown,
    CursorUp,
    Event,
    Exit,
    MarkSelectedRead,
    OpenSelected,
    Quit,
    Refresh,
    Resize,
    ShowSummary,
    startup,
    update,
)
from .utils import build_bindings, set_terminal_title

_log = get_logger("tui")


class ResultReady(Message):
    """A background command finished; carries its result event."""

    def __init__(self, event: Event) -> None:
        super().__init__()
        self.event = event


class InboxApp(App):
    """ghinbox TUI - triage GitHub notifications."""

    CSS = """
    #frame {
        height: 1fr;
        width: 1fr;
    }
    """

    # Fixed keys. Priority so screen-level focus/scroll bindings don't eat them.
    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit", show=False, priority=True),
        Binding("up", "cursor_up", "Up", show=False, priority=True),
        Binding("down", "cursor_down", "Down", show=False, priority=True),
        Binding("enter", "open", "Open", show=False, priority=True),
        Binding("f5", "refresh", "Refresh", show=False, priority=True),
        Binding("tab", "summary", "Summary", show=False, priority=True),
    ]

    def __init__(self, gateway: Gateway | None = None, config: Config | None = None) -> None:
        super().__init__()
        self.config = config if config is not None else load_config()
        if gateway is None:
            gateway = GhGateway(
                binary=self.config.gh.binary,
                api_version=self.config.gh.api_version,
                include_read=self.config.gh.all,
            )
        self.gateway = gateway
        self.inbox_state = AppState.initial()
        self._frame = Static("", id="frame")
        self._setup_keybindings()

    def _setup_keybindings(self) -> None:
        """Build keybindings from config."""
        kb = self.config.tui.keybindings

        for b in build_bindings(kb.quit, "quit", "Quit"):
            self.bind(b.key, b.action, description=b.description, show=b.show)

        for b in build_bindings(kb.open, "open", "Open"):
            self.bind(b.key, b.action, description=b.description, show=b.show)

        for b in build_bindings(kb.mark_read, "mark_read", "Mark Read"):
            self.bind(b.key, b.action, description=b.description, show=b.show)

        for b in build_bindings(kb.refresh, "refresh", "Refresh"):
            self.bind(b.key, b.action, description=b.description, show=b.show)

        for b in build_bindings(kb.summary, "summary", "Summary", show=False):
            self.bind(b.key, b.action, description=b.description, show=b.show)

        # Arrow key alternatives (if configured)
        if len(kb.up_down) == 2:
            up, down = kb.up_down
            self.bind(up, "cursor_up", description="Up", show=False)
            self.bind(down, "cursor_down", description="Down", show=False)

    def compose(self) -> ComposeResult:
        yield self._frame

    def on_mount(self) -> None:
        self.title = "ghinbox"
        state, command = startup()
        self.inbox_state = state
        self._run(command)
        self.apply_event(Resize(self.size.width, self.size.height))

    def on_resize(self) -> None:
        self.apply_event(Resize(self.size.width, self.size.height))

    def apply_event(self, event: Event) -> None:
        """Feed one event through the reducer, redraw, and run any command."""
        self.inbox_state, command = update(self.inbox_state, event)
        self._frame.update(render(self.inbox_state, self.config.tui.theme))
        if command is not None:
            self._run(command)

    def _run(self, command: Command) -> None:
        if isinstance(command, Exit):
            self.exit()
            return
        _log.debug("dispatch: %r", command)
        self._run_in_background(command)

    @work(thread=True)
    def _run_in_background(self, command: Command) -> None:
        """Run one gateway command off the UI loop and post its result back."""
        event = execute(self.gateway, command)
        if event is not None:
            self.post_message(ResultReady(event))

    def on_result_ready(self, message: ResultReady) -> None:
        self.apply_event(message.event)

    def action_quit(self) -> None:
        self.apply_event(Quit())

    def action_cursor_up(self) -> None:
        self.apply_event(CursorUp())

    def action_cursor_down(self) -> None:
        self.apply_event(CursorDown())

    def action_open(self) -> None:
        self.apply_event(OpenSelected())

    def action_mark_read(self) -> None:
        self.apply_event(MarkSelectedRead())

    def action_refresh(self) -> None:
        self.apply_event(Refresh())

    def action_summary(self) -> None:
        self.apply_event(ShowSummary())


def main(config: Config | None = None) -> None:
    set_terminal_title("ghinbox")
    app = InboxApp(config=config)
    app.run()
