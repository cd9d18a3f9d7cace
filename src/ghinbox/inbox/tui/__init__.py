"""ghinbox TUI package."""

from .app import InboxApp, main
from .utils import set_terminal_title

__all__ = ["InboxApp", "main", "set_terminal_title"]
