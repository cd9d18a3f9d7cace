"""ghinbox inbox - state, rendering and the interactive loop."""

from .state import AppState, startup, update

__all__ = ["AppState", "startup", "update"]
