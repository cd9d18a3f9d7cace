"""ghinbox - triage GitHub notifications from the terminal."""

__version__ = "0.1.0"
