"""Shared logging for ghinbox.

All components log to one file via Python's logging module, /tmp/ghinbox.log
unless GHINBOX_LOG names another path. The TUI owns the terminal, so nothing
is written to stdout/stderr while it runs.
Filter with grep: grep 'ghinbox.github' /tmp/ghinbox.log
"""

import logging
import os
from pathlib import Path

_DEFAULT_LOG_PATH = Path("/tmp/ghinbox.log")

_root = logging.getLogger("ghinbox")
_root.setLevel(logging.DEBUG)
# don't propagate to root logger (avoids duplicate output if someone
# configures the root logger elsewhere)
_root.propagate = False


def get_log_path() -> Path:
    """Get the log file path, honouring $GHINBOX_LOG."""
    override = os.environ.get("GHINBOX_LOG")
    return Path(override) if override else _DEFAULT_LOG_PATH


def configure(log_path: Path | None = None) -> Path:
    """Point the ghinbox logger at log_path, replacing any earlier file."""
    if log_path is None:
        log_path = get_log_path()

    for old in list(_root.handlers):
        _root.removeHandler(old)
        old.close()

    handler = logging.FileHandler(log_path)
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(name)s %(message)s", datefmt="%H:%M:%S")
    )
    _root.addHandler(handler)
    return log_path


def get_logger(name: str) -> logging.Logger:
    return _root.getChild(name)


configure()
