"""Configuration management for ghinbox."""

import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any


def get_config_path() -> Path:
    """Get the path to the ghinbox config file."""
    xdg_config = Path.home() / ".config"
    return xdg_config / "ghinbox" / "config.toml"


def get_default_config() -> str:
    """Return the default config file contents."""
    return """\
# ghinbox configuration

[gh]
# Path or name of the GitHub CLI binary
binary = "gh"
# Include notifications that are already read
all = false

[tui.keybindings]
# Each character is a key bound to the command
quit = "q"
mark_read = "r"
refresh = "f"
up_down = "kj"

[tui.theme]
# Rich style strings
# unread = "#FF5F87"
# read = "#50FA7B"
"""


@dataclass
class GhConfig:
    """Configuration for talking to GitHub through the gh CLI."""

    binary: str = "gh"
    api_version: str = "2022-11-28"
    all: bool = False  # Also fetch notifications that are already read


@dataclass
class KeybindingsConfig:
    """Configuration for TUI keybindings.

    Each command field is a string where each character is a valid key binding.
    For example, quit="qQ" means both 'q' and 'Q' will quit.

    The up_down field is a 2-character string: up, down.
    Arrow keys always work; empty string means arrows only.
    Enter always opens, F5 always refreshes, Tab always shows the summary.
    """

    quit: str = "q"
    open: str = ""  # Additional keys for opening (Enter always works)
    mark_read: str = "r"
    refresh: str = "f"
    summary: str = ""  # Additional keys for the summary view (Tab always works)
    up_down: str = "kj"


@dataclass(frozen=True)
class ThemeConfig:
    """Styles used by the renderer, as rich style strings."""

    title: str = "bold #04B575"
    header: str = "bold #FAFAFA on #7D56F4"
    selected: str = "reverse"
    unread: str = "#FF5F87"
    read: str = "#50FA7B"
    dim: str = "#6272A4"
    status: str = "#8BE9FD"


@dataclass
class TuiConfig:
    """Configuration for the TUI."""

    keybindings: KeybindingsConfig = field(default_factory=KeybindingsConfig)
    theme: ThemeConfig = field(default_factory=ThemeConfig)


@dataclass
class Config:
    """ghinbox configuration."""

    gh: GhConfig = field(default_factory=GhConfig)
    tui: TuiConfig = field(default_factory=TuiConfig)


def load_config(config_path: Path | None = None) -> Config:
    """Load configuration from file, or return defaults."""
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        return Config()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        # Log warning but return defaults
        print(f"Warning: Could not load config from {config_path}: {e}")
        return Config()

    return _parse_config(data)


def _with_defaults(cls: type, data: dict[str, Any]) -> Any:
    """Build a dataclass from data, using its defaults for unspecified fields."""
    defaults = cls()
    return cls(**{f.name: data.get(f.name, getattr(defaults, f.name)) for f in fields(cls)})


def _parse_config(data: dict[str, Any]) -> Config:
    """Parse config dict into Config object."""
    gh = _with_defaults(GhConfig, data.get("gh", {}))

    tui_data = data.get("tui", {})
    tui = TuiConfig(
        keybindings=_with_defaults(KeybindingsConfig, tui_data.get("keybindings", {})),
        theme=_with_defaults(ThemeConfig, tui_data.get("theme", {})),
    )

    return Config(gh=gh, tui=tui)


def ensure_config_exists() -> Path:
    """Ensure the config file exists, creating with defaults if needed."""
    config_path = get_config_path()

    if not config_path.exists():
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(get_default_config())

    return config_path
