"""Tests for configuration parsing."""

from ghinbox.config import Config, KeybindingsConfig, ThemeConfig, _parse_config, load_config
from ghinbox.inbox.tui.utils import build_bindings


def test_keybindings_defaults():
    """KeybindingsConfig has expected defaults."""
    kb = KeybindingsConfig()
    assert kb.quit == "q"
    assert kb.open == ""
    assert kb.mark_read == "r"
    assert kb.refresh == "f"
    assert kb.summary == ""
    assert kb.up_down == "kj"


def test_parse_keybindings_partial_override():
    """Parsing config with partial keybindings uses defaults for unspecified."""
    data = {
        "tui": {
            "keybindings": {
                "quit": "qQ",
                "up_down": "ri",
            }
        }
    }
    config = _parse_config(data)
    kb = config.tui.keybindings

    # Overridden
    assert kb.quit == "qQ"
    assert kb.up_down == "ri"

    # Defaults preserved
    assert kb.mark_read == "r"
    assert kb.refresh == "f"


def test_parse_missing_sections():
    """Parsing an empty config gives all defaults."""
    config = _parse_config({})
    assert config == Config()
    assert config.gh.binary == "gh"
    assert config.gh.all is False


def test_parse_theme_override():
    data = {"tui": {"theme": {"unread": "bold red"}}}
    theme = _parse_config(data).tui.theme
    assert theme.unread == "bold red"
    assert theme.read == ThemeConfig().read
    assert theme.selected == "reverse"


def test_parse_gh_section():
    data = {"gh": {"binary": "/opt/bin/gh", "all": True}}
    gh = _parse_config(data).gh
    assert gh.binary == "/opt/bin/gh"
    assert gh.all is True
    assert gh.api_version == "2022-11-28"


def test_load_config_missing_file(tmp_path):
    assert load_config(tmp_path / "nope.toml") == Config()


def test_load_config_invalid_toml(tmp_path, capsys):
    path = tmp_path / "config.toml"
    path.write_text("[tui\nbroken")
    assert load_config(path) == Config()
    assert "Warning" in capsys.readouterr().out


def test_load_config_from_file(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text('[tui.keybindings]\nrefresh = "gR"\n')
    config = load_config(path)
    assert config.tui.keybindings.refresh == "gR"
    assert config.tui.keybindings.quit == "q"


def test_build_bindings_single_key():
    """Single key creates one visible binding."""
    bindings = build_bindings("q", "quit", "Quit")
    assert len(bindings) == 1
    assert bindings[0].key == "q"
    assert bindings[0].action == "quit"
    assert bindings[0].description == "Quit"
    assert bindings[0].show is True


def test_build_bindings_multiple_keys():
    """Multiple keys create one visible + hidden bindings."""
    bindings = build_bindings("fgR", "refresh", "Refresh")
    assert len(bindings) == 3
    assert bindings[0].key == "f"
    assert bindings[0].show is True
    assert bindings[1].show is False
    assert bindings[2].key == "R"


def test_build_bindings_empty():
    """Empty keys string returns no bindings."""
    assert build_bindings("", "open", "Open") == []
