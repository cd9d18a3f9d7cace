"""CLI entry point for ghinbox.

With no arguments, launches the notification inbox TUI. Also:
- list: print notifications without the TUI
- config: manage the config file
"""

import argparse
import json
import sys
from dataclasses import asdict

from . import __version__
from .config import Config, ensure_config_exists, get_config_path, load_config
from .github import EnvironmentCheckError, GatewayError, GhGateway, check_cli
from .models import NotificationRecord


def _require_cli(config: Config) -> None:
    """Exit with helpful message if gh is missing or not logged in."""
    try:
        check_cli(config.gh.binary)
    except EnvironmentCheckError as e:
        print(f"Error: {e}", file=sys.stderr)
        print("Please install GitHub CLI: https://cli.github.com/", file=sys.stderr)
        sys.exit(1)


def _record_to_json(n: NotificationRecord) -> dict:
    """Convert a record to a JSON-serializable dict."""
    data = asdict(n)
    data["subject_type"] = str(n.subject_type)
    data["updated_at"] = n.updated_at.isoformat() if n.updated_at else None
    return data


def cmd_tui(args: argparse.Namespace) -> None:
    """Launch the inbox TUI."""
    config = load_config()
    _require_cli(config)

    from .inbox.tui import main

    main(config)


def cmd_list(args: argparse.Namespace) -> None:
    """List notifications."""
    config = load_config()
    _require_cli(config)

    gateway = GhGateway(
        binary=config.gh.binary,
        api_version=config.gh.api_version,
        include_read=args.all or config.gh.all,
    )
    try:
        notifications = gateway.fetch_notifications()
    except GatewayError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(json.dumps([_record_to_json(n) for n in notifications]))
        return

    if not notifications:
        print("No notifications found")
        return

    for n in notifications:
        print(f"[{n.id}] {n.formatted_date} | {n.repository} | {n.type_label} | {n.title}")


def cmd_config_init(args: argparse.Namespace) -> None:
    """Initialize config file with defaults."""
    config_path = ensure_config_exists()
    print(f"Config file at: {config_path}")


def cmd_config_path(args: argparse.Namespace) -> None:
    """Print config file path."""
    print(get_config_path())


def cmd_config_show(args: argparse.Namespace) -> None:
    """Show current config."""
    config_path = get_config_path()
    if config_path.exists():
        print(config_path.read_text())
    else:
        print(f"No config file at {config_path}")
        print("Run 'ghinbox config init' to create one.")


def setup_config_parser(subparsers: argparse._SubParsersAction) -> None:
    """Set up the config subcommand."""
    config_parser = subparsers.add_parser(
        "config",
        help="Manage ghinbox configuration",
    )
    config_subparsers = config_parser.add_subparsers(dest="config_command")

    # config init
    init_parser = config_subparsers.add_parser("init", help="Create default config file")
    init_parser.set_defaults(func=cmd_config_init)

    # config path
    path_parser = config_subparsers.add_parser("path", help="Print config file path")
    path_parser.set_defaults(func=cmd_config_path)

    # config show
    show_parser = config_subparsers.add_parser("show", help="Show current config")
    show_parser.set_defaults(func=cmd_config_show)

    config_parser.set_defaults(func=cmd_config_show, config_command=None)


def setup_list_parser(subparsers: argparse._SubParsersAction) -> None:
    """Set up the list subcommand."""
    list_parser = subparsers.add_parser("list", aliases=["ls"], help="List notifications")
    list_parser.add_argument("--json", action="store_true", help="Output as JSON")
    list_parser.add_argument("--all", action="store_true", help="Include read notifications")
    list_parser.set_defaults(func=cmd_list)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ghinbox",
        description="Triage GitHub notifications from the terminal",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command")

    setup_list_parser(subparsers)
    setup_config_parser(subparsers)

    return parser


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()

    # Default for bare "ghinbox" is the TUI
    func = getattr(args, "func", cmd_tui)
    func(args)


if __name__ == "__main__":
    main()
