"""Command-line interface for userdesk."""

import argparse
import asyncio
import sys
from typing import Sequence

from api import UsersClient
from constants import ENV_API_URL, ENV_TIMEOUT, USERDESK_VERSION
from errors import RemoteError, SettingsError
from model import UserRecord
from settings import Settings, get_config_dir, resolve_settings
from ui.helpers import format_dob_date


def print_error_box(title: str, *lines: str) -> None:
    """Print a formatted error box to stderr.

    Args:
        title: The error title (will be prefixed with "Error: ")
        *lines: Additional lines to print in the box
    """
    print("=" * 60, file=sys.stderr)
    print(f"Error: {title}", file=sys.stderr)
    print("", file=sys.stderr)
    for line in lines:
        print(line, file=sys.stderr)
    print("=" * 60, file=sys.stderr)


class UserDeskHelpFormatter(argparse.RawDescriptionHelpFormatter):
    """Custom formatter that shows our structured help."""

    def format_help(self) -> str:
        lines = [
            "User Desk - browse, create, edit and delete users of a record store.",
            f"Version: {USERDESK_VERSION}",
            "",
            "Core:",
            "  userdesk                              Launch the TUI",
            "  userdesk --list                       Print all users and exit",
            "",
            "Options:",
            "  userdesk --api-url <url>              Record store base URL",
            "  userdesk --timeout <seconds>          Request timeout",
            "  userdesk --version                    Show version and exit",
            "",
            "Settings (highest precedence first):",
            "  1. Command-line options",
            f"  2. {ENV_API_URL}, {ENV_TIMEOUT}",
            f"  3. {get_config_dir() / 'settings.json'}",
            "",
            "Examples:",
            "",
            "  # Browse users on a local server",
            "  userdesk --api-url http://localhost:8000",
            "",
            "  # Dump the list from a slow server",
            "  userdesk --timeout 30 --list",
        ]
        return "\n".join(lines) + "\n"


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for userdesk CLI."""
    parser = argparse.ArgumentParser(
        prog="userdesk",
        formatter_class=UserDeskHelpFormatter,
        add_help=True,
    )
    parser.add_argument("--api-url", metavar="URL", help=argparse.SUPPRESS)
    parser.add_argument("--timeout", metavar="SECONDS", type=float, help=argparse.SUPPRESS)
    parser.add_argument("--list", action="store_true", help=argparse.SUPPRESS)
    parser.add_argument(
        "--version", action="version", version=f"userdesk {USERDESK_VERSION}", help=argparse.SUPPRESS
    )
    return parser


def format_users(records: Sequence[UserRecord]) -> str:
    """Render users as a plain-text table."""
    header = ("Student ID", "First Name", "Last Name", "Gender", "DOB")
    rows = [
        (str(r.id), r.first_name, r.last_name, r.gender.value, format_dob_date(r))
        for r in records
    ]
    widths = [max(len(row[i]) for row in [header, *rows]) for i in range(len(header))]
    lines = ["  ".join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip()
             for row in [header, *rows]]
    if not rows:
        lines.append("(no users)")
    return "\n".join(lines)


async def fetch_users(settings: Settings) -> list[UserRecord]:
    async with UsersClient(settings.api_url, settings.timeout) as client:
        return await client.list_users()


def list_users(settings: Settings) -> int:
    """Print the user list. Returns the process exit code."""
    try:
        records = asyncio.run(fetch_users(settings))
    except RemoteError as e:
        print_error_box(f"Could not fetch users from {settings.api_url}", e.detail)
        return 1
    print(format_users(records))
    return 0


def main(argv: Sequence[str] | None = None) -> None:
    """Main entry point."""
    args = create_parser().parse_args(argv)

    try:
        settings = resolve_settings(api_url=args.api_url, timeout=args.timeout)
    except SettingsError as e:
        print_error_box("Invalid settings", str(e))
        sys.exit(1)

    if args.list:
        sys.exit(list_users(settings))

    from app import UserDeskTUI

    app = UserDeskTUI(UsersClient(settings.api_url, settings.timeout), version=USERDESK_VERSION)
    app.run()


if __name__ == "__main__":
    main()
