import argparse
import sys
from rich.console import Console
from rich.markup import escape
from rich.traceback import install

from .browser import BrowserHandler
from .config import Settings, load_settings
from .errors import BrowserError, print_error
from .platforms import LaunchMode, Platform
from .utils import check_for_updates


install(show_locals=True)
console = Console()
error_console = Console(stderr=True)


def parse_query_args(query_args: list[str] | None) -> list[tuple[str, str]]:
    """Parse query parameter arguments from the CLI into (key, value) pairs.

    Args:
        query_args: List of strings in format 'key=value' (e.g., ['q=hello world', 'page=2'])

    Returns:
        Pairs in the order given. Repeated keys are kept so the sanitizer can report them.

    Raises:
        ValueError: If any argument is not in the correct format.
    """
    if not query_args:
        return []

    pairs = []
    for arg in query_args:
        key, sep, value = arg.partition("=")
        if not sep:
            raise ValueError(f"Invalid query parameter format: '{arg}'. Expected format: 'key=value'")
        if not key:
            raise ValueError(f"Invalid query parameter format: '{arg}'. Key must be non-empty.")
        pairs.append((key, value))

    return pairs


def _add_url_args(parser: argparse.ArgumentParser) -> None:
    """Add the URL and query arguments shared by all commands."""
    parser.add_argument("url", type=str, help="The http(s) URL to open (e.g., 'https://www.example.com')")
    parser.add_argument(
        "-p",
        "--param",
        action="append",
        metavar="KEY=VALUE",
        default=None,
        help="Query parameter to append. Repeat the flag for more parameters.",
    )
    parser.add_argument(
        "--shell",
        action="store_true",
        help="Type the open command into a shell instead of running the opener directly.",
    )


def configure_open_parser(open_parser: argparse.ArgumentParser) -> None:
    _add_url_args(open_parser)
    open_parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat a non-zero exit code of the opener as an error instead of a warning.",
    )


def configure_url_parser(url_parser: argparse.ArgumentParser) -> None:
    _add_url_args(url_parser)
    url_parser.add_argument(
        "--platform",
        type=str,
        choices=[p.value for p in Platform],
        default=None,
        help="Sanitize for another platform than the current one.",
    )


def execute_open_command(args: argparse.Namespace, settings: Settings) -> None:
    """Execute the 'browserkit open' command."""
    try:
        query = parse_query_args(args.param)
    except ValueError as e:
        error_console.print(f"[bold red]Error parsing query parameters: {escape(str(e))}[/]")
        sys.exit(1)

    if args.strict:
        settings = settings.model_copy(update={"raise_on_failure": True})
    mode = LaunchMode.SHELL if args.shell else None

    try:
        with BrowserHandler(mode=mode, settings=settings, console=error_console) as handler:
            opened = handler.open_url(args.url, query)
    except BrowserError as e:
        print_error(e, error_console)
        sys.exit(1)

    sys.exit(0 if opened else 1)


def execute_url_command(args: argparse.Namespace, settings: Settings) -> None:
    """Execute the 'browserkit url' command: print the sanitized URL without opening it."""
    try:
        query = parse_query_args(args.param)
    except ValueError as e:
        error_console.print(f"[bold red]Error parsing query parameters: {escape(str(e))}[/]")
        sys.exit(1)

    platform = Platform(args.platform) if args.platform else None
    mode = LaunchMode.SHELL if args.shell else None

    try:
        with BrowserHandler(platform=platform, mode=mode, settings=settings, console=error_console) as handler:
            url = handler.form_url(args.url, query)
    except BrowserError as e:
        print_error(e, error_console)
        sys.exit(1)

    console.print(url, markup=False, highlight=False, soft_wrap=True)
    sys.exit(0)


def main(argv: list[str] | None = None) -> None:
    """Main function for the browserkit CLI."""
    try:
        _main(argv)
    except KeyboardInterrupt:
        # Clean exit on Ctrl+C without traceback
        error_console.print("\n[yellow]Interrupted.[/]")
        sys.exit(130)  # Standard exit code for SIGINT


def _main(argv: list[str] | None = None) -> None:
    """Internal main function containing the CLI logic."""
    parser = argparse.ArgumentParser(
        description="browserkit\nOpen http(s) URLs in your default browser.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    open_parser = subparsers.add_parser("open", help="Open a URL in the default browser", allow_abbrev=False)
    configure_open_parser(open_parser)

    url_parser = subparsers.add_parser("url", help="Print the sanitized URL without opening it", allow_abbrev=False)
    configure_url_parser(url_parser)

    args = parser.parse_args(argv)
    settings = load_settings()

    if args.command and settings.check_updates:
        check_for_updates(error_console)

    if args.command == "open":
        execute_open_command(args, settings)
    elif args.command == "url":
        execute_url_command(args, settings)
    else:
        parser.print_help()
        sys.exit(1)
