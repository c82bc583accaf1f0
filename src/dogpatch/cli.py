"""Command-line interface for dogpatch."""

import argparse
import json
import sys
import threading
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .client import DogPatchClient, InvalidBaseURLError
from .dispatch import serial_context
from .http.requests_transport import RequestsTransport
from .logging_config import setup_logging
from .models.config import ClientConfig
from .models.dog import Dog

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NO_DATA = 2

# Extra seconds to wait past the request timeout before giving up on the callback
WAIT_GRACE_SECONDS = 5.0


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="dogpatch",
        description="Fetch the dog listings from a DogPatch API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List dogs as a table
  dogpatch https://example.com/api/v1/

  # Raw JSON output
  dogpatch https://example.com/api/v1/ --json

  # Settings from a YAML file
  dogpatch --config dogpatch.yaml

Exit codes:
  0  dogs received
  1  request or decoding failed
  2  server returned no data (non-success status or empty body)
        """,
    )

    parser.add_argument(
        "base_url",
        nargs="?",
        help="API root URL (e.g. https://example.com/api/v1/)",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="YAML config file",
    )

    network_group = parser.add_argument_group("network settings")
    network_group.add_argument(
        "--timeout",
        "-t",
        type=float,
        default=None,
        help="Request timeout in seconds",
    )
    network_group.add_argument(
        "--user-agent",
        default=None,
        help="Custom User-Agent string",
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print dogs as JSON instead of a table",
    )

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose output",
    )
    verbosity.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Only print results and errors",
    )

    return parser


def build_config(args: argparse.Namespace) -> ClientConfig:
    """Merge the config file (if any) with command-line overrides."""
    data: dict[str, Any] = {}
    if args.config:
        data = ClientConfig.from_yaml_file(args.config).model_dump(exclude_none=True)

    if args.base_url:
        data["base_url"] = args.base_url

    network: dict[str, Any] = dict(data.get("network", {}))
    if args.timeout is not None:
        network["timeout"] = args.timeout
    if args.user_agent:
        network["user_agent"] = args.user_agent
    if network:
        data["network"] = network

    if args.verbose:
        data["log_level"] = "DEBUG"
    elif args.quiet:
        data["log_level"] = "ERROR"

    return ClientConfig.model_validate(data)


def render_dogs(console: Console, dogs: list[Dog]) -> None:
    table = Table(title=f"{len(dogs)} dogs")
    table.add_column("Name", style="bold")
    table.add_column("Breed")
    table.add_column("Birthday")
    table.add_column("Rating", justify="right")
    table.add_column("Cost", justify="right")
    for dog in dogs:
        table.add_row(
            dog.name,
            dog.breed,
            dog.birthday.date().isoformat(),
            f"{dog.breeder_rating:.1f}",
            f"${dog.cost:,.2f}",
        )
    console.print(table)


def run_fetch(args: argparse.Namespace) -> int:
    """Fetch dogs once and print them."""
    console = Console()
    err_console = Console(stderr=True)

    if not args.base_url and not args.config:
        err_console.print("[red]Error:[/red] Please provide a base URL or --config")
        return EXIT_ERROR

    try:
        config = build_config(args)
    except (ValidationError, yaml.YAMLError, OSError) as e:
        err_console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        return EXIT_ERROR

    setup_logging(config.log_level, config.log_file)

    done = threading.Event()
    result: dict[str, Any] = {}

    def on_complete(dogs: Optional[list[Dog]], error: Optional[BaseException]) -> None:
        result["dogs"] = dogs
        result["error"] = error
        done.set()

    with (
        RequestsTransport(
            timeout=config.network.timeout,
            user_agent=config.network.user_agent,
            headers=config.network.headers,
            max_workers=config.network.max_workers,
        ) as transport,
        serial_context("dogpatch-cli") as context,
    ):
        try:
            client = DogPatchClient.from_config(config, transport=transport, response_context=context)
        except InvalidBaseURLError as e:
            err_console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
            return EXIT_ERROR

        if not args.quiet:
            err_console.print(f"[bold blue]dogpatch[/bold blue] v{__version__}")
            err_console.print(f"GET {client.dogs_url}")

        task = client.fetch_dogs(on_complete)
        if not done.wait(config.network.timeout + WAIT_GRACE_SECONDS):
            task.cancel()
            err_console.print(f"[red]Error:[/red] No response from {client.dogs_url}")
            return EXIT_ERROR

    error = result["error"]
    dogs = result["dogs"]
    if error is not None:
        err_console.print(f"[red]Error:[/red] {escape(str(error))}")
        return EXIT_ERROR
    if dogs is None:
        err_console.print("[yellow]No data returned[/yellow]")
        return EXIT_NO_DATA

    if args.json:
        print(json.dumps([dog.model_dump(mode="json", by_alias=True) for dog in dogs], indent=2))
    else:
        render_dogs(console, dogs)
    return EXIT_OK


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    return run_fetch(args)


if __name__ == "__main__":
    sys.exit(main())
