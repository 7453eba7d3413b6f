#!/usr/bin/env python3
"""CLI entry point for Postman sync."""

import argparse
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.prompt import Prompt

from .core.auth import PostmanAuth
from .core.client import PostmanAPIError, PostmanClient
from .core.operations import LocalDocumentError, SyncOperations, SyncResult
from .core.remote import RemoteFetcher, RemoteFetchError
from .models.config import (
    DEFAULT_PROJECT_CONFIG,
    DEFAULT_USER_CONFIG,
    ConfigError,
    ConfigProvider,
    ExitCode,
    SyncTarget,
)

console = Console()
err_console = Console(stderr=True)


def _user_config_path(args: argparse.Namespace) -> Path:
    if args.user_config:
        return Path(args.user_config)
    return Path(os.getenv("POSTSYNC_USER_CONFIG", str(DEFAULT_USER_CONFIG)))


def _project_config_path(args: argparse.Namespace) -> Path:
    return Path(args.project_config) if args.project_config else DEFAULT_PROJECT_CONFIG


def build_client(config: ConfigProvider) -> PostmanClient:
    """Create an API client from the environment or the user config.

    Raises:
        ConfigError: If no API key is available
    """
    load_dotenv()
    api_key = os.getenv("POSTMAN_API_KEY") or config.get_user("api_key")
    if not api_key:
        raise ConfigError("api_key", ExitCode.NO_API_KEY)

    auth = PostmanAuth(api_key=api_key, base_url=config.get_user("base_url") or None)
    return PostmanClient(auth)


def build_operations(args: argparse.Namespace) -> SyncOperations:
    """Load configuration and wire up the sync operations."""
    config = ConfigProvider.load(_user_config_path(args), _project_config_path(args))
    target = SyncTarget.from_config(config)
    return SyncOperations(target, client=build_client(config))


def _print_results(results: list[SyncResult]) -> None:
    if not results:
        console.print("[yellow]No collection or environment configured, nothing to do.")
        return

    for result in results:
        label = f"{result.kind} '{result.name}'"
        if result.skipped:
            console.print(f"[yellow]{label}: {result.message}")
        elif result.dry_run:
            console.print(f"[cyan]{label}: {result.message}")
        else:
            console.print(f"[green]{label}: {result.message}")


def cmd_save(args: argparse.Namespace) -> int:
    """Download configured resources to local files."""
    ops = build_operations(args)
    console.print("Saving from Postman...", style="blue")
    _print_results(ops.save(dry_run=args.dry_run))
    return ExitCode.OK


def cmd_load(args: argparse.Namespace) -> int:
    """Upload local files to Postman."""
    ops = build_operations(args)
    console.print("Loading into Postman...", style="blue")
    _print_results(ops.load(dry_run=args.dry_run))
    return ExitCode.OK


def cmd_load_remote(args: argparse.Namespace) -> int:
    """Fetch files from the remote repository and upload them to Postman."""
    ops = build_operations(args)
    fetcher = RemoteFetcher(ops)
    console.print(f"Loading from {ops.target.remote_repo or 'remote repository'}...", style="blue")
    _print_results(fetcher.load_remote(dry_run=args.dry_run))
    return ExitCode.OK


def cmd_init(args: argparse.Namespace) -> int:
    """Write the user and project config files from prompts."""
    user_path = _user_config_path(args)
    project_path = _project_config_path(args)

    if not user_path.exists():
        console.print(f"[bold]Creating user config:[/bold] {user_path}")
        api_key = Prompt.ask("Postman API key", password=True)
        ConfigProvider.save_yaml(user_path, {"api_key": api_key})
    else:
        console.print(f"[dim]User config exists: {user_path}")

    if project_path.exists():
        console.print(f"[yellow]Project config already exists: {project_path}")
        return ExitCode.OK

    console.print(f"[bold]Creating project config:[/bold] {project_path}")
    collection_name = Prompt.ask("Collection name (empty to skip)", default="")
    environment_name = Prompt.ask("Environment name (empty to skip)", default="")

    data = {"collection_name": collection_name}
    if collection_name:
        data["collection_path"] = Prompt.ask("Collection file", default="postman_collection.json")
    data["environment_name"] = environment_name
    if environment_name:
        data["environment_path"] = Prompt.ask("Environment file", default="postman_environment.json")
    data["remote_repo"] = Prompt.ask("Remote git repository (empty to skip)", default="")

    ConfigProvider.save_yaml(project_path, data)
    console.print("[green]Configuration written.")
    return ExitCode.OK


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


def main() -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="postsync",
        description="Sync a Postman collection and environment with local files",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging")
    parser.add_argument("--project-config", help=f"Project config file (default: {DEFAULT_PROJECT_CONFIG})")
    parser.add_argument("--user-config", help=f"User config file (default: {DEFAULT_USER_CONFIG})")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    save_parser = subparsers.add_parser("save", help="Save collection/environment from Postman")
    save_parser.add_argument("--dry-run", action="store_true", help="Show what would happen")

    load_parser = subparsers.add_parser("load", help="Load local files into Postman")
    load_parser.add_argument("--dry-run", action="store_true", help="Show what would happen")

    remote_parser = subparsers.add_parser("load-remote", help="Load files from the remote repository into Postman")
    remote_parser.add_argument("--dry-run", action="store_true", help="Show what would happen")

    subparsers.add_parser("init", help="Create config files")

    args = parser.parse_args()
    _configure_logging(args.verbose)

    commands = {
        "save": cmd_save,
        "load": cmd_load,
        "load-remote": cmd_load_remote,
        "init": cmd_init,
    }
    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return ExitCode.USAGE

    try:
        return handler(args)
    except ConfigError as e:
        err_console.print(f"[red]Configuration error: {e}")
        return e.exit_code
    except PostmanAPIError as e:
        err_console.print(f"[red]Postman API error: {e}")
    except LocalDocumentError as e:
        err_console.print(f"[red]{e}")
    except RemoteFetchError as e:
        err_console.print(f"[red]Remote fetch failed: {e}")
    return ExitCode.FAILURE


if __name__ == "__main__":
    sys.exit(main())
