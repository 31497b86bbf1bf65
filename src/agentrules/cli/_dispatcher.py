"""
Auto-discovery CLI dispatcher for agentrules.

Scans subfolders for commands and automatically registers them.
Adding new commands = just add a .py file to the appropriate subfolder.

- cli/commands/<name>.py  => `agentrules <name>`
- cli/<domain>/<name>.py  => `agentrules <domain> <name>`

Each command module exposes SUMMARY, register_args(parser) and main(args) -> int.
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from collections.abc import Callable
from functools import lru_cache
from pathlib import Path
from typing import Any

from agentrules.core.exceptions import AgentRulesError

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def discover_domains() -> dict[str, Path]:
    """
    Discover all CLI domain subfolders (rules, agents, config).

    Returns:
        Dict mapping domain name to directory path
    """
    cli_dir = Path(__file__).parent
    domains = {}
    for item in cli_dir.iterdir():
        if item.name == "commands":
            continue
        if item.is_dir() and not item.name.startswith("_"):
            # Must have at least one non-init .py file
            has_commands = any(
                f.suffix == ".py" and not f.name.startswith("_")
                for f in item.iterdir()
            )
            if has_commands:
                domains[item.name] = item
    return domains


def _import_commands(directory: Path, package: str) -> dict[str, dict[str, Any]]:
    commands: dict[str, dict[str, Any]] = {}
    if not directory.exists():
        return commands

    for item in sorted(directory.glob("*.py")):
        if item.name.startswith("_"):
            continue
        cmd_name = item.stem
        module = importlib.import_module(f"{package}.{cmd_name}")
        commands[cmd_name] = {
            "module": module,
            "summary": getattr(module, "SUMMARY", cmd_name),
            "register_args": getattr(module, "register_args", None),
            "main": getattr(module, "main", None),
        }
    return commands


@lru_cache(maxsize=1)
def discover_root_commands() -> dict[str, dict[str, Any]]:
    """Discover top-level commands under cli/commands (no domain prefix)."""
    return _import_commands(Path(__file__).parent / "commands", "agentrules.cli.commands")


@lru_cache(maxsize=32)
def discover_commands(domain: str) -> dict[str, dict[str, Any]]:
    """
    Discover all commands in a domain subfolder.

    Args:
        domain: Name of the domain (e.g., "rules", "agents")

    Returns:
        Dict mapping command name to command info dict
    """
    return _import_commands(Path(__file__).parent / domain, f"agentrules.cli.{domain}")


def _register_command(
    subparsers: argparse._SubParsersAction,
    cmd_name: str,
    cmd_info: dict[str, Any],
) -> None:
    primary_name = cmd_name.replace("_", "-")
    aliases = [cmd_name] if primary_name != cmd_name else []
    cmd_parser = subparsers.add_parser(
        primary_name,
        aliases=aliases,
        help=cmd_info["summary"],
    )
    # Let module register its own arguments
    if cmd_info["register_args"]:
        cmd_info["register_args"](cmd_parser)
    # Set the main function as default handler
    if cmd_info["main"]:
        cmd_parser.set_defaults(_func=cmd_info["main"])


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argument parser with auto-discovered domains and commands.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="agentrules",
        description="agentrules - resolve coding rules and agent personas for a task",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(
        dest="domain",
        title="domains",
        description="Available command domains",
        metavar="<domain>",
    )

    # Register top-level commands (no domain prefix)
    for cmd_name, cmd_info in sorted(discover_root_commands().items()):
        _register_command(subparsers, cmd_name, cmd_info)

    # Auto-register domains
    for domain_name in sorted(discover_domains().keys()):
        domain_commands = discover_commands(domain_name)
        if not domain_commands:
            continue

        domain_parser = subparsers.add_parser(
            domain_name,
            help=f"{domain_name.title()} commands",
        )
        cmd_subparsers = domain_parser.add_subparsers(
            dest="command",
            title="commands",
            description=f"Available {domain_name} commands",
            metavar="<command>",
        )
        for cmd_name, cmd_info in sorted(domain_commands.items()):
            _register_command(cmd_subparsers, cmd_name, cmd_info)

    return parser


def _get_version() -> str:
    from agentrules import __version__

    return __version__


def _configure_logging(args: argparse.Namespace, *, json_mode: bool) -> None:
    """Install the file handler when ``logging.file`` is configured.

    Config errors are left for the command itself to report.
    """
    from agentrules.cli._utils import get_repo_root
    from agentrules.core.config.domains import LoggingConfig
    from agentrules.core.stdlib_logging import (
        configure_stdlib_logging,
        suppress_lastresort_in_json_mode,
    )

    try:
        cfg = LoggingConfig(repo_root=get_repo_root(args))
        log_file = cfg.file
        level = cfg.level
    except AgentRulesError as exc:
        logger.debug("Skipping logging setup: %s", exc)
        log_file = None
        level = "INFO"

    if log_file is not None:
        configure_stdlib_logging(log_path=log_file, level=level)
    if json_mode:
        suppress_lastresort_in_json_mode()


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for agentrules CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(list(argv))

    if not args.domain:
        parser.print_help()
        return 0

    func: Callable[[argparse.Namespace], int] | None = getattr(args, "_func", None)
    if func is None:
        # Domain given without a command
        domain_parser = parser._subparsers._group_actions[0].choices.get(args.domain)
        if domain_parser:
            domain_parser.print_help()
        return 0

    _configure_logging(args, json_mode=bool(getattr(args, "json", False)))

    try:
        return int(func(args))
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 130
    except AgentRulesError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
