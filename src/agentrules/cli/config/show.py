"""
agentrules config show command.

SUMMARY: Show current configuration

Displays the merged configuration from bundled defaults, project overrides,
and environment variables.
"""

from __future__ import annotations

import argparse

from agentrules.cli import OutputFormatter, add_standard_flags, get_repo_root
from agentrules.core.config import ConfigManager
from agentrules.core.config.manager import MISSING
from agentrules.core.utils.io import dump_yaml_string
from agentrules.core.exceptions import AgentRulesError

SUMMARY = "Show current configuration"


def _nest_key(key: str, value):
    """Nest a dot-notation key into a YAML/JSON-friendly mapping."""
    parts = [p for p in str(key).split(".") if p]
    out = value
    for part in reversed(parts):
        out = {part: out}
    return out


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "--section",
        "-s",
        help="Only show this section or dot-notation key (e.g., 'resolver.topics')",
    )
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    """Show configuration - delegates to ConfigManager."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        config_manager = ConfigManager(get_repo_root(args))
        config_data = config_manager.load_config(validate=False)
    except AgentRulesError as e:
        formatter.error(e, error_code="config_show_error")
        return 1

    if args.section:
        value = config_manager.get(args.section, MISSING, config=config_data)
        if value is MISSING:
            formatter.error(KeyError(args.section), f"Key not found: {args.section}", error_code="not_found")
            return 1
        config_data = _nest_key(args.section, value)

    if formatter.json_mode:
        formatter.json_output(config_data)
    else:
        formatter.text(
            dump_yaml_string(config_data, sort_keys=True).rstrip()
        )
    return 0
