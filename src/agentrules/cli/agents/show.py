"""
agentrules agents show command.

SUMMARY: Show an agent descriptor
"""

from __future__ import annotations

import argparse

from agentrules.cli import OutputFormatter, add_standard_flags, load_context
from agentrules.core.exceptions import AgentNotFoundError, AgentRulesError

SUMMARY = "Show an agent descriptor"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument("name", help="Agent name")
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        agent = load_context(args).registry.find_by_name(args.name)
    except AgentNotFoundError as e:
        formatter.error(e, error_code="not_found")
        return 1
    except AgentRulesError as e:
        formatter.error(e, error_code="agents_error")
        return 1

    if formatter.json_mode:
        formatter.json_output(agent.to_dict(include_instructions=True))
        return 0

    formatter.text(agent.name)
    formatter.text_kv("description", agent.description)
    if agent.tools:
        formatter.text_kv("tools", ", ".join(sorted(agent.tools)))
    if agent.model:
        formatter.text_kv("model", agent.model)
    if agent.source:
        formatter.text_kv("source", agent.source)
    if agent.instructions:
        formatter.text("")
        formatter.text(agent.instructions)
    return 0
