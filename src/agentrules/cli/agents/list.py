"""
agentrules agents list command.

SUMMARY: List agent descriptors
"""

from __future__ import annotations

import argparse

from agentrules.cli import OutputFormatter, add_standard_flags, load_context
from agentrules.core.exceptions import AgentRulesError

SUMMARY = "List agent descriptors"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        registry = load_context(args).registry
    except AgentRulesError as e:
        formatter.error(e, error_code="agents_error")
        return 1

    agents = registry.get_all()
    if formatter.json_mode:
        formatter.json_output({"agents": [a.to_dict() for a in agents]})
        return 0

    if not agents:
        formatter.text("No agents found.")
        return 0
    for agent in agents:
        formatter.text(f"{agent.name}: {agent.description}")
    return 0
