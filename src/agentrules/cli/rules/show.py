"""
agentrules rules show command.

SUMMARY: Show the rule document used for a topic

With --language, the language-specific document is shown when present,
falling back to the global one (the same choice resolution makes).
"""

from __future__ import annotations

import argparse

from agentrules.cli import OutputFormatter, add_language_arg, add_standard_flags, load_context
from agentrules.core.exceptions import AgentRulesError

SUMMARY = "Show the rule document used for a topic"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument("topic", help="Rule topic (e.g., coding-style)")
    add_language_arg(parser)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        repository = load_context(args).repository
    except AgentRulesError as e:
        formatter.error(e, error_code="rules_error")
        return 1

    matches = repository.resolve(args.language, [args.topic])
    if not matches:
        where = f" (language: {args.language})" if args.language else ""
        formatter.error(LookupError(f"No rule for topic '{args.topic}'{where}"), error_code="not_found")
        return 1

    doc = matches[0]
    if formatter.json_mode:
        formatter.json_output(doc.to_dict(include_content=True))
    else:
        formatter.text(doc.content.rstrip("\n"))
    return 0
