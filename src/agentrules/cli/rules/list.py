"""
agentrules rules list command.

SUMMARY: List rule documents
"""

from __future__ import annotations

import argparse

from agentrules.cli import OutputFormatter, add_language_arg, add_standard_flags, load_context
from agentrules.core.exceptions import AgentRulesError
from agentrules.core.rules import normalize_language

SUMMARY = "List rule documents"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_language_arg(parser, help_text="Only list global rules and this language's rules")
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        repository = load_context(args).repository
    except AgentRulesError as e:
        formatter.error(e, error_code="rules_error")
        return 1

    language = normalize_language(args.language)
    docs = [
        d for d in repository.documents()
        if language is None or d.language in (None, language)
    ]

    if formatter.json_mode:
        formatter.json_output({
            "root": str(repository.root) if repository.root else None,
            "languages": repository.languages(),
            "rules": [d.to_dict(include_content=False) for d in docs],
        })
        return 0

    if not docs:
        formatter.text("No rules found.")
        return 0
    for doc in docs:
        formatter.text(f"{doc.topic:<24} {doc.language or 'global':<12} {doc.source or ''}".rstrip())
    return 0
