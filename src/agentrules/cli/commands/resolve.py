"""
agentrules resolve command.

SUMMARY: Resolve applicable rules and the best agent for a task

Merges global and language-specific rules for the task category's topics
and ranks agents by category keywords. With --prompt, also renders the
assembled prompt.
"""

from __future__ import annotations

import argparse

from agentrules.cli import OutputFormatter, add_standard_flags, load_context
from agentrules.core.exceptions import AgentRulesError
from agentrules.core.prompt import assemble_prompt
from agentrules.core.resolver import TaskCategory, TaskSignal, parse_task_category

SUMMARY = "Resolve applicable rules and the best agent for a task"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "category",
        help=f"Task category ({', '.join(c.value for c in TaskCategory)})",
    )
    lang = parser.add_mutually_exclusive_group()
    lang.add_argument("--language", "-l", help="Language tag (e.g., rust)")
    lang.add_argument(
        "--detect",
        action="store_true",
        help="Detect the language from manifest files in the repository root",
    )
    parser.add_argument(
        "--prompt",
        action="store_true",
        help="Render the assembled agent prompt",
    )
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    """Resolve rules for a task - delegates to ResolverContext."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        category = parse_task_category(args.category)
    except ValueError as e:
        formatter.error(e, error_code="invalid_category")
        return 2

    try:
        ctx = load_context(args)
        language = ctx.detect_language() if args.detect else args.language
        result = ctx.resolve_signal(TaskSignal(category, language))
        prompt = assemble_prompt(result) if args.prompt else None
    except AgentRulesError as e:
        formatter.error(e, error_code="resolve_error")
        return 1

    if formatter.json_mode:
        payload = result.to_dict()
        if prompt is not None:
            payload["prompt"] = prompt
        formatter.json_output(payload)
        return 0

    if prompt is not None:
        formatter.text(prompt.rstrip("\n"))
        return 0

    signal = result.signal
    formatter.text(f"Task: {signal.task_category.value} (language: {signal.detected_language or 'none'})")
    if result.selected_agent is not None:
        best = result.candidates[0]
        formatter.text(
            f"Agent: {best.agent.name} (score {best.score}: {', '.join(best.matched_keywords)})"
        )
    else:
        formatter.text("Agent: none")
    formatter.text("Rules:")
    if not result.applicable_rules:
        formatter.text("  (none)")
    for doc in result.applicable_rules:
        formatter.text(f"  - {doc.topic} [{doc.language or 'global'}] {doc.source or ''}".rstrip())
    if result.omitted_topics:
        formatter.text(f"Omitted topics: {', '.join(result.omitted_topics)}")
    return 0
