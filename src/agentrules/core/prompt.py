"""Assemble an agent prompt from a resolved rule set."""
from __future__ import annotations

from typing import Optional

from agentrules.core.resolver.models import ResolvedRuleSet
from agentrules.core.utils.text import render_template_text

DEFAULT_TEMPLATE = "prompt.md.j2"


def load_default_template() -> str:
    from agentrules.data import read_text

    return read_text("templates", DEFAULT_TEMPLATE)


def assemble_prompt(resolved: ResolvedRuleSet, *, template: Optional[str] = None) -> str:
    """Render the selected agent's instructions followed by each rule.

    Rules appear in the order of ``resolved.applicable_rules``; their content
    is inserted as-is. Without a selected agent the prompt starts with a
    generic header.

    Args:
        resolved: Output of ``Resolver.resolve``
        template: Jinja2 template text; defaults to the bundled prompt template
    """
    text = template if template is not None else load_default_template()
    return render_template_text(
        text,
        {
            "agent": resolved.selected_agent,
            "rules": list(resolved.applicable_rules),
            "signal": resolved.signal,
            "omitted_topics": list(resolved.omitted_topics),
        },
    )


__all__ = ["assemble_prompt", "load_default_template", "DEFAULT_TEMPLATE"]
