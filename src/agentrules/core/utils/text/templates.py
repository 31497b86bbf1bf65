"""Jinja2 text template rendering."""

from __future__ import annotations

from typing import Any, Dict

from jinja2 import Environment, StrictUndefined


def render_template_text(text: str, context: Dict[str, Any]) -> str:
    """Render ``text`` as a Jinja2 template with ``context``.

    Templates use control blocks on their own lines; block trimming keeps
    those tag-only lines from turning into blank lines.
    """
    env = Environment(
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
        autoescape=False,
    )
    return env.from_string(text).render(**context)


__all__ = ["render_template_text"]
