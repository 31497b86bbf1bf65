"""Text processing utilities.

- frontmatter: YAML frontmatter parsing for agent descriptor files
- templates: Jinja2 rendering for assembled prompts
"""
from __future__ import annotations

from .frontmatter import (
    FRONTMATTER_PATTERN,
    ParsedDocument,
    parse_frontmatter,
)
from .templates import render_template_text

__all__ = [
    "FRONTMATTER_PATTERN",
    "ParsedDocument",
    "parse_frontmatter",
    "render_template_text",
]
