"""Split agent descriptor files into a YAML header and a markdown body.

A descriptor opens with a ``---`` line, carries YAML header fields, and
closes the header with another ``---`` line::

    ---
    name: tdd-guide
    description: Test-driven development specialist.
    tools: Read, Write, Bash
    model: sonnet
    ---

    You are a TDD specialist...
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict

import yaml

FRONTMATTER_PATTERN = re.compile(r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)", re.DOTALL)

_BOM = "\ufeff"


@dataclass(frozen=True)
class ParsedDocument:
    frontmatter: Dict[str, Any] = field(default_factory=dict)
    content: str = ""
    raw_frontmatter: str = ""


def parse_frontmatter(text: str) -> ParsedDocument:
    """Return the header mapping and the body of ``text``.

    Text without a header comes back unchanged as the body with an empty
    mapping.

    Raises:
        ValueError: If the header is not valid YAML or not a mapping
    """
    text = text[len(_BOM):] if text.startswith(_BOM) else text
    match = FRONTMATTER_PATTERN.match(text)
    if match is None:
        return ParsedDocument(content=text)

    raw = match.group(1)
    try:
        header = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in frontmatter: {exc}") from exc
    if header is None:
        header = {}
    elif not isinstance(header, dict):
        raise ValueError(f"Frontmatter must be a YAML mapping, got {type(header).__name__}")
    return ParsedDocument(frontmatter=header, content=text[match.end():], raw_frontmatter=raw)


__all__ = ["FRONTMATTER_PATTERN", "ParsedDocument", "parse_frontmatter"]
