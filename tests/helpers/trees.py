"""Builders for on-disk rules and agents trees."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Mapping, Optional


def write_rules(
    root: Path,
    global_rules: Optional[Mapping[str, str]] = None,
    language_rules: Optional[Mapping[str, Mapping[str, str]]] = None,
    *,
    ext: str = ".md",
) -> Path:
    """Create ``root/<topic><ext>`` and ``root/languages/<lang>/<topic><ext>`` files."""
    root.mkdir(parents=True, exist_ok=True)
    for topic, content in (global_rules or {}).items():
        (root / f"{topic}{ext}").write_text(content, encoding="utf-8")
    for language, topics in (language_rules or {}).items():
        lang_dir = root / "languages" / language
        lang_dir.mkdir(parents=True, exist_ok=True)
        for topic, content in topics.items():
            (lang_dir / f"{topic}{ext}").write_text(content, encoding="utf-8")
    return root


def agent_text(
    name: Optional[str],
    description: Optional[str],
    *,
    tools: Optional[Iterable[str]] = None,
    model: Optional[str] = None,
    body: str = "",
) -> str:
    lines = ["---"]
    if name is not None:
        lines.append(f"name: {name}")
    if description is not None:
        lines.append(f"description: {description}")
    if tools is not None:
        lines.append(f"tools: {', '.join(tools)}")
    if model is not None:
        lines.append(f"model: {model}")
    lines.append("---")
    lines.append("")
    lines.append(body)
    return "\n".join(lines) + "\n"


def write_agent(
    agents_dir: Path,
    name: str,
    description: str,
    *,
    filename: Optional[str] = None,
    **kwargs,
) -> Path:
    agents_dir.mkdir(parents=True, exist_ok=True)
    path = agents_dir / (filename or f"{name}.md")
    path.write_text(agent_text(name, description, **kwargs), encoding="utf-8")
    return path
