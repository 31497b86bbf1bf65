"""Resolution inputs and outputs."""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from agentrules.core.registries.agents import AgentDescriptor
from agentrules.core.rules.models import RuleDocument, normalize_language


_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


class TaskCategory(str, Enum):
    WRITING_CODE = "writing-code"
    REVIEWING_CODE = "reviewing-code"
    TESTING = "testing"
    BUILD_ERROR = "build-error"
    SECURITY = "security"
    DOCUMENTATION = "documentation"
    REFACTORING = "refactoring"
    E2E = "e2e"


def parse_task_category(raw: Any) -> TaskCategory:
    """Parse a category from its value, member name or CamelCase name.

    ``writing-code``, ``writing_code``, ``WRITING_CODE`` and ``WritingCode``
    all parse to ``TaskCategory.WRITING_CODE``.
    """
    if isinstance(raw, TaskCategory):
        return raw
    text = str(raw or "").strip()
    candidates = (
        text.lower().replace("_", "-"),
        _CAMEL_BOUNDARY.sub("-", text).lower(),
    )
    for v in candidates:
        for c in TaskCategory:
            if v == c.value:
                return c
    expected = ", ".join(c.value for c in TaskCategory)
    raise ValueError(f"Invalid task category: {raw} (expected one of: {expected})")


@dataclass(frozen=True)
class TaskSignal:
    """Input to a single resolution."""

    task_category: TaskCategory
    detected_language: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "task_category", parse_task_category(self.task_category))
        object.__setattr__(self, "detected_language", normalize_language(self.detected_language))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "task_category": self.task_category.value,
            "detected_language": self.detected_language,
        }


@dataclass(frozen=True)
class AgentMatch:
    """An agent whose description matched at least one category keyword."""

    agent: AgentDescriptor
    score: int
    matched_keywords: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.agent.name,
            "score": self.score,
            "matched_keywords": list(self.matched_keywords),
        }


@dataclass(frozen=True)
class ResolvedRuleSet:
    """Applicable rules (in precedence order) and the selected agent."""

    signal: TaskSignal
    topics: Tuple[str, ...]
    applicable_rules: Tuple[RuleDocument, ...]
    selected_agent: Optional[AgentDescriptor] = None
    candidates: Tuple[AgentMatch, ...] = field(default=())

    @property
    def omitted_topics(self) -> Tuple[str, ...]:
        """Requested topics with no global or language document."""
        present = {doc.topic for doc in self.applicable_rules}
        return tuple(t for t in dict.fromkeys(self.topics) if t not in present)

    def to_dict(self, *, include_content: bool = False) -> Dict[str, Any]:
        return {
            "signal": self.signal.to_dict(),
            "topics": list(self.topics),
            "applicable_rules": [
                doc.to_dict(include_content=include_content) for doc in self.applicable_rules
            ],
            "omitted_topics": list(self.omitted_topics),
            "selected_agent": self.selected_agent.to_dict() if self.selected_agent else None,
            "candidates": [m.to_dict() for m in self.candidates],
        }


__all__ = [
    "TaskCategory",
    "parse_task_category",
    "TaskSignal",
    "AgentMatch",
    "ResolvedRuleSet",
]
