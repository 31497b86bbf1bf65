"""
Data models for the rules index.

- RuleScope: global vs language-specific
- RuleDocument: one unit of guidance text keyed by (topic, language-or-global)
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Tuple


class RuleScope(str, Enum):
    """Scope of a rule document."""

    GLOBAL = "global"
    LANGUAGE = "language"


RuleKey = Tuple[str, Optional[str]]


def normalize_language(language: Optional[str]) -> Optional[str]:
    """Lowercase and strip a language tag; blank tags mean "no language"."""
    if language is None:
        return None
    tag = str(language).strip().lower()
    return tag or None


@dataclass(frozen=True)
class RuleDocument:
    """A single rule document.

    Attributes:
        topic: Category tag, joined against the same topic at other scopes
        scope: GLOBAL or LANGUAGE
        language: Language tag; set iff scope is LANGUAGE
        content: Opaque text payload, passed through verbatim
        source: File the document was read from, when loaded from disk
    """

    topic: str
    scope: RuleScope
    content: str
    language: Optional[str] = None
    source: Optional[Path] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not self.topic or not self.topic.strip():
            raise ValueError("Rule document topic must be non-empty")
        object.__setattr__(self, "scope", RuleScope(self.scope))
        if self.scope is RuleScope.LANGUAGE and not self.language:
            raise ValueError(f"Rule {self.topic}: language-specific rules require a language")
        if self.scope is RuleScope.GLOBAL and self.language is not None:
            raise ValueError(f"Rule {self.topic}: global rules must not carry a language")
        if self.language is not None:
            object.__setattr__(self, "language", normalize_language(self.language))

    @classmethod
    def global_rule(cls, topic: str, content: str, *, source: Optional[Path] = None) -> "RuleDocument":
        return cls(topic=topic, scope=RuleScope.GLOBAL, content=content, source=source)

    @classmethod
    def language_rule(
        cls, topic: str, language: str, content: str, *, source: Optional[Path] = None
    ) -> "RuleDocument":
        return cls(topic=topic, scope=RuleScope.LANGUAGE, language=language, content=content, source=source)

    @property
    def key(self) -> RuleKey:
        return (self.topic, self.language)

    @property
    def precedence(self) -> int:
        """Language-specific documents override global ones of the same topic."""
        return 1 if self.scope is RuleScope.LANGUAGE else 0

    def to_dict(self, *, include_content: bool = True) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "topic": self.topic,
            "scope": self.scope.value,
            "language": self.language,
            "source": str(self.source) if self.source else None,
        }
        if include_content:
            data["content"] = self.content
        return data


__all__ = [
    "RuleScope",
    "RuleKey",
    "RuleDocument",
    "normalize_language",
]
