from __future__ import annotations

from typing import Any, Dict, Mapping


class AgentRulesError(Exception):
    """Base exception for agentrules."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class BuildError(AgentRulesError):
    """Raised while building an index; fatal to startup."""


class RepositoryLoadError(BuildError):
    """Raised when a rules or agents directory is missing, unreadable or malformed."""


class DuplicateRuleError(BuildError):
    """Raised when two files map to the same (topic, language-or-global) key."""

    def __init__(
        self,
        message: str,
        *,
        topic: str,
        language: str | None = None,
        sources: tuple[str, ...] = (),
    ) -> None:
        super().__init__(
            message,
            context={"topic": topic, "language": language, "sources": list(sources)},
        )
        self.topic = topic
        self.language = language
        self.sources = sources


class MalformedAgentError(BuildError):
    """Raised when an agent descriptor lacks required fields or cannot be parsed."""


class DuplicateAgentError(BuildError):
    """Raised when two agent descriptors share the same name."""

    def __init__(self, message: str, *, name: str, sources: tuple[str, ...] = ()) -> None:
        super().__init__(message, context={"name": name, "sources": list(sources)})
        self.name = name
        self.sources = sources


class ConfigValidationError(BuildError, ValueError):
    """Raised when configuration is invalid."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        BuildError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class AgentNotFoundError(AgentRulesError, LookupError):
    """Raised when a name lookup finds no agent."""

    def __init__(self, name: str) -> None:
        AgentRulesError.__init__(self, f"Agent '{name}' not found", context={"name": name})
        LookupError.__init__(self, f"Agent '{name}' not found")
        self.name = name


__all__ = [
    "AgentRulesError",
    "BuildError",
    "RepositoryLoadError",
    "DuplicateRuleError",
    "MalformedAgentError",
    "DuplicateAgentError",
    "ConfigValidationError",
    "AgentNotFoundError",
]
