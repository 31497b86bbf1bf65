"""Stable error types for the paths subsystem."""

from __future__ import annotations

from agentrules.core.exceptions import AgentRulesError


class ProjectRootError(AgentRulesError, ValueError):
    """Raised when project root resolution fails."""

    pass


__all__ = ["ProjectRootError"]
