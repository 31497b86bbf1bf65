"""
Resolution of rules and agents for a task.

- models.py: TaskCategory, TaskSignal, AgentMatch, ResolvedRuleSet
- policy.py: ResolutionPolicy (category -> topics / keywords tables)
- engine.py: Resolver and agent ranking
"""
from __future__ import annotations

from .engine import Resolver, rank_agents
from .models import (
    AgentMatch,
    ResolvedRuleSet,
    TaskCategory,
    TaskSignal,
    parse_task_category,
)
from .policy import ResolutionPolicy

__all__ = [
    "AgentMatch",
    "ResolvedRuleSet",
    "ResolutionPolicy",
    "Resolver",
    "TaskCategory",
    "TaskSignal",
    "parse_task_category",
    "rank_agents",
]
