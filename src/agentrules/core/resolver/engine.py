"""
Resolver: task signal -> applicable rules + best agent.

Resolution is a pure function of (signal, repository, registry, policy) over
immutable inputs. It never raises for a well-formed signal, holds no state
between calls and is safe to call from any number of threads at once. A
missing topic or an unmatched category is a normal outcome, not an error.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

from agentrules.core.registries.agents import AgentDescriptor, AgentRegistry
from agentrules.core.rules.repository import RuleRepository

from .models import AgentMatch, ResolvedRuleSet, TaskCategory, TaskSignal
from .policy import ResolutionPolicy

logger = logging.getLogger(__name__)


def rank_agents(
    agents: Iterable[AgentDescriptor],
    category: TaskCategory,
    policy: ResolutionPolicy,
) -> Tuple[AgentMatch, ...]:
    """Rank agents whose description matches at least one category keyword.

    Order: most distinct keywords matched first, then agent name (code point
    order), so the result never depends on discovery order.
    """
    matches: List[AgentMatch] = []
    for agent in agents:
        matched = policy.matched_keywords(agent.description, category)
        if matched:
            matches.append(AgentMatch(agent=agent, score=len(matched), matched_keywords=matched))
    matches.sort(key=lambda m: (-m.score, m.agent.name))
    return tuple(matches)


class Resolver:
    """Merge global and language rules and pick the best agent for a task.

    Example:
        resolver = Resolver(repository, registry, ResolutionPolicy.default())
        result = resolver.resolve(TaskSignal(TaskCategory.TESTING, "rust"))
        result.selected_agent  # AgentDescriptor or None
    """

    def __init__(
        self,
        repository: RuleRepository,
        registry: AgentRegistry,
        policy: Optional[ResolutionPolicy] = None,
    ) -> None:
        self.repository = repository
        self.registry = registry
        self.policy = policy or ResolutionPolicy.default()

    def required_topics(self, category: TaskCategory) -> Tuple[str, ...]:
        return self.policy.topics_for(category)

    def rank_agents(self, category: TaskCategory) -> Tuple[AgentMatch, ...]:
        return rank_agents(self.registry.get_all(), category, self.policy)

    def select_agent(self, category: TaskCategory) -> Optional[AgentDescriptor]:
        ranked = self.rank_agents(category)
        return ranked[0].agent if ranked else None

    def resolve(self, signal: TaskSignal) -> ResolvedRuleSet:
        topics = self.required_topics(signal.task_category)
        rules = self.repository.resolve(signal.detected_language, topics)
        candidates = self.rank_agents(signal.task_category)
        selected = candidates[0].agent if candidates else None

        logger.debug(
            "Resolved %s (language=%s): %d/%d topics, agent=%s",
            signal.task_category.value,
            signal.detected_language or "-",
            len(rules),
            len(topics),
            selected.name if selected else "-",
        )
        return ResolvedRuleSet(
            signal=signal,
            topics=topics,
            applicable_rules=rules,
            selected_agent=selected,
            candidates=candidates,
        )


__all__ = ["Resolver", "rank_agents"]
