from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from agentrules.core.registries import AgentDescriptor, AgentRegistry
from agentrules.core.resolver import (
    ResolutionPolicy,
    Resolver,
    TaskCategory,
    TaskSignal,
    rank_agents,
)
from agentrules.core.rules import RuleDocument, RuleRepository

pytestmark = pytest.mark.fast


@pytest.fixture
def repository() -> RuleRepository:
    return RuleRepository.from_documents([
        RuleDocument.global_rule("coding-style", "global style"),
        RuleDocument.global_rule("testing", "global testing"),
        RuleDocument.global_rule("security", "global security"),
        RuleDocument.language_rule("coding-style", "rust", "rust style"),
        RuleDocument.language_rule("testing", "rust", "rust testing"),
    ])


@pytest.fixture
def registry() -> AgentRegistry:
    return AgentRegistry.from_descriptors([
        AgentDescriptor(
            "tdd-guide",
            "Test-driven development specialist. Enforces tdd and 80% coverage; write the test first.",
        ),
        AgentDescriptor(
            "security-reviewer",
            "Security specialist. Flags any vulnerability and leaked secret.",
        ),
        AgentDescriptor("planner", "Plans complex features step by step."),
    ])


@pytest.fixture
def resolver(repository: RuleRepository, registry: AgentRegistry) -> Resolver:
    return Resolver(repository, registry, ResolutionPolicy.default())


def _keys(result):
    return [(d.topic, d.language) for d in result.applicable_rules]


class TestScenarios:
    def test_scenario_a_language_override_and_omission(self) -> None:
        repository = RuleRepository.from_documents([
            RuleDocument.global_rule("coding-style", "global style"),
            RuleDocument.global_rule("testing", "global testing"),
            RuleDocument.language_rule("coding-style", "rust", "rust style"),
        ])
        resolver = Resolver(repository, AgentRegistry.empty(), ResolutionPolicy.default())

        rust = resolver.resolve(TaskSignal(TaskCategory.WRITING_CODE, "rust"))
        python = resolver.resolve(TaskSignal(TaskCategory.WRITING_CODE, "python"))

        assert _keys(rust) == [("coding-style", "rust")]
        assert rust.omitted_topics == ("patterns",)
        assert _keys(python) == [("coding-style", None)]
        assert python.omitted_topics == ("patterns",)

    def test_scenario_b_best_keyword_overlap_wins(self, resolver: Resolver) -> None:
        result = resolver.resolve(TaskSignal(TaskCategory.TESTING))

        assert result.selected_agent is not None
        assert result.selected_agent.name == "tdd-guide"
        assert [m.agent.name for m in result.candidates] == ["tdd-guide"]
        assert result.candidates[0].score == 3
        assert result.candidates[0].matched_keywords == ("coverage", "tdd", "test")

    def test_scenario_c_no_agent_matches(self, resolver: Resolver) -> None:
        result = resolver.resolve(TaskSignal(TaskCategory.DOCUMENTATION))

        assert result.selected_agent is None
        assert result.candidates == ()
        assert result.applicable_rules == ()
        assert result.omitted_topics == ("documentation",)


class TestRuleMerge:
    def test_language_documents_win_per_topic(self, resolver: Resolver) -> None:
        result = resolver.resolve(TaskSignal(TaskCategory.REVIEWING_CODE, "rust"))

        assert _keys(result) == [("coding-style", "rust"), ("security", None)]

    def test_no_language_means_global_only(self, resolver: Resolver) -> None:
        result = resolver.resolve(TaskSignal(TaskCategory.E2E))

        assert _keys(result) == [("testing", None)]
        assert result.omitted_topics == ("e2e",)

    def test_language_tag_is_normalized_on_the_signal(self) -> None:
        signal = TaskSignal("testing", "  Rust ")

        assert signal.task_category is TaskCategory.TESTING
        assert signal.detected_language == "rust"

    def test_empty_repository_and_registry(self) -> None:
        resolver = Resolver(RuleRepository.empty(), AgentRegistry.empty())

        result = resolver.resolve(TaskSignal(TaskCategory.SECURITY, "go"))

        assert result.applicable_rules == ()
        assert result.selected_agent is None
        assert result.topics == ("security",)


class TestRanking:
    def test_ties_break_on_name(self) -> None:
        registry = AgentRegistry.from_descriptors([
            AgentDescriptor("zeta", "security review"),
            AgentDescriptor("alpha", "finds a vulnerability"),
            AgentDescriptor("Beta", "keeps secrets safe"),
        ])
        resolver = Resolver(RuleRepository.empty(), registry)

        ranked = resolver.rank_agents(TaskCategory.SECURITY)

        # code point order: uppercase sorts before lowercase
        assert [m.agent.name for m in ranked] == ["Beta", "alpha", "zeta"]
        assert resolver.select_agent(TaskCategory.SECURITY).name == "Beta"

    def test_higher_score_beats_name_order(self) -> None:
        registry = AgentRegistry.from_descriptors([
            AgentDescriptor("a-writer", "Docs writer"),
            AgentDescriptor("z-doc-updater", "Updates documentation, readme and codemap files"),
        ])
        resolver = Resolver(RuleRepository.empty(), registry)

        ranked = resolver.rank_agents(TaskCategory.DOCUMENTATION)

        assert [(m.agent.name, m.score) for m in ranked] == [("z-doc-updater", 3), ("a-writer", 1)]

    def test_ranking_is_independent_of_discovery_order(self) -> None:
        agents = [
            AgentDescriptor("b", "refactor and cleanup"),
            AgentDescriptor("a", "refactor"),
            AgentDescriptor("c", "cleanup dead code and refactor"),
        ]
        policy = ResolutionPolicy.default()

        forward = rank_agents(agents, TaskCategory.REFACTORING, policy)
        backward = rank_agents(reversed(agents), TaskCategory.REFACTORING, policy)

        assert forward == backward
        assert [m.agent.name for m in forward] == ["c", "b", "a"]

    def test_custom_policy_tables(self) -> None:
        policy = ResolutionPolicy.from_tables(
            {"testing": ["qa"]},
            {"testing": ["pytest"]},
        )
        repository = RuleRepository.from_documents([RuleDocument.global_rule("qa", "qa rules")])
        registry = AgentRegistry.from_descriptors([AgentDescriptor("py", "Runs pytest suites")])

        result = Resolver(repository, registry, policy).resolve(TaskSignal(TaskCategory.TESTING))

        assert _keys(result) == [("qa", None)]
        assert result.selected_agent.name == "py"


class TestDeterminismAndConcurrency:
    def test_repeated_resolution_is_identical(self, resolver: Resolver) -> None:
        signal = TaskSignal(TaskCategory.REVIEWING_CODE, "rust")

        results = {resolver.resolve(signal) for _ in range(5)}

        assert len(results) == 1

    def test_concurrent_resolution_matches_sequential(self, resolver: Resolver) -> None:
        signals = [
            TaskSignal(category, language)
            for category in TaskCategory
            for language in (None, "rust", "go")
        ]
        expected = [resolver.resolve(s) for s in signals]

        with ThreadPoolExecutor(max_workers=8) as pool:
            for _ in range(10):
                assert list(pool.map(resolver.resolve, signals)) == expected

    def test_no_match_is_logged_at_debug_only(self, resolver: Resolver, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="agentrules.core.resolver"):
            resolver.resolve(TaskSignal(TaskCategory.DOCUMENTATION))

        assert caplog.records
        assert all(r.levelno == logging.DEBUG for r in caplog.records)


def test_to_dict_is_json_friendly(resolver: Resolver) -> None:
    result = resolver.resolve(TaskSignal(TaskCategory.TESTING, "rust"))

    data = result.to_dict()

    assert data["signal"] == {"task_category": "testing", "detected_language": "rust"}
    assert data["applicable_rules"][0]["language"] == "rust"
    assert "content" not in data["applicable_rules"][0]
    assert data["selected_agent"]["name"] == "tdd-guide"
    assert data["omitted_topics"] == []
    assert result.to_dict(include_content=True)["applicable_rules"][0]["content"] == "rust testing"
