"""
Resolver context: everything needed to serve resolutions for one project.

A context is built once from configuration (rules directory, agents
directory, resolution policy, manifest table) and never changes afterwards.
Build errors propagate; there is no partially built context. To pick up
changes on disk, call :meth:`ResolverContext.reload` and swap the reference.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from agentrules.core.config import ConfigManager
from agentrules.core.config.domains import (
    AgentsConfig,
    DetectionConfig,
    PathsConfig,
    ResolverConfig,
    RulesConfig,
)
from agentrules.core.detection import LanguageDetector
from agentrules.core.registries.agents import AgentRegistry
from agentrules.core.resolver import (
    ResolutionPolicy,
    ResolvedRuleSet,
    Resolver,
    TaskCategory,
    TaskSignal,
)
from agentrules.core.rules.repository import RuleRepository
from agentrules.core.utils.paths import resolve_project_root

logger = logging.getLogger(__name__)


def _load_rules(paths: PathsConfig, rules_cfg: RulesConfig) -> RuleRepository:
    root = paths.rules_dir
    if not root.exists() and not rules_cfg.require:
        logger.info("Rules directory %s not found; using an empty rule set", root)
        return RuleRepository.empty()
    return RuleRepository.load(
        root,
        languages_dir=rules_cfg.languages_dir,
        ignore=rules_cfg.ignore,
    )


def _load_agents(paths: PathsConfig, agents_cfg: AgentsConfig) -> AgentRegistry:
    root = paths.agents_dir
    if not root.exists() and not agents_cfg.require:
        logger.info("Agents directory %s not found; using an empty registry", root)
        return AgentRegistry.empty()
    return AgentRegistry.load(root, pattern=agents_cfg.pattern, ignore=agents_cfg.ignore)


@dataclass(frozen=True)
class ResolverContext:
    """Loaded repository, registry, policy and detector for a project root."""

    project_root: Path
    repository: RuleRepository
    registry: AgentRegistry
    policy: ResolutionPolicy
    detector: LanguageDetector

    @classmethod
    def load(
        cls,
        project_root: Optional[Path] = None,
        *,
        config: Optional[Mapping[str, Any]] = None,
    ) -> "ResolverContext":
        """Build a context from configuration.

        Args:
            project_root: Project root (defaults to the resolved project root)
            config: Pre-merged configuration; loaded and validated when omitted

        Raises:
            ConfigValidationError: If configuration is invalid
            RepositoryLoadError: If a required directory is missing or malformed
            DuplicateRuleError: If two rule files share a key
            MalformedAgentError: If an agent descriptor is invalid
            DuplicateAgentError: If two agent descriptors share a name
        """
        root = Path(project_root).resolve() if project_root is not None else resolve_project_root()
        cfg = config if config is not None else ConfigManager(root).load_config(validate=True)

        paths = PathsConfig(root, config=cfg)
        repository = _load_rules(paths, RulesConfig(root, config=cfg))
        registry = _load_agents(paths, AgentsConfig(root, config=cfg))
        policy = ResolutionPolicy.from_config(ResolverConfig(root, config=cfg))
        detector = LanguageDetector.from_config(DetectionConfig(root, config=cfg))

        logger.info(
            "Resolver context ready for %s: %d rules, %d agents",
            root,
            len(repository),
            len(registry),
        )
        return cls(
            project_root=root,
            repository=repository,
            registry=registry,
            policy=policy,
            detector=detector,
        )

    def reload(self, *, config: Optional[Mapping[str, Any]] = None) -> "ResolverContext":
        """Build a fresh context for the same project root."""
        return type(self).load(self.project_root, config=config)

    @property
    def resolver(self) -> Resolver:
        return Resolver(self.repository, self.registry, self.policy)

    def resolve_signal(self, signal: TaskSignal) -> ResolvedRuleSet:
        return self.resolver.resolve(signal)

    def resolve(
        self,
        category: Union[TaskCategory, str],
        language: Optional[str] = None,
    ) -> ResolvedRuleSet:
        """Resolve for ``category`` (enum or string) and an optional language."""
        return self.resolve_signal(TaskSignal(category, language))

    def detect_language(self) -> Optional[str]:
        return self.detector.detect(self.project_root)


__all__ = ["ResolverContext"]
