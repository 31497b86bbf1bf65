"""Agent descriptor registry.

Agent descriptors are markdown files with YAML frontmatter::

    ---
    name: tdd-guide
    description: Test-driven development specialist. Use PROACTIVELY for new features.
    tools: Read, Write, Edit, Bash
    model: sonnet
    ---

    You are a TDD specialist...

``name`` and ``description`` are required. ``tools`` is a YAML list or a
comma-separated string. ``model`` is an opaque hint. The markdown body is
kept as the persona's instructions.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

from agentrules.core.exceptions import (
    AgentNotFoundError,
    DuplicateAgentError,
    MalformedAgentError,
    RepositoryLoadError,
)
from agentrules.core.utils.text import parse_frontmatter

from ._base import BaseRegistry

logger = logging.getLogger(__name__)

DEFAULT_PATTERN = "*.md"
DEFAULT_IGNORE: Tuple[str, ...] = ("README.md",)


@dataclass(frozen=True)
class AgentDescriptor:
    """A named agent persona."""

    name: str
    description: str
    tools: FrozenSet[str] = frozenset()
    model: Optional[str] = None
    instructions: str = field(default="", compare=False)
    source: Optional[Path] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Agent name must be non-empty")
        object.__setattr__(self, "tools", frozenset(self.tools))

    def to_dict(self, *, include_instructions: bool = False) -> Dict[str, Any]:
        """Convert to dictionary."""
        data: Dict[str, Any] = {
            "name": self.name,
            "description": self.description,
            "tools": sorted(self.tools),
            "model": self.model,
            "source": str(self.source) if self.source else None,
        }
        if include_instructions:
            data["instructions"] = self.instructions
        return data


def _parse_tools(raw: Any, *, where: str) -> FrozenSet[str]:
    if raw is None:
        return frozenset()
    if isinstance(raw, str):
        items = raw.split(",")
    elif isinstance(raw, (list, tuple)):
        if not all(isinstance(t, str) for t in raw):
            raise MalformedAgentError(
                f"{where}: 'tools' entries must be strings",
                context={"source": where},
            )
        items = list(raw)
    else:
        raise MalformedAgentError(
            f"{where}: 'tools' must be a list or a comma-separated string, got {type(raw).__name__}",
            context={"source": where},
        )
    return frozenset(t.strip() for t in items if t.strip())


def _required_text(frontmatter: Mapping[str, Any], key: str, *, where: str) -> str:
    value = frontmatter.get(key)
    if not isinstance(value, str) or not value.strip():
        raise MalformedAgentError(
            f"{where}: missing required field '{key}'",
            context={"source": where, "field": key},
        )
    return value.strip()


def parse_agent_descriptor(text: str, *, source: Optional[Path] = None) -> AgentDescriptor:
    """Parse one descriptor file's text.

    Raises:
        MalformedAgentError: If the header is invalid or lacks name/description
    """
    where = str(source) if source else "<agent descriptor>"
    try:
        doc = parse_frontmatter(text)
    except ValueError as exc:
        raise MalformedAgentError(f"{where}: {exc}", context={"source": where}) from exc

    fm = doc.frontmatter
    model = fm.get("model")
    return AgentDescriptor(
        name=_required_text(fm, "name", where=where),
        description=_required_text(fm, "description", where=where),
        tools=_parse_tools(fm.get("tools"), where=where),
        model=str(model).strip() if model is not None and str(model).strip() else None,
        instructions=doc.content.strip(),
        source=source,
    )


class AgentRegistry(BaseRegistry[AgentDescriptor]):
    """Immutable registry of agent descriptors keyed by name.

    Example:
        registry = AgentRegistry.load(Path("agents"))
        for agent in registry.get_all():
            print(f"{agent.name}: {agent.description}")
    """

    entity_type: str = "agent"

    def __init__(self, descriptors: Mapping[str, AgentDescriptor], *, root: Optional[Path] = None) -> None:
        self._agents: Mapping[str, AgentDescriptor] = MappingProxyType(dict(descriptors))
        self.root = root

    @classmethod
    def empty(cls) -> "AgentRegistry":
        return cls({})

    @classmethod
    def from_descriptors(
        cls, descriptors: Iterable[AgentDescriptor], *, root: Optional[Path] = None
    ) -> "AgentRegistry":
        """Register descriptors, rejecting repeated names with DuplicateAgentError."""
        index: Dict[str, AgentDescriptor] = {}
        for agent in descriptors:
            existing = index.get(agent.name)
            if existing is not None:
                sources = tuple(str(s) for s in (existing.source, agent.source) if s is not None)
                raise DuplicateAgentError(
                    f"Duplicate agent name '{agent.name}'"
                    + (f": {', '.join(sources)}" if sources else ""),
                    name=agent.name,
                    sources=sources,
                )
            index[agent.name] = agent
        return cls(index, root=root)

    @classmethod
    def load(
        cls,
        root: Path,
        *,
        pattern: str = DEFAULT_PATTERN,
        ignore: Sequence[str] = DEFAULT_IGNORE,
    ) -> "AgentRegistry":
        """Parse every descriptor file directly under ``root``.

        Raises:
            RepositoryLoadError: If root is missing or unreadable
            MalformedAgentError: If a descriptor lacks name/description
            DuplicateAgentError: If two descriptors share a name
        """
        root = Path(root)
        if not root.is_dir():
            raise RepositoryLoadError(f"Agents directory not found: {root}", context={"path": str(root)})

        try:
            paths = sorted(
                (p for p in root.glob(pattern) if p.is_file()),
                key=lambda p: p.name,
            )
        except OSError as exc:
            raise RepositoryLoadError(
                f"Cannot read agents directory {root}: {exc}",
                context={"path": str(root)},
            ) from exc

        descriptors: List[AgentDescriptor] = []
        for path in paths:
            if path.name.startswith(".") or path.name in ignore:
                continue
            try:
                text = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                raise RepositoryLoadError(
                    f"Cannot read agent descriptor {path}: {exc}",
                    context={"path": str(path)},
                ) from exc
            descriptors.append(parse_agent_descriptor(text, source=path))
            logger.debug("Parsed agent descriptor %s", path)

        registry = cls.from_descriptors(descriptors, root=root)
        logger.info("Loaded %d agent descriptors from %s", len(registry), root)
        return registry

    # ---------- Queries ----------

    def find_by_name(self, name: str) -> AgentDescriptor:
        """Get a descriptor by name.

        Raises:
            AgentNotFoundError: If no agent has that name
        """
        return self.get_or_raise(name)

    def _not_found(self, entity_id: str) -> Exception:
        return AgentNotFoundError(entity_id)

    def exists(self, entity_id: str) -> bool:
        return entity_id in self._agents

    def get(self, entity_id: str) -> Optional[AgentDescriptor]:
        return self._agents.get(entity_id)

    def get_all(self) -> List[AgentDescriptor]:
        """All descriptors, sorted by name."""
        return [self._agents[name] for name in self.list_names()]

    def list_names(self) -> List[str]:
        return sorted(self._agents)

    def __len__(self) -> int:
        return len(self._agents)

    def __iter__(self) -> Iterator[AgentDescriptor]:
        return iter(self.get_all())

    def __repr__(self) -> str:
        return f"AgentRegistry(root={self.root!s}, agents={len(self)})"


__all__ = ["AgentRegistry", "AgentDescriptor", "parse_agent_descriptor"]
