"""Domain-specific configuration for agent descriptor discovery."""
from __future__ import annotations

from functools import cached_property
from typing import Tuple

from ..base import BaseDomainConfig


class AgentsConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "agents"

    @cached_property
    def pattern(self) -> str:
        return str(self.section.get("pattern", "*.md"))

    @cached_property
    def ignore(self) -> Tuple[str, ...]:
        return tuple(str(n) for n in (self.section.get("ignore") or []))

    @cached_property
    def require(self) -> bool:
        return bool(self.section.get("require", False))


__all__ = ["AgentsConfig"]
