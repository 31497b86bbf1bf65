"""Domain-specific configuration for rule discovery."""
from __future__ import annotations

from functools import cached_property
from typing import Tuple

from ..base import BaseDomainConfig


class RulesConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "rules"

    @cached_property
    def languages_dir(self) -> str:
        return str(self.section.get("languages_dir", "languages"))

    @cached_property
    def ignore(self) -> Tuple[str, ...]:
        return tuple(str(n) for n in (self.section.get("ignore") or []))

    @cached_property
    def require(self) -> bool:
        return bool(self.section.get("require", True))


__all__ = ["RulesConfig"]
