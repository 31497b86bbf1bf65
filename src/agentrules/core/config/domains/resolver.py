"""Domain-specific configuration for the resolution policy tables."""
from __future__ import annotations

from functools import cached_property
from typing import Dict, List

from ..base import BaseDomainConfig


class ResolverConfig(BaseDomainConfig):
    """Category -> topics and category -> keywords tables.

    Keys are task category values (``writing-code``, ``testing``, ...).
    """

    def _config_section(self) -> str:
        return "resolver"

    @cached_property
    def topics(self) -> Dict[str, List[str]]:
        raw = self.section.get("topics") or {}
        return {str(k): [str(t) for t in (v or [])] for k, v in raw.items()}

    @cached_property
    def keywords(self) -> Dict[str, List[str]]:
        raw = self.section.get("keywords") or {}
        return {str(k): [str(w) for w in (v or [])] for k, v in raw.items()}


__all__ = ["ResolverConfig"]
