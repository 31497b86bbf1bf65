"""Domain-specific configuration for language detection."""
from __future__ import annotations

from functools import cached_property
from typing import Tuple

from ..base import BaseDomainConfig


class DetectionConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "detection"

    @cached_property
    def manifests(self) -> Tuple[Tuple[str, str], ...]:
        """Ordered ``(file pattern, language)`` pairs."""
        entries = self.section.get("manifests") or []
        return tuple(
            (str(e["file"]), str(e["language"]).strip().lower())
            for e in entries
            if isinstance(e, dict) and e.get("file") and e.get("language")
        )


__all__ = ["DetectionConfig"]
