"""Domain-specific configuration for on-disk locations."""
from __future__ import annotations

from functools import cached_property
from pathlib import Path

from agentrules.core.utils.paths import resolve_project_path

from ..base import BaseDomainConfig


class PathsConfig(BaseDomainConfig):
    """Rules and agents directories, resolved against the project root."""

    def _config_section(self) -> str:
        return "paths"

    @cached_property
    def rules_dir(self) -> Path:
        return resolve_project_path(self.repo_root, self.section.get("rules_dir", "rules"))

    @cached_property
    def agents_dir(self) -> Path:
        return resolve_project_path(self.repo_root, self.section.get("agents_dir", "agents"))


__all__ = ["PathsConfig"]
