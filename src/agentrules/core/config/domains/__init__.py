"""Typed accessors for configuration sections."""
from __future__ import annotations

from .agents import AgentsConfig
from .detection import DetectionConfig
from .logging import LoggingConfig
from .paths import PathsConfig
from .resolver import ResolverConfig
from .rules import RulesConfig

__all__ = [
    "AgentsConfig",
    "DetectionConfig",
    "LoggingConfig",
    "PathsConfig",
    "ResolverConfig",
    "RulesConfig",
]
