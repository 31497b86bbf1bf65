"""Layered, schema-validated configuration.

Bundled defaults (``agentrules.data/config``) are overlaid by the project's
``.agentrules/config/*.yaml`` and then by ``AGENTRULES_<a>__<b>`` environment
variables.
"""
from __future__ import annotations

from .base import BaseDomainConfig
from .cache import clear_all_caches, get_cached_config, is_cached
from .manager import ConfigManager
from .validation import validate_payload

__all__ = [
    "BaseDomainConfig",
    "ConfigManager",
    "clear_all_caches",
    "get_cached_config",
    "is_cached",
    "validate_payload",
]
