"""Bundled resources: default config layers, the config schema and prompt templates.

Resources are located through ``importlib.resources`` so they resolve the same
way from a source checkout and from an installed wheel.
"""

from __future__ import annotations

from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import yaml


def get_data_path(subpackage: str, filename: str = "") -> Path:
    """Path of a bundled directory (``config``, ``schemas``, ``templates``) or a file in it.

    >>> get_data_path("config", "resolver.yaml").name
    'resolver.yaml'
    """
    base = Path(str(resources.files("agentrules.data") / subpackage))
    return base / filename if filename else base


@lru_cache(maxsize=16)
def read_yaml(subpackage: str, filename: str) -> dict[str, Any]:
    """Parse a bundled YAML file once per process.

    The returned mapping is shared between callers and must not be mutated.
    """
    return yaml.safe_load(get_data_path(subpackage, filename).read_text(encoding="utf-8")) or {}


def read_text(subpackage: str, filename: str) -> str:
    return get_data_path(subpackage, filename).read_text(encoding="utf-8")


__all__ = ["get_data_path", "read_yaml", "read_text"]
