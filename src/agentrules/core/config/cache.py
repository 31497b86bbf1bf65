"""Centralized configuration caching.

Provides a single source of truth for loaded configuration across all domain
configs. Each project root keeps one entry per ``validate`` flag, tagged with
a fingerprint of AGENTRULES_* environment variables and the mtimes of project
config files; a stale fingerprint reloads and replaces the entry.
"""
from __future__ import annotations

import hashlib
import os
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from agentrules.core.utils.io import iter_yaml_files
from agentrules.core.utils.paths import get_project_config_dir, resolve_project_root

# One entry per (root, validate): the fingerprint it was loaded under and the
# config. A changed fingerprint replaces the entry.
_config_cache: Dict[Tuple[str, bool], Tuple[str, Dict[str, Any]]] = {}


def _normalize_repo_root(repo_root: Optional[Path]) -> Path:
    if repo_root is None:
        return resolve_project_root()
    return Path(repo_root).expanduser().resolve()


def _fingerprint(repo_root: Path) -> str:
    env_items = sorted(
        (k, os.environ.get(k, ""))
        for k in os.environ.keys()
        if k.startswith("AGENTRULES_")
    )
    env_fp = hashlib.sha256(repr(env_items).encode("utf-8")).hexdigest()[:12]

    files: list[tuple[str, int, int]] = []
    for p in iter_yaml_files(get_project_config_dir(repo_root) / "config"):
        st = p.stat()
        files.append((p.name, int(st.st_mtime_ns), int(st.st_size)))
    cfg_fp = hashlib.sha256(repr(files).encode("utf-8")).hexdigest()[:12]

    return f"env={env_fp}:cfg={cfg_fp}"


def get_cached_config(repo_root: Optional[Path] = None, validate: bool = True) -> Dict[str, Any]:
    """Get configuration with caching.

    Returns the same config dict instance for the same project state
    (treat it as immutable).
    """
    normalized_root = _normalize_repo_root(repo_root)
    slot = (str(normalized_root), bool(validate))
    fingerprint = _fingerprint(normalized_root)

    cached = _config_cache.get(slot)
    if cached is not None and cached[0] == fingerprint:
        return cached[1]

    from .manager import ConfigManager

    cfg = ConfigManager(repo_root=normalized_root).load_config(validate=validate)
    _config_cache[slot] = (fingerprint, cfg)
    return cfg


def clear_all_caches() -> None:
    """Clear the configuration cache."""
    _config_cache.clear()


def is_cached(repo_root: Optional[Path] = None, validate: bool = True) -> bool:
    """Check if a current config for repo_root is cached."""
    normalized_root = _normalize_repo_root(repo_root)
    cached = _config_cache.get((str(normalized_root), bool(validate)))
    return cached is not None and cached[0] == _fingerprint(normalized_root)


__all__ = ["get_cached_config", "clear_all_caches", "is_cached"]
