"""
agentrules configuration management (layered YAML, schema-validated).
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from agentrules.core.exceptions import ConfigValidationError
from agentrules.core.utils.io import iter_yaml_files, read_yaml
from agentrules.core.utils.merge import deep_merge as _deep_merge
from agentrules.core.utils.paths import (
    PROJECT_CONFIG_DIR_ENV,
    PROJECT_ROOT_ENV,
    get_project_config_dir,
    resolve_project_root,
)
from agentrules.data import get_data_path

logger = logging.getLogger(__name__)

ENV_PREFIX = "AGENTRULES_"

# Environment variables that configure bootstrap, not the config tree.
_RESERVED_ENV_KEYS = frozenset({PROJECT_ROOT_ENV, PROJECT_CONFIG_DIR_ENV})

# Resolver config sections keyed by task category.
_CATEGORY_TABLES = frozenset({"topics", "keywords"})

_INT_RE = re.compile(r"[-+]?\d+")
_FLOAT_RE = re.compile(r"[-+]?(?:\d+\.\d*|\.\d+)")

# Default for ConfigManager.get when a null value must be told apart from a missing key.
MISSING: Any = object()


def coerce_env_value(raw: str) -> Any:
    """Type an environment override value.

    ``true``/``false`` become bools, numerals become int or float, and text
    wrapped in ``{}`` or ``[]`` is parsed as JSON when it parses. Everything
    else stays a (stripped) string.
    """
    text = raw.strip()
    lowered = text.lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    if _INT_RE.fullmatch(text):
        return int(text)
    if _FLOAT_RE.fullmatch(text):
        return float(text)
    if text[:1] + text[-1:] in ("{}", "[]"):
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            pass
    return text


class ConfigManager:
    """Load, merge, and validate agentrules configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: AGENTRULES_<section>__<key>=value
    2. Project config: <project-config-dir>/config/*.yaml (alphabetical order)
    3. Bundled defaults: agentrules.data/config/*.yaml (alphabetical order)

    Dictionaries merge recursively. Lists replace unless the override list
    starts with "+" (append the remaining items) or "=" (replace).
    """

    ARRAY_APPEND_MARKER = object()

    def __init__(self, repo_root: Optional[Path] = None) -> None:
        self.repo_root = Path(repo_root) if repo_root is not None else resolve_project_root()

        # Bundled defaults from agentrules.data package (always available)
        self.core_config_dir = get_data_path("config")

        # Project-specific config overrides
        self.project_config_dir = get_project_config_dir(self.repo_root) / "config"

    def deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge dictionaries. Delegates to shared implementation."""
        return _deep_merge(base, override)

    def load_yaml(self, path: Path) -> Dict[str, Any]:
        # Configuration must never silently ignore invalid YAML.
        try:
            data = read_yaml(path, default={}, raise_on_error=True)
        except Exception as exc:
            raise ConfigValidationError(
                f"Invalid configuration file {path}: {exc}",
                context={"path": str(path)},
            ) from exc
        if not isinstance(data, dict):
            raise ConfigValidationError(
                f"Configuration file {path} must contain a YAML mapping",
                context={"path": str(path)},
            )
        return data

    def _load_directory(self, directory: Path, cfg: Dict[str, Any]) -> Dict[str, Any]:
        """Merge all YAML files from ``directory`` (deterministic order) into ``cfg``."""
        for path in iter_yaml_files(directory):
            cfg = self.deep_merge(cfg, self.load_yaml(path))
            logger.debug("Merged config file %s", path)
        return cfg

    # ---------- Environment overrides ----------

    def _parse_env_key(self, raw: str) -> List[Union[str, int, object]]:
        segs = raw.split("__")
        processed: List[Union[str, int, object]] = []
        for seg in segs:
            if seg == "":
                raise ConfigValidationError(
                    f"Malformed {ENV_PREFIX}* key: empty segment in '{raw}'.",
                    context={"key": raw},
                )
            if seg.isdigit():
                processed.append(int(seg))
            elif seg.upper() == "APPEND":
                processed.append(self.ARRAY_APPEND_MARKER)
            else:
                processed.append(seg.lower())
        return processed

    def _iter_env_overrides(self) -> Iterator[Tuple[List[Union[str, int, object]], Any]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX) or key in _RESERVED_ENV_KEYS:
                continue
            raw = key[len(ENV_PREFIX):]
            # Only nested keys address the config tree (AGENTRULES_logging__level).
            if "__" not in raw:
                continue
            yield self._parse_env_key(raw), coerce_env_value(os.environ[key])

    def _set_nested(self, root: Dict[str, Any], path: List[Union[str, int, object]], value: Any) -> None:
        cur: Any = root
        for i, part in enumerate(path[:-1]):
            if isinstance(part, int) or part is self.ARRAY_APPEND_MARKER:
                raise ConfigValidationError("Invalid env override: list index/APPEND may only appear at leaf")
            if not isinstance(cur, dict):
                raise ConfigValidationError("Invalid env override: path traverses non-dict container")
            nxt = path[i + 1]
            wants_list = isinstance(nxt, int) or nxt is self.ARRAY_APPEND_MARKER
            cur = cur.setdefault(part, [] if wants_list else {})

        leaf = path[-1]
        if leaf is self.ARRAY_APPEND_MARKER:
            if not isinstance(cur, list):
                raise ConfigValidationError("Invalid env override: APPEND requires list")
            cur.append(value)
        elif isinstance(leaf, int):
            if not isinstance(cur, list):
                raise ConfigValidationError("Invalid env override: index assignment requires list")
            while len(cur) <= leaf:
                cur.append(None)
            cur[leaf] = value
        else:
            if not isinstance(cur, dict):
                raise ConfigValidationError("Invalid env override: key assignment requires dict")
            cur[leaf] = value

    def _canonical_category_path(self, path: List[Union[str, int, object]]) -> List[Union[str, int, object]]:
        """Spell category keys of the resolver tables the way the schema does.

        Env var names cannot hold hyphens, so ``AGENTRULES_RESOLVER__TOPICS__WRITING_CODE``
        arrives as ``writing_code`` and is rewritten to ``writing-code``.
        """
        if len(path) < 3 or path[0] != "resolver" or path[1] not in _CATEGORY_TABLES:
            return path
        if not isinstance(path[2], str):
            return path
        from agentrules.core.resolver.models import parse_task_category

        try:
            category = parse_task_category(path[2])
        except ValueError:
            # left for schema validation to report
            return path
        return [*path[:2], category.value, *path[3:]]

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> None:
        for path, typed_value in self._iter_env_overrides():
            self._set_nested(cfg, self._canonical_category_path(path), typed_value)

    # ---------- Loading ----------

    def validate_schema(self, config: Dict[str, Any], schema_name: str = "config.schema.yaml") -> None:
        from agentrules.core.config.validation import validate_payload

        validate_payload(config, schema_name)

    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Load and merge configuration from all sources (uncached).

        Args:
            validate: If True, validate against the bundled JSON schema

        Returns:
            Merged configuration dictionary
        """
        cfg: Dict[str, Any] = {}
        cfg = self._load_directory(self.core_config_dir, cfg)
        cfg = self._load_directory(self.project_config_dir, cfg)
        self.apply_env_overrides(cfg)

        if validate:
            self.validate_schema(cfg)
        return cfg

    def get(self, key: str, default: Any = None, *, config: Optional[Dict[str, Any]] = None) -> Any:
        """Look up a dot-notation key (``resolver.topics.testing``)."""
        cur: Any = config if config is not None else self.load_config(validate=False)
        for part in [p for p in str(key).split(".") if p]:
            if not isinstance(cur, dict) or part not in cur:
                return default
            cur = cur[part]
        return cur

    def config_files(self) -> List[Path]:
        """Config files that contribute to the merged result, lowest priority first."""
        return [*iter_yaml_files(self.core_config_dir), *iter_yaml_files(self.project_config_dir)]


__all__ = ["ConfigManager", "ENV_PREFIX", "MISSING", "coerce_env_value"]
