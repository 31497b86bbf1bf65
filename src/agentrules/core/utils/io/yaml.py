"""YAML file helpers used by the config layer."""
from __future__ import annotations

import fcntl
from pathlib import Path
from typing import Any

import yaml

YAML_SUFFIXES = (".yaml", ".yml")


def read_yaml(path: Path, default: Any = None, raise_on_error: bool = False) -> Any:
    """Load one YAML file under a shared advisory lock.

    An empty file yields ``default``. A missing or unparsable file also yields
    ``default`` unless ``raise_on_error`` is set, in which case the
    ``FileNotFoundError``/``OSError``/``yaml.YAMLError`` propagates.
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as handle:
            fcntl.flock(handle.fileno(), fcntl.LOCK_SH)
            try:
                data = yaml.safe_load(handle)
            finally:
                fcntl.flock(handle.fileno(), fcntl.LOCK_UN)
    except (OSError, yaml.YAMLError):
        if raise_on_error:
            raise
        return default
    return default if data is None else data


def dump_yaml_string(data: Any, sort_keys: bool = False) -> str:
    """Serialize ``data`` as block-style YAML (used by ``config show``)."""
    return yaml.safe_dump(data, default_flow_style=False, sort_keys=sort_keys, allow_unicode=True)


def iter_yaml_files(dir_path: Path) -> list[Path]:
    """List the config files of ``dir_path`` sorted by name.

    ``name.yaml`` shadows ``name.yml`` so a file is never merged twice.
    Hidden files are skipped. A missing directory yields an empty list.
    """
    directory = Path(dir_path)
    if not directory.is_dir():
        return []
    by_stem: dict[str, Path] = {}
    for candidate in directory.iterdir():
        if candidate.name.startswith(".") or candidate.suffix not in YAML_SUFFIXES:
            continue
        if not candidate.is_file():
            continue
        chosen = by_stem.get(candidate.stem)
        if chosen is None or candidate.suffix == ".yaml":
            by_stem[candidate.stem] = candidate
    return [by_stem[stem] for stem in sorted(by_stem)]


__all__ = ["YAML_SUFFIXES", "read_yaml", "dump_yaml_string", "iter_yaml_files"]
