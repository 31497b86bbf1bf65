"""File I/O helpers."""
from __future__ import annotations

from .yaml import (
    dump_yaml_string,
    iter_yaml_files,
    read_yaml,
)

__all__ = [
    "dump_yaml_string",
    "iter_yaml_files",
    "read_yaml",
]
