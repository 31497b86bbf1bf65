"""Path utilities for agentrules.

- resolver: project root and project config directory resolution
- errors: path resolution errors
"""
from __future__ import annotations

from .errors import ProjectRootError
from .resolver import (
    DEFAULT_PROJECT_CONFIG_DIR,
    PROJECT_CONFIG_DIR_ENV,
    PROJECT_ROOT_ENV,
    get_project_config_dir,
    project_config_dir_name,
    resolve_project_path,
    resolve_project_root,
)

__all__ = [
    "ProjectRootError",
    "DEFAULT_PROJECT_CONFIG_DIR",
    "PROJECT_CONFIG_DIR_ENV",
    "PROJECT_ROOT_ENV",
    "get_project_config_dir",
    "project_config_dir_name",
    "resolve_project_path",
    "resolve_project_root",
]
