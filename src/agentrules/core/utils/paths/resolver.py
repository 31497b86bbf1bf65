"""Project root and project config directory resolution.

Resolution priority for the project root:
1. ``AGENTRULES_PROJECT_ROOT`` environment variable
2. Git repository root via ``git rev-parse --show-toplevel``
3. The current working directory

The project config directory (``.agentrules`` by default) lives directly
under the project root; ``AGENTRULES_PROJECT_CONFIG_DIR`` overrides its name.
"""
from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path

from .errors import ProjectRootError

logger = logging.getLogger(__name__)

PROJECT_ROOT_ENV = "AGENTRULES_PROJECT_ROOT"
PROJECT_CONFIG_DIR_ENV = "AGENTRULES_PROJECT_CONFIG_DIR"
DEFAULT_PROJECT_CONFIG_DIR = ".agentrules"


def _git_toplevel(cwd: Path) -> Path | None:
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--show-toplevel"],
            cwd=str(cwd),
            text=True,
            capture_output=True,
            check=True,
            timeout=5,
        )
    except (FileNotFoundError, subprocess.CalledProcessError, subprocess.TimeoutExpired):
        return None
    root_str = (result.stdout or "").strip()
    if not root_str:
        return None
    return Path(root_str).expanduser().resolve()


def resolve_project_root() -> Path:
    """Resolve the project root.

    Returns:
        Path: Absolute path to project root

    Raises:
        ProjectRootError: If the environment override points at a missing path
            or at the project config directory itself.
    """
    env_root = os.environ.get(PROJECT_ROOT_ENV)
    if env_root:
        env_path = Path(env_root).expanduser().resolve()
        if not env_path.exists():
            raise ProjectRootError(f"{PROJECT_ROOT_ENV} points at missing path: {env_path}")
        if env_path.name == project_config_dir_name():
            raise ProjectRootError(
                f"{PROJECT_ROOT_ENV} points to the project config directory: {env_path}. "
                "It must point to the project root."
            )
        return env_path

    cwd = Path.cwd().resolve()
    git_root = _git_toplevel(cwd)
    if git_root is not None:
        return git_root

    logger.debug("No git repository found; using %s as project root", cwd)
    return cwd


def project_config_dir_name() -> str:
    """Name of the per-project config directory."""
    override = os.environ.get(PROJECT_CONFIG_DIR_ENV, "").strip()
    return override or DEFAULT_PROJECT_CONFIG_DIR


def get_project_config_dir(repo_root: Path) -> Path:
    """Return ``<repo_root>/.agentrules`` (or the overridden name)."""
    return Path(repo_root) / project_config_dir_name()


def resolve_project_path(repo_root: Path, value: str | Path) -> Path:
    """Resolve a configured path: absolute paths pass through, others are repo-relative."""
    p = Path(value).expanduser()
    if p.is_absolute():
        return p
    return (Path(repo_root) / p).resolve()


__all__ = [
    "PROJECT_ROOT_ENV",
    "PROJECT_CONFIG_DIR_ENV",
    "DEFAULT_PROJECT_CONFIG_DIR",
    "resolve_project_root",
    "project_config_dir_name",
    "get_project_config_dir",
    "resolve_project_path",
]
