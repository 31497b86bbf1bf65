"""Shared CLI utilities."""
from __future__ import annotations

import argparse
from pathlib import Path

from agentrules.core.context import ResolverContext
from agentrules.core.utils.paths import resolve_project_root


def get_repo_root(args: argparse.Namespace) -> Path:
    """Get repository root from args or auto-detect.

    Args:
        args: Parsed arguments with optional repo_root attribute

    Returns:
        Path: Repository root path
    """
    if getattr(args, "repo_root", None):
        return Path(args.repo_root).resolve()
    return resolve_project_root()


def load_context(args: argparse.Namespace) -> ResolverContext:
    """Build the resolver context for the repository named by ``args``."""
    return ResolverContext.load(get_repo_root(args))


__all__ = ["get_repo_root", "load_context"]
