"""Common CLI argument registration utilities."""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_repo_root_flag(parser: argparse.ArgumentParser) -> None:
    """Add --repo-root flag for repository root override."""
    parser.add_argument(
        "--repo-root",
        type=str,
        help="Override repository root path",
    )


def add_language_arg(parser: argparse.ArgumentParser, *, help_text: str = "Language tag (e.g., rust)") -> None:
    """Add --language option."""
    parser.add_argument(
        "--language",
        "-l",
        help=help_text,
    )


def add_standard_flags(parser: argparse.ArgumentParser) -> None:
    """Add the flags every command accepts (--json, --repo-root)."""
    add_json_flag(parser)
    add_repo_root_flag(parser)


__all__ = [
    "add_json_flag",
    "add_repo_root_flag",
    "add_language_arg",
    "add_standard_flags",
]
