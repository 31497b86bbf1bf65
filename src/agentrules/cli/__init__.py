"""
agentrules CLI package.

Provides the command-line interface with auto-discovery of commands from
subfolders (rules/, agents/, config/) and top-level commands (commands/).

Framework utilities for building CLI commands:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
- _utils: Shared CLI utilities
"""
from ._output import OutputFormatter
from ._args import (
    add_json_flag,
    add_language_arg,
    add_repo_root_flag,
    add_standard_flags,
)
from ._utils import get_repo_root, load_context

__all__ = [
    # Output formatting
    "OutputFormatter",
    # Argument helpers
    "add_json_flag",
    "add_language_arg",
    "add_repo_root_flag",
    "add_standard_flags",
    # Utilities
    "get_repo_root",
    "load_context",
]
