"""
agentrules detect command.

SUMMARY: Detect the project language from manifest files
"""

from __future__ import annotations

import argparse

from agentrules.cli import OutputFormatter, add_standard_flags, get_repo_root
from agentrules.core.config.domains import DetectionConfig
from agentrules.core.detection import LanguageDetector
from agentrules.core.exceptions import AgentRulesError

SUMMARY = "Detect the project language from manifest files"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        repo_root = get_repo_root(args)
        detector = LanguageDetector.from_config(DetectionConfig(repo_root=repo_root))
    except AgentRulesError as e:
        formatter.error(e, error_code="config_error")
        return 1

    language = detector.detect(repo_root)
    candidates = detector.detect_all(repo_root)

    if formatter.json_mode:
        formatter.json_output({
            "repo_root": str(repo_root),
            "language": language,
            "candidates": list(candidates),
        })
    elif language is None:
        formatter.text(f"No language manifest found in {repo_root}")
    else:
        formatter.text(language)
        if len(candidates) > 1:
            formatter.text(f"  also found: {', '.join(candidates[1:])}")
    return 0
