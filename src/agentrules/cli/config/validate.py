"""
agentrules config validate command.

SUMMARY: Validate project configuration

Validates the merged configuration against the bundled schema, then builds
the rule repository and agent registry it points at, so layout problems,
duplicate keys and malformed descriptors surface before any resolution.
"""

from __future__ import annotations

import argparse
from typing import List, Tuple

from agentrules.cli import OutputFormatter, add_standard_flags, get_repo_root
from agentrules.core.config import ConfigManager
from agentrules.core.config.domains import AgentsConfig, PathsConfig, RulesConfig
from agentrules.core.context import ResolverContext
from agentrules.core.exceptions import AgentRulesError, BuildError

SUMMARY = "Validate project configuration"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Enable strict validation (treat warnings as errors)",
    )
    add_standard_flags(parser)


def _check_directories(repo_root, config) -> List[Tuple[str, str]]:
    """Missing directories are errors when required, warnings otherwise."""
    issues: List[Tuple[str, str]] = []
    paths = PathsConfig(repo_root, config=config)
    for label, path, required in (
        ("rules", paths.rules_dir, RulesConfig(repo_root, config=config).require),
        ("agents", paths.agents_dir, AgentsConfig(repo_root, config=config).require),
    ):
        if not path.is_dir():
            issues.append(("error" if required else "warning", f"{label} directory not found: {path}"))
    return issues


def main(args: argparse.Namespace) -> int:
    """Validate configuration."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    repo_root = get_repo_root(args)
    config_manager = ConfigManager(repo_root)

    issues: List[Tuple[str, str]] = []
    summary = {}
    try:
        config = config_manager.load_config(validate=True)
    except AgentRulesError as e:
        issues.append(("error", f"Schema validation failed: {e}"))
        config = None

    if config is not None:
        issues.extend(_check_directories(repo_root, config))

    if config is not None and not any(level == "error" for level, _ in issues):
        try:
            ctx = ResolverContext.load(repo_root, config=config)
            summary = {
                "rules": len(ctx.repository),
                "languages": ctx.repository.languages(),
                "agents": len(ctx.registry),
            }
        except BuildError as e:
            issues.append(("error", str(e)))

    errors = [m for level, m in issues if level == "error"]
    warnings = [m for level, m in issues if level == "warning"]
    ok = not errors and not (args.strict and warnings)

    if formatter.json_mode:
        formatter.json_output({
            "valid": ok,
            "errors": errors,
            "warnings": warnings,
            "files": [str(p) for p in config_manager.config_files()],
            **summary,
        })
    else:
        for m in errors:
            formatter.text(f"error: {m}")
        for m in warnings:
            formatter.text(f"warning: {m}")
        if ok:
            details = ""
            if summary:
                details = f" ({summary['rules']} rules, {summary['agents']} agents)"
            formatter.text(f"Configuration is valid{details}")
        else:
            formatter.text("Configuration is invalid")
    return 0 if ok else 1
