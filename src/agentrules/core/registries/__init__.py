"""Read-only registries.

Architecture:
    BaseRegistry (_base.py)
    └── AgentRegistry - agent descriptors parsed from frontmatter
"""
from __future__ import annotations

from ._base import BaseRegistry
from .agents import AgentDescriptor, AgentRegistry, parse_agent_descriptor

__all__ = [
    "BaseRegistry",
    "AgentRegistry",
    "AgentDescriptor",
    "parse_agent_descriptor",
]
