"""
Rules index.

- RuleDocument / RuleScope (models.py): one unit of guidance text
- RuleRepository (repository.py): load-once index with language-over-global
  resolution per topic
"""
from __future__ import annotations

from agentrules.core.exceptions import DuplicateRuleError, RepositoryLoadError

from .models import RuleDocument, RuleKey, RuleScope, normalize_language
from .repository import RuleRepository

__all__ = [
    "DuplicateRuleError",
    "RepositoryLoadError",
    "RuleDocument",
    "RuleKey",
    "RuleScope",
    "RuleRepository",
    "normalize_language",
]
