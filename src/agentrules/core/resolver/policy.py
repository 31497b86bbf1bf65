"""Resolution policy: the static tables that drive rule and agent selection.

Two tables, both keyed by task category:

- topics: ordered rule topics required for the category
- keywords: words matched against agent trigger descriptions

The tables are versioned configuration (``resolver`` config section), not
inferred at runtime. Categories missing from a table resolve to no topics or
no keywords.
"""
from __future__ import annotations

import re
from types import MappingProxyType
from typing import TYPE_CHECKING, Dict, FrozenSet, Iterable, Mapping, Optional, Pattern, Tuple

from agentrules.core.exceptions import ConfigValidationError

from .models import TaskCategory, parse_task_category

if TYPE_CHECKING:
    from agentrules.core.config.domains import ResolverConfig


def _keyword_pattern(keyword: str) -> Pattern[str]:
    # Whole-word match; lookarounds (not \b) so keywords may start or end
    # with punctuation.
    return re.compile(r"(?<!\w)" + re.escape(keyword) + r"(?!\w)", re.IGNORECASE)


def _parse_table_keys(table: Mapping[str, Iterable[str]], *, table_name: str) -> Dict[TaskCategory, Iterable[str]]:
    parsed: Dict[TaskCategory, Iterable[str]] = {}
    for raw_key, values in (table or {}).items():
        try:
            category = parse_task_category(raw_key)
        except ValueError as exc:
            raise ConfigValidationError(
                f"resolver.{table_name}: {exc}",
                context={"table": table_name, "key": str(raw_key)},
            ) from exc
        parsed[category] = values or ()
    return parsed


class ResolutionPolicy:
    """Immutable category -> topics / keywords tables."""

    def __init__(
        self,
        topics: Mapping[TaskCategory, Iterable[str]],
        keywords: Mapping[TaskCategory, Iterable[str]],
    ) -> None:
        self._topics: Mapping[TaskCategory, Tuple[str, ...]] = MappingProxyType({
            parse_task_category(c): tuple(dict.fromkeys(str(t).strip() for t in ts if str(t).strip()))
            for c, ts in topics.items()
        })
        self._keywords: Mapping[TaskCategory, FrozenSet[str]] = MappingProxyType({
            parse_task_category(c): frozenset(str(k).strip().lower() for k in ks if str(k).strip())
            for c, ks in keywords.items()
        })
        self._patterns: Mapping[str, Pattern[str]] = MappingProxyType({
            kw: _keyword_pattern(kw)
            for kws in self._keywords.values()
            for kw in kws
        })

    @classmethod
    def from_tables(
        cls,
        topics: Mapping[str, Iterable[str]],
        keywords: Mapping[str, Iterable[str]],
    ) -> "ResolutionPolicy":
        """Build from string-keyed tables (as found in config).

        Raises:
            ConfigValidationError: If a key is not a known task category
        """
        return cls(
            _parse_table_keys(topics, table_name="topics"),
            _parse_table_keys(keywords, table_name="keywords"),
        )

    @classmethod
    def from_config(cls, config: "ResolverConfig") -> "ResolutionPolicy":
        return cls.from_tables(config.topics, config.keywords)

    @classmethod
    def default(cls) -> "ResolutionPolicy":
        """Policy from the bundled ``resolver.yaml`` defaults."""
        from agentrules.data import read_yaml

        section = (read_yaml("config", "resolver.yaml") or {}).get("resolver") or {}
        return cls.from_tables(section.get("topics") or {}, section.get("keywords") or {})

    # ---------- Lookups ----------

    def topics_for(self, category: TaskCategory) -> Tuple[str, ...]:
        return self._topics.get(category, ())

    def keywords_for(self, category: TaskCategory) -> FrozenSet[str]:
        return self._keywords.get(category, frozenset())

    def matched_keywords(self, text: Optional[str], category: TaskCategory) -> Tuple[str, ...]:
        """Category keywords present in ``text``, sorted."""
        if not text:
            return ()
        return tuple(
            sorted(kw for kw in self.keywords_for(category) if self._patterns[kw].search(text))
        )

    def to_dict(self) -> Dict[str, Dict[str, list]]:
        return {
            "topics": {c.value: list(ts) for c, ts in self._topics.items()},
            "keywords": {c.value: sorted(ks) for c, ks in self._keywords.items()},
        }


__all__ = ["ResolutionPolicy"]
