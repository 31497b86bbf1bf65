"""
Rule Repository: immutable index of rule documents.

Directory layout (validated at load time)::

    <root>/<topic>.<ext>                     global rules
    <root>/languages/<lang>/<topic>.<ext>    language-specific overrides

Topic is the file name without its last extension; language is the
directory name under ``languages/``. Every (topic, language-or-global) key
maps to exactly one file. Anything else in the tree is a layout error, so a
malformed rules directory fails before any resolution is served.

The repository never changes after construction. Call :meth:`RuleRepository.load`
again to pick up changes on disk.
"""
from __future__ import annotations

import logging
from collections import defaultdict
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

from agentrules.core.exceptions import DuplicateRuleError, RepositoryLoadError

from .models import RuleDocument, RuleKey, normalize_language

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGES_DIR = "languages"
DEFAULT_IGNORE: Tuple[str, ...] = ("README.md",)


def _is_skipped(path: Path, ignore: Sequence[str]) -> bool:
    return path.name.startswith(".") or path.name in ignore


def _list_dir(directory: Path) -> List[Path]:
    try:
        return sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        raise RepositoryLoadError(
            f"Cannot read rules directory {directory}: {exc}",
            context={"path": str(directory)},
        ) from exc


def _read_content(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise RepositoryLoadError(
            f"Cannot read rule file {path}: {exc}",
            context={"path": str(path)},
        ) from exc


def _layout_error(message: str, path: Path) -> RepositoryLoadError:
    return RepositoryLoadError(message, context={"path": str(path)})


class RuleRepository:
    """Read-only mapping from (topic, language-or-global) to RuleDocument.

    Build with :meth:`load` (from a directory) or :meth:`from_documents`
    (from memory). Both reject duplicate keys with ``DuplicateRuleError``.

    Example:
        repo = RuleRepository.load(Path("rules"))
        for doc in repo.resolve("rust", ["coding-style", "testing"]):
            print(doc.topic, doc.scope.value)
    """

    entity_type: str = "rule"

    def __init__(self, documents: Mapping[RuleKey, RuleDocument], *, root: Optional[Path] = None) -> None:
        # Callers go through load()/from_documents(), which enforce uniqueness.
        self._documents: Mapping[RuleKey, RuleDocument] = MappingProxyType(dict(documents))
        self.root = root

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def empty(cls) -> "RuleRepository":
        return cls({})

    @classmethod
    def from_documents(
        cls, documents: Iterable[RuleDocument], *, root: Optional[Path] = None
    ) -> "RuleRepository":
        """Index in-memory documents, rejecting duplicate keys."""
        index: Dict[RuleKey, RuleDocument] = {}
        for doc in documents:
            existing = index.get(doc.key)
            if existing is not None:
                sources = tuple(str(s) for s in (existing.source, doc.source) if s is not None)
                raise DuplicateRuleError(
                    f"Duplicate rule for topic '{doc.topic}' "
                    f"({doc.language or 'global'}): {', '.join(sources) or 'in-memory documents'}",
                    topic=doc.topic,
                    language=doc.language,
                    sources=sources,
                )
            index[doc.key] = doc
        return cls(index, root=root)

    @classmethod
    def load(
        cls,
        root: Path,
        *,
        languages_dir: str = DEFAULT_LANGUAGES_DIR,
        ignore: Sequence[str] = DEFAULT_IGNORE,
    ) -> "RuleRepository":
        """Build a repository from a rules directory.

        Args:
            root: Rules directory
            languages_dir: Name of the subdirectory holding language overrides
            ignore: File names to skip (dotfiles are always skipped)

        Raises:
            RepositoryLoadError: If root is missing/unreadable or the layout is malformed
            DuplicateRuleError: If two files map to the same key
        """
        root = Path(root)
        if not root.exists():
            raise RepositoryLoadError(f"Rules directory not found: {root}", context={"path": str(root)})
        if not root.is_dir():
            raise RepositoryLoadError(f"Rules path is not a directory: {root}", context={"path": str(root)})

        discovered: Dict[RuleKey, List[Path]] = defaultdict(list)

        for entry in _list_dir(root):
            if _is_skipped(entry, ignore):
                continue
            if entry.is_dir():
                if entry.name != languages_dir:
                    raise _layout_error(
                        f"Unexpected directory in rules root: {entry} "
                        f"(only '{languages_dir}/' may contain subdirectories)",
                        entry,
                    )
                for key, path in cls._discover_languages(entry, ignore):
                    discovered[key].append(path)
            elif entry.is_file():
                discovered[(entry.stem, None)].append(entry)
            else:
                raise _layout_error(f"Unsupported entry in rules root: {entry}", entry)

        for key in sorted(discovered, key=lambda k: (k[0], k[1] or "")):
            paths = discovered[key]
            if len(paths) > 1:
                topic, language = key
                sources = tuple(str(p) for p in sorted(paths))
                raise DuplicateRuleError(
                    f"Duplicate rule for topic '{topic}' ({language or 'global'}): {', '.join(sources)}",
                    topic=topic,
                    language=language,
                    sources=sources,
                )

        documents: Dict[RuleKey, RuleDocument] = {}
        for (topic, language), paths in discovered.items():
            path = paths[0]
            content = _read_content(path)
            if language is None:
                doc = RuleDocument.global_rule(topic, content, source=path)
            else:
                doc = RuleDocument.language_rule(topic, language, content, source=path)
            documents[doc.key] = doc
            logger.debug("Indexed rule %s (%s) from %s", topic, language or "global", path)

        repo = cls(documents, root=root)
        logger.info(
            "Loaded %d rule documents (%d languages) from %s",
            len(repo),
            len(repo.languages()),
            root,
        )
        return repo

    @staticmethod
    def _discover_languages(
        languages_root: Path, ignore: Sequence[str]
    ) -> Iterator[Tuple[RuleKey, Path]]:
        for lang_dir in _list_dir(languages_root):
            if _is_skipped(lang_dir, ignore):
                continue
            if not lang_dir.is_dir():
                raise _layout_error(
                    f"Expected a language directory, found a file: {lang_dir}",
                    lang_dir,
                )
            language = normalize_language(lang_dir.name)
            for entry in _list_dir(lang_dir):
                if _is_skipped(entry, ignore):
                    continue
                if entry.is_dir():
                    raise _layout_error(
                        f"Nested directories are not allowed under {lang_dir}: {entry}",
                        entry,
                    )
                if not entry.is_file():
                    raise _layout_error(f"Unsupported entry in rules tree: {entry}", entry)
                yield (entry.stem, language), entry

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def resolve(self, language: Optional[str], topics: Iterable[str]) -> Tuple[RuleDocument, ...]:
        """Return one document per requested topic, in request order.

        For each topic the language-specific document wins; otherwise the
        global one is used; topics with neither are omitted. Without a
        language only global documents are considered. Repeated topics are
        emitted once, at their first position.
        """
        lang = normalize_language(language)
        seen = set()
        result: List[RuleDocument] = []
        for topic in topics:
            if topic in seen:
                continue
            seen.add(topic)
            doc = None
            if lang is not None:
                doc = self._documents.get((topic, lang))
            if doc is None:
                doc = self._documents.get((topic, None))
            if doc is not None:
                result.append(doc)
        return tuple(result)

    def get(self, topic: str, language: Optional[str] = None) -> Optional[RuleDocument]:
        """Exact lookup (no fallback): ``language=None`` means the global document."""
        return self._documents.get((topic, normalize_language(language)))

    def topics(self) -> List[str]:
        return sorted({topic for topic, _ in self._documents})

    def languages(self) -> List[str]:
        return sorted({lang for _, lang in self._documents if lang is not None})

    def documents(self) -> List[RuleDocument]:
        """All documents; global first, then by topic and language."""
        return sorted(
            self._documents.values(),
            key=lambda d: (d.precedence, d.language or "", d.topic),
        )

    def __len__(self) -> int:
        return len(self._documents)

    def __iter__(self) -> Iterator[RuleDocument]:
        return iter(self.documents())

    def __contains__(self, key: object) -> bool:
        return key in self._documents

    def __repr__(self) -> str:
        return f"RuleRepository(root={self.root!s}, documents={len(self)})"


__all__ = ["RuleRepository", "DEFAULT_LANGUAGES_DIR", "DEFAULT_IGNORE"]
