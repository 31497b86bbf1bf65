"""Project language detection from manifest files in the project root."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, List, Optional, Tuple

if TYPE_CHECKING:
    from agentrules.core.config.domains import DetectionConfig

logger = logging.getLogger(__name__)

_GLOB_CHARS = frozenset("*?[")


def _manifest_present(root: Path, pattern: str) -> bool:
    if _GLOB_CHARS.intersection(pattern):
        return any(p.is_file() for p in root.glob(pattern))
    return (root / pattern).is_file()


class LanguageDetector:
    """Map manifest files (``Cargo.toml``, ``go.mod``...) to a language tag.

    Manifests are checked in the configured order; the first one present
    wins. Only the root directory is inspected.
    """

    def __init__(self, manifests: Iterable[Tuple[str, str]]) -> None:
        self.manifests: Tuple[Tuple[str, str], ...] = tuple(
            (str(pattern), str(language).strip().lower()) for pattern, language in manifests
        )

    @classmethod
    def from_config(cls, config: "DetectionConfig") -> "LanguageDetector":
        return cls(config.manifests)

    @classmethod
    def default(cls) -> "LanguageDetector":
        from agentrules.data import read_yaml

        section = (read_yaml("config", "detection.yaml") or {}).get("detection") or {}
        return cls(
            (e["file"], e["language"])
            for e in section.get("manifests") or []
            if isinstance(e, dict) and e.get("file") and e.get("language")
        )

    def detect(self, project_root: Path) -> Optional[str]:
        """First language whose manifest exists in ``project_root``, or None."""
        root = Path(project_root)
        if not root.is_dir():
            return None
        for pattern, language in self.manifests:
            if _manifest_present(root, pattern):
                logger.debug("Detected %s from %s in %s", language, pattern, root)
                return language
        return None

    def detect_all(self, project_root: Path) -> Tuple[str, ...]:
        """Every distinct language with a manifest present, in priority order."""
        root = Path(project_root)
        if not root.is_dir():
            return ()
        found: List[str] = []
        for pattern, language in self.manifests:
            if language not in found and _manifest_present(root, pattern):
                found.append(language)
        return tuple(found)


__all__ = ["LanguageDetector"]
