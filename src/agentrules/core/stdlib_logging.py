from __future__ import annotations

import logging
import sys
from pathlib import Path

_CONFIGURED_LOG_PATH: str | None = None
_FILE_HANDLER: logging.Handler | None = None
_JSON_MODE_NULL_HANDLER: logging.Handler | None = None


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO


def configure_stdlib_logging(*, log_path: Path, level: str = "INFO") -> None:
    """Configure Python stdlib logging to write to `log_path` (no stderr handler).

    Idempotent per-process: if already configured for the same file, no-op.
    """
    global _CONFIGURED_LOG_PATH, _FILE_HANDLER

    resolved = str(Path(log_path).resolve())
    if _CONFIGURED_LOG_PATH == resolved and _FILE_HANDLER is not None:
        return

    Path(resolved).parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(_level_from_name(level))

    # FileHandler is also a StreamHandler: only drop the stdout/stderr ones.
    for h in list(root.handlers):
        if isinstance(h, logging.StreamHandler) and getattr(h, "stream", None) in (sys.stdout, sys.stderr):
            root.removeHandler(h)
            h.close()

    if _FILE_HANDLER is not None:
        root.removeHandler(_FILE_HANDLER)
        _FILE_HANDLER.close()
        _FILE_HANDLER = None

    fh = logging.FileHandler(resolved, encoding="utf-8")
    fh.setLevel(_level_from_name(level))
    fh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root.addHandler(fh)

    _FILE_HANDLER = fh
    _CONFIGURED_LOG_PATH = resolved


def reset_stdlib_logging_for_tests() -> None:
    """Test-only: remove the handlers installed by this module."""
    global _CONFIGURED_LOG_PATH, _FILE_HANDLER, _JSON_MODE_NULL_HANDLER
    root = logging.getLogger()
    for h in (_FILE_HANDLER, _JSON_MODE_NULL_HANDLER):
        if h is not None:
            root.removeHandler(h)
            h.close()
    _CONFIGURED_LOG_PATH = None
    _FILE_HANDLER = None
    _JSON_MODE_NULL_HANDLER = None


def suppress_lastresort_in_json_mode() -> None:
    """Install a NullHandler on a handler-less root logger.

    Without it WARNING records reach stderr through ``logging.lastResort`` and
    corrupt ``--json`` error payloads. Levels are left untouched.
    """
    global _JSON_MODE_NULL_HANDLER

    root = logging.getLogger()
    if root.handlers or _JSON_MODE_NULL_HANDLER is not None:
        return
    _JSON_MODE_NULL_HANDLER = logging.NullHandler()
    root.addHandler(_JSON_MODE_NULL_HANDLER)


__all__ = [
    "configure_stdlib_logging",
    "reset_stdlib_logging_for_tests",
    "suppress_lastresort_in_json_mode",
]
