"""CLI output helpers.

Commands print through :class:`OutputFormatter` so ``--json`` output is a
single JSON document on stdout and errors are a single JSON document on
stderr.
"""
from __future__ import annotations

import json
import sys
from typing import Any, Dict, Optional

from agentrules.core.exceptions import AgentRulesError


class OutputFormatter:
    """Text or JSON output for one command invocation."""

    def __init__(self, json_mode: bool = False, indent: int = 2):
        self.json_mode = json_mode
        self.indent = indent

    def _dumps(self, data: Any) -> str:
        return json.dumps(data, indent=self.indent, default=str)

    def error(
        self,
        error: Exception,
        message: Optional[str] = None,
        *,
        error_code: Optional[str] = None,
    ) -> None:
        """Report ``error`` on stderr.

        In JSON mode the payload is ``{"error", "message", "code", "context"}``;
        ``error`` is ``error_code`` when given, else the exception's code.
        """
        msg = message or str(error)
        if not self.json_mode:
            print(f"Error: {msg}", file=sys.stderr)
            return

        if isinstance(error, AgentRulesError):
            payload: Dict[str, Any] = error.to_json_error()
        else:
            payload = {"code": type(error).__name__, "context": {}}
        payload["message"] = msg
        print(self._dumps({"error": error_code or payload["code"], **payload}), file=sys.stderr)

    def json_output(self, data: Any) -> None:
        print(self._dumps(data))

    def text(self, message: str) -> None:
        print(message)

    def text_kv(self, key: str, value: Any, prefix: str = "  ") -> None:
        """Print ``key: value`` (text mode only)."""
        if not self.json_mode:
            print(f"{prefix}{key}: {value}")


__all__ = ["OutputFormatter"]
