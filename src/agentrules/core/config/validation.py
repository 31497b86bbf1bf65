"""Schema validation for configuration payloads.

Schemas are JSON Schema (Draft 2020-12) expressed as YAML and bundled under
``agentrules.data/schemas``.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict

from jsonschema import Draft202012Validator

from agentrules.core.exceptions import ConfigValidationError
from agentrules.core.utils.io import read_yaml
from agentrules.data import get_data_path


@lru_cache(maxsize=16)
def load_schema(schema_name: str) -> Dict[str, Any]:
    """Load a bundled schema by file name (``.yaml`` appended when missing)."""
    lowered = schema_name.lower()
    if not (lowered.endswith(".yaml") or lowered.endswith(".yml")):
        schema_name = f"{schema_name}.yaml"

    path = get_data_path("schemas", schema_name)
    schema = read_yaml(path, default=None, raise_on_error=True)
    if not isinstance(schema, dict):
        raise ValueError(f"Schema {schema_name} must be a YAML mapping")
    return schema


def validate_payload(payload: Any, schema_name: str) -> None:
    """Validate ``payload`` against a bundled schema.

    Raises:
        ConfigValidationError: listing every violation, ordered by location.
    """
    schema = load_schema(schema_name)
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(payload), key=lambda e: [str(p) for p in e.absolute_path])
    if not errors:
        return

    lines = []
    for err in errors:
        location = ".".join(str(p) for p in err.absolute_path) or "<root>"
        lines.append(f"{location}: {err.message}")
    raise ConfigValidationError(
        f"Configuration failed schema validation ({schema_name}):\n  " + "\n  ".join(lines),
        context={"schema": schema_name, "errors": lines},
    )


__all__ = ["load_schema", "validate_payload"]
