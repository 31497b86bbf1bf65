"""Deep merge for layered configuration.

Mappings merge key by key. Lists are replaced by the higher layer unless the
override list starts with a marker string:

- ``"+"`` appends the remaining items to the lower layer's list
- ``"="`` replaces explicitly (same as no marker, but survives a later ``"+"``)
"""
from __future__ import annotations

from typing import Any, Dict, List

APPEND_MARKER = "+"
REPLACE_MARKER = "="


def merge_arrays(base: List[Any], override: List[Any]) -> List[Any]:
    """Combine two config lists according to the leading marker of ``override``.

        >>> merge_arrays(["test", "tdd"], ["+", "pytest"])
        ['test', 'tdd', 'pytest']
        >>> merge_arrays(["test", "tdd"], ["qa"])
        ['qa']
    """
    if not override:
        return list(base)
    head, rest = override[0], override[1:]
    if head == APPEND_MARKER:
        return [*base, *rest]
    if head == REPLACE_MARKER:
        return list(rest)
    return list(override)


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Return a new mapping with ``override`` layered on top of ``base``.

    Neither input is mutated. Scalars and mismatched types in ``override`` win.
    """
    merged: Dict[str, Any] = dict(base)
    for key, incoming in (override or {}).items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(incoming, dict):
            merged[key] = deep_merge(current, incoming)
        elif isinstance(current, list) and isinstance(incoming, list):
            merged[key] = merge_arrays(current, incoming)
        elif isinstance(incoming, list) and incoming and incoming[0] in (APPEND_MARKER, REPLACE_MARKER):
            # nothing to append to at this layer
            merged[key] = list(incoming[1:])
        else:
            merged[key] = incoming
    return merged


__all__ = ["APPEND_MARKER", "REPLACE_MARKER", "deep_merge", "merge_arrays"]
