from __future__ import annotations

from typing import Any, Dict

from .values import ValueKind, kind_of


def flatten(data: Dict[str, Any], prefix: str = '') -> Dict[str, Any]:
    """Collapse nested mappings into one level of dot-joined paths.

    Lists are leaves: ``{"a": {"b": 1}, "c": [1, 2]}`` becomes
    ``{"a.b": 1, "c": [1, 2]}``. Walks with an explicit stack, so depth is
    limited only by memory. A later path overwrites an earlier equal one.
    """
    if kind_of(data) is not ValueKind.MAPPING:
        raise TypeError(f"flatten expects a mapping, got {type(data).__name__}")

    flat: Dict[str, Any] = {}
    stack = [(prefix, iter(data.items()))]
    while stack:
        parent, items = stack[-1]
        for key, value in items:
            path = f"{parent}.{key}" if parent else str(key)
            if kind_of(value) is ValueKind.MAPPING:
                stack.append((path, iter(value.items())))
                break
            flat[path] = value
        else:
            stack.pop()
    return flat
