from __future__ import annotations

from typing import Any, List

from .values import ValueKind, kind_of

_MISSING = object()


def _split_path(path: str) -> List[str]:
    if path is None:
        return []
    return [part for part in str(path).strip().split('.') if part != '']


def _step(container: Any, key: str) -> Any:
    kind = kind_of(container)
    if kind is ValueKind.MAPPING:
        return container.get(key, _MISSING)
    if kind is ValueKind.SEQUENCE:
        try:
            index = int(key)
        except ValueError:
            return _MISSING
        if -len(container) <= index < len(container):
            return container[index]
    return _MISSING


def get_value_by_path(data: Any, path: str) -> Any:
    """Retrieve a nested value using a dot path of keys and list indices.

    ``"orders.0.items"`` walks mapping key ``orders``, list index ``0`` and
    mapping key ``items``. An empty path returns ``data`` itself. Raises
    KeyError when the path does not resolve.
    """
    keys = _split_path(path)
    val = data
    i = 0
    while i < len(keys):
        key = keys[i]
        nxt = _step(val, key)
        if nxt is not _MISSING:
            val = nxt
            i += 1
            continue

        # Fallback for mapping keys that contain dots themselves
        # (e.g. 'gpt-3.5-turbo' addressed as 'models.gpt-3.5-turbo.name').
        matched = False
        if kind_of(val) is ValueKind.MAPPING:
            candidate = key
            for j in range(i + 1, len(keys)):
                candidate = candidate + '.' + keys[j]
                if candidate in val:
                    val = val[candidate]
                    i = j + 1
                    matched = True
                    break
        if not matched:
            raise KeyError(f"Path {path!r} not found (stopped at {key!r})")
    return val
