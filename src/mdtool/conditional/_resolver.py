"""Value resolver: case-insensitive dot-path lookup over argument values.

Each path segment is matched against the current object's keys in three
passes: exact, case-insensitive, then normalized (underscores stripped,
lowercased) so that ``USER_NAME``, ``userName`` and ``user_name`` all
reach the same key.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from mdtool.model.values import ObjectValue, Value, to_value


def _normalize(key: str) -> str:
    return key.replace("_", "").lower()


def _lookup(obj: ObjectValue, segment: str) -> Value | None:
    """Match one path segment against an object's keys."""
    fields = obj.fields
    if segment in fields:
        return fields[segment]

    lowered = segment.lower()
    for key, value in fields.items():
        if key.lower() == lowered:
            return value

    normalized = _normalize(segment)
    for key, value in fields.items():
        if _normalize(key) == normalized:
            return value

    return None


class ValueResolver:
    """Read-only view over an argument tree.

    Parameters
    ----------
    data
        A mapping of plain Python / JSON data, an ``ObjectValue``, or
        another ``ValueResolver`` (whose root is shared).
    """

    def __init__(self, data: Mapping[str, Any] | ObjectValue | ValueResolver | None = None) -> None:
        if isinstance(data, ValueResolver):
            root = data.root
        elif isinstance(data, ObjectValue):
            root = data
        elif data is None:
            root = ObjectValue()
        elif isinstance(data, Mapping):
            root = to_value(data)
        else:
            raise TypeError(
                f"ValueResolver expects a mapping or ObjectValue, "
                f"got {type(data).__name__}"
            )
        self._root = root

    @classmethod
    def from_json(cls, text: str) -> ValueResolver:
        """Build a resolver from a JSON object document."""
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError(
                f"Arguments must be a JSON object, got {type(data).__name__}"
            )
        return cls(data)

    @property
    def root(self) -> ObjectValue:
        return self._root

    def resolve(self, path: str) -> Value | None:
        """Resolve a bare or dotted *path*; ``None`` when absent."""
        if not path:
            return None

        current: Value = self._root
        for segment in path.split("."):
            if not segment or not isinstance(current, ObjectValue):
                return None
            found = _lookup(current, segment)
            if found is None:
                return None
            current = found
        return current

    def __contains__(self, path: str) -> bool:
        return self.resolve(path) is not None


def merge_defaults(args: Mapping[str, Any], defaults: Mapping[str, Any]) -> dict[str, Any]:
    """Overlay *args* on *defaults*.

    A default is added only when no key of *args* matches it
    case-insensitively; supplied arguments always win.
    """
    merged = dict(args)
    present = {key.lower() for key in merged}
    for key, value in defaults.items():
        if key.lower() not in present:
            merged[key] = value
            present.add(key.lower())
    return merged
