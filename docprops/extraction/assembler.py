"""Result assembly for a single extraction."""

from typing import Any, Dict, Mapping


def sort_by_keys(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a new dict with the top-level keys in ascending order."""
    return {key: data[key] for key in sorted(data)}


class ResultAccumulator:
    """Collects the projected fields of each document part.

    Parts are merged shallowly in the order they are read; a key written
    by a later part replaces the earlier value.
    """

    def __init__(self):
        self._data: Dict[str, Any] = {}

    def merge(self, part: Mapping[str, Any]) -> None:
        self._data.update(part)

    def sorted(self) -> Dict[str, Any]:
        return sort_by_keys(self._data)

    def __len__(self) -> int:
        return len(self._data)
