"""Placement store: the sparse Day Key -> sticker id mapping.

The store is plain in-memory data. Persisting after each change is the
engine's job, so the store can be built, copied and compared freely.
Sticker ids are never checked against a catalog here.
"""

from daykey import year_prefix, month_prefix


class PlacementStore:
    """At most one sticker id per Day Key. Absent key means no sticker."""

    def __init__(self, placements: dict[str, str] | None = None):
        self._placements: dict[str, str] = dict(placements or {})

    def __len__(self):
        return len(self._placements)

    def __contains__(self, key):
        return key in self._placements

    def __iter__(self):
        return iter(self._placements)

    def __eq__(self, other):
        if isinstance(other, PlacementStore):
            return self._placements == other._placements
        if isinstance(other, dict):
            return self._placements == other
        return NotImplemented

    def __repr__(self):
        return f"PlacementStore({self._placements!r})"

    def get(self, key: str) -> str | None:
        return self._placements.get(key)

    def set(self, key: str, sticker_id: str):
        self._placements[key] = sticker_id

    def remove(self, key: str):
        self._placements.pop(key, None)

    def clear_year(self, year: int) -> int:
        """Drop every placement in *year*. Returns how many were removed."""
        prefix = year_prefix(year)
        doomed = [k for k in self._placements if k.startswith(prefix)]
        for k in doomed:
            del self._placements[k]
        return len(doomed)

    def count_for_month(self, year: int, month: int) -> int:
        prefix = month_prefix(year, month)
        return sum(1 for k in self._placements if k.startswith(prefix))

    def items(self):
        return self._placements.items()

    def to_dict(self) -> dict[str, str]:
        return dict(self._placements)

    def copy(self) -> "PlacementStore":
        return PlacementStore(self._placements)
