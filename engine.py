"""CalendarEngine: the only surface that mutates application state.

Every operation that touches the cursor or the placements writes the state
back to storage before returning, so a render never sees unsaved state.
Selection is ephemeral and never written.

If the storage backend fails, the engine logs it once and keeps running
in memory for the rest of the session.
"""

import logging
from datetime import date
from typing import Callable

from calendar_grid import build_month_grid, build_year_grid, supports_month
from codec import export_document, load_persisted, merge_document, parse_document
from daykey import parse_day_key
from models import (
    AppState, Catalog, StickerRecord, StorageUnavailable,
    STORAGE_KEY, VIEW_MONTH, VIEW_YEAR,
)
from navigation import Cursor
from placements import PlacementStore

log = logging.getLogger(__name__)


class CalendarEngine:
    """Cursor, placements and selection, with write-through persistence."""

    def __init__(self, storage, catalog: Catalog,
                 today: Callable[[], date] = date.today):
        self._storage = storage
        self._today = today
        self.catalog = catalog
        self.persistent = True
        self.selection: str | None = None
        self._state = self._load() or self._default_state()

    # --- Loading / saving ---

    def _default_state(self) -> AppState:
        now = self._today()
        return AppState(year=now.year, month=now.month - 1, view=VIEW_MONTH,
                        placements=PlacementStore())

    def _load(self) -> AppState | None:
        try:
            text = self._storage.read(STORAGE_KEY)
        except StorageUnavailable as e:
            self._degrade(e)
            return None
        return load_persisted(text)

    def _degrade(self, error: StorageUnavailable):
        if self.persistent:
            log.warning("Storage unavailable, continuing in memory only: %s", error)
        self.persistent = False

    def _persist(self):
        if not self.persistent:
            return
        try:
            self._storage.write(STORAGE_KEY, export_document(self._state))
        except StorageUnavailable as e:
            self._degrade(e)

    def _set_cursor(self, cursor: Cursor):
        """Move the cursor. ValueError, with state unchanged, if it can't be rendered."""
        if not supports_month(cursor.year, cursor.month):
            raise ValueError(f"{cursor.year}-{cursor.month + 1:02d} is outside the supported range")
        self._state.year = cursor.year
        self._state.month = cursor.month
        self._state.view = cursor.view

    # --- Read-only views of state ---

    @property
    def cursor(self) -> Cursor:
        return Cursor(self._state.year, self._state.month, self._state.view)

    @property
    def year(self) -> int:
        return self._state.year

    @property
    def month(self) -> int:
        return self._state.month

    @property
    def view(self) -> str:
        return self._state.view

    @property
    def placements(self) -> PlacementStore:
        """A copy; edit through the engine operations."""
        return self._state.placements.copy()

    def snapshot(self) -> AppState:
        return AppState(self._state.year, self._state.month, self._state.view,
                        self._state.placements.copy())

    def today(self) -> date:
        return self._today()

    def sticker_for(self, key: str) -> str | None:
        return self._state.placements.get(key)

    def record_for(self, key: str) -> StickerRecord | None:
        """Catalog record placed on *key*; None if empty or the id is unknown."""
        return self.catalog.get(self._state.placements.get(key))

    def count_for_month(self, year: int | None = None, month: int | None = None) -> int:
        if year is None:
            year = self._state.year
        if month is None:
            month = self._state.month
        return self._state.placements.count_for_month(year, month)

    def month_grid(self):
        return build_month_grid(self._state.year, self._state.month)

    def year_grid(self):
        return build_year_grid(self._state.year)

    # --- Navigation ---

    def shift_month(self, delta: int):
        self._set_cursor(self.cursor.shifted(delta))
        self._persist()

    def jump_to_today(self):
        self._set_cursor(self.cursor.at_date(self._today()))
        self._persist()

    def toggle_view(self):
        self._set_cursor(self.cursor.toggled())
        self._persist()

    def set_month(self, month: int):
        self._set_cursor(Cursor.normalized(self._state.year, month, self._state.view))
        self._persist()

    def set_year(self, year: int):
        self._set_cursor(Cursor.normalized(year, self._state.month, self._state.view))
        self._persist()

    # --- Selection / editing ---

    def select_day(self, key: str):
        """Open an edit selection on *key*.

        A day outside the cursor's month retargets the cursor first, and a
        selection made from the year view switches to the month view.
        """
        d = parse_day_key(key)
        before = self.cursor
        after = before if before.contains(d) else before.at_date(d)
        if after.view == VIEW_YEAR:
            after = after.with_view(VIEW_MONTH)
        if after != before:
            self._set_cursor(after)
            self._persist()
        self.selection = key

    def _require_selection(self) -> str:
        if self.selection is None:
            raise RuntimeError("No day is selected")
        return self.selection

    def pick_sticker(self, sticker_id: str):
        key = self._require_selection()
        self._state.placements.set(key, sticker_id)
        self._persist()
        self.selection = None

    def remove_selected_sticker(self):
        key = self._require_selection()
        self._state.placements.remove(key)
        self._persist()
        self.selection = None

    def close_selection(self):
        self.selection = None

    # --- Bulk edits ---

    def set_sticker(self, key: str, sticker_id: str):
        parse_day_key(key)
        self._state.placements.set(key, sticker_id)
        self._persist()

    def remove_sticker(self, key: str):
        self._state.placements.remove(key)
        self._persist()

    def clear_year(self, year: int | None = None) -> int:
        """Remove every placement in *year* (default: the cursor's year)."""
        if year is None:
            year = self._state.year
        removed = self._state.placements.clear_year(year)
        self._persist()
        return removed

    # --- Import / export ---

    def export_document(self) -> str:
        return export_document(self._state)

    def import_document(self, doc):
        """Merge an already-parsed document. ImportValidationError leaves state untouched."""
        merged = merge_document(self._state, doc)
        self._state = merged
        self.selection = None
        self._persist()
        log.debug("Imported %d placements", len(merged.placements))

    def import_text(self, text: str | bytes):
        self.import_document(parse_document(text))
