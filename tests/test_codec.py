"""Tests for export/import of the application state document."""
import json

import pytest

from codec import (
    STATE_FIELDS, dump_state, export_document, export_filename, load_persisted,
    merge_document, parse_document,
)
from models import AppState, ImportValidationError, VIEW_MONTH, VIEW_YEAR
from placements import PlacementStore


@pytest.fixture
def state():
    return AppState(
        year=2025, month=2, view=VIEW_MONTH,
        placements=PlacementStore({"2025-03-01": "cat01", "2024-12-25": "unknown-id"}),
    )


class TestExport:

    def test_exactly_four_fields(self, state):
        doc = json.loads(export_document(state))
        assert sorted(doc) == sorted(STATE_FIELDS)
        assert doc["placements"] == {"2025-03-01": "cat01", "2024-12-25": "unknown-id"}

    def test_pretty_printed(self, state):
        assert "\n  " in export_document(state)

    def test_filename_uses_year(self, state):
        assert export_filename(state) == "sticker-year-2025.json"

    def test_round_trip_preserves_placements(self, state):
        other = AppState(year=1999, month=0, view=VIEW_YEAR)
        merged = merge_document(other, parse_document(export_document(state)))
        assert merged.placements == state.placements
        assert (merged.year, merged.month, merged.view) == (2025, 2, VIEW_MONTH)


class TestImport:

    def test_placements_only_patches(self, state):
        merged = merge_document(state, {"placements": {"2030-01-01": "dog01"}})
        assert (merged.year, merged.month, merged.view) == (2025, 2, VIEW_MONTH)
        assert merged.placements == {"2030-01-01": "dog01"}

    def test_null_fields_keep_current(self, state):
        merged = merge_document(state, {"year": None, "view": None, "placements": {}})
        assert merged.year == 2025
        assert merged.view == VIEW_MONTH
        assert len(merged.placements) == 0

    @pytest.mark.parametrize("doc", [
        None, [], "text", 7, {}, {"year": 2025}, {"placements": None},
    ])
    def test_rejects_without_placements(self, state, doc):
        before = dump_state(state)
        with pytest.raises(ImportValidationError):
            merge_document(state, doc)
        assert dump_state(state) == before

    @pytest.mark.parametrize("doc", [
        {"placements": []},
        {"placements": {"2025-01-01": 5}},
        {"placements": {}, "year": "2025"},
        {"placements": {}, "month": 1.5},
        {"placements": {}, "year": True},
        {"placements": {}, "view": "week"},
    ])
    def test_rejects_wrong_types(self, state, doc):
        with pytest.raises(ImportValidationError):
            merge_document(state, doc)

    def test_month_is_normalized(self, state):
        merged = merge_document(state, {"placements": {}, "year": 2025, "month": 12})
        assert (merged.year, merged.month) == (2026, 0)

    @pytest.mark.parametrize("doc", [
        {"placements": {}, "year": 10000},
        {"placements": {}, "year": 0},
        {"placements": {}, "year": 1, "month": 0},
        {"placements": {}, "year": 9999, "month": 11},
        {"placements": {}, "year": 10 ** 30},
    ])
    def test_rejects_years_the_calendar_cannot_show(self, state, doc):
        with pytest.raises(ImportValidationError):
            merge_document(state, doc)

    def test_accepts_edge_of_calendar_range(self, state):
        merged = merge_document(state, {"placements": {}, "year": 1, "month": 1})
        assert (merged.year, merged.month) == (1, 1)
        merged = merge_document(state, {"placements": {}, "year": 9999, "month": 10})
        assert (merged.year, merged.month) == (9999, 10)

    def test_unknown_sticker_ids_accepted(self, state):
        merged = merge_document(state, {"placements": {"2025-01-01": "from-another-catalog"}})
        assert merged.placements.get("2025-01-01") == "from-another-catalog"

    def test_does_not_alias_current_state(self, state):
        merged = merge_document(state, {"placements": {"2025-01-01": "x"}})
        merged.placements.set("2025-01-02", "y")
        assert "2025-01-02" not in state.placements

    def test_parse_rejects_bad_json(self):
        with pytest.raises(ImportValidationError):
            parse_document("{not json")


class TestLoadPersisted:

    def test_round_trip(self, state):
        loaded = load_persisted(export_document(state))
        assert loaded.placements == state.placements
        assert (loaded.year, loaded.month, loaded.view) == (2025, 2, VIEW_MONTH)

    @pytest.mark.parametrize("text", [
        None, "", "garbage", "[]", '{"year": "x", "month": 1}',
        '{"year": 10000, "month": 0}', '{"year": 0, "month": 3}', '{"year": 1, "month": 0}',
    ])
    def test_unusable_gives_none(self, text):
        assert load_persisted(text) is None

    def test_lenient_on_view_and_placements(self):
        loaded = load_persisted('{"year": 2025, "month": 14, "view": "week", "placements": 3}')
        assert (loaded.year, loaded.month, loaded.view) == (2026, 2, VIEW_MONTH)
        assert len(loaded.placements) == 0
