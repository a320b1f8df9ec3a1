"""Tests for the PlacementStore."""
from placements import PlacementStore


class TestPlacementStore:

    def test_empty(self):
        store = PlacementStore()
        assert len(store) == 0
        assert store.get("2025-01-01") is None

    def test_set_then_get(self):
        store = PlacementStore()
        store.set("2025-01-01", "cat01")
        assert store.get("2025-01-01") == "cat01"

    def test_set_overwrites(self):
        store = PlacementStore({"2025-01-01": "cat01"})
        store.set("2025-01-01", "dog01")
        assert store.get("2025-01-01") == "dog01"
        assert len(store) == 1

    def test_remove(self):
        store = PlacementStore({"2025-01-01": "cat01"})
        store.remove("2025-01-01")
        assert store.get("2025-01-01") is None
        assert "2025-01-01" not in store

    def test_remove_absent_is_noop(self):
        store = PlacementStore({"2025-01-01": "cat01"})
        store.remove("2030-05-05")
        assert store == {"2025-01-01": "cat01"}

    def test_clear_year_only_touches_that_year(self):
        store = PlacementStore({
            "2024-12-31": "a",
            "2025-01-01": "b",
            "2025-12-31": "c",
            "2026-01-01": "d",
        })
        removed = store.clear_year(2025)
        assert removed == 2
        assert store.to_dict() == {"2024-12-31": "a", "2026-01-01": "d"}

    def test_clear_year_with_nothing_to_clear(self):
        store = PlacementStore({"2024-12-31": "a"})
        assert store.clear_year(2025) == 0
        assert len(store) == 1

    def test_count_for_month(self):
        store = PlacementStore({
            "2025-01-01": "a",
            "2025-01-31": "b",
            "2025-02-01": "c",
            "2024-01-15": "d",
            "2025-11-03": "e",
        })
        assert store.count_for_month(2025, 0) == 2
        assert store.count_for_month(2025, 1) == 1
        assert store.count_for_month(2025, 10) == 1
        # "2025-1" must not be confused with "2025-11"
        assert store.count_for_month(2025, 11) == 0

    def test_unknown_ids_are_kept(self):
        store = PlacementStore({"2025-01-01": "not-in-any-catalog"})
        assert store.get("2025-01-01") == "not-in-any-catalog"

    def test_constructor_copies_input(self):
        source = {"2025-01-01": "a"}
        store = PlacementStore(source)
        store.set("2025-01-02", "b")
        assert source == {"2025-01-01": "a"}

    def test_copy_is_independent(self):
        store = PlacementStore({"2025-01-01": "a"})
        other = store.copy()
        other.remove("2025-01-01")
        assert store.get("2025-01-01") == "a"
        assert store != other
