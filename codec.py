"""Import/export codec for the application state document.

The document is ``{year, month, view, placements}`` and nothing else: no
catalog data travels with it. Imports are validated before anything is
merged, and a partial document patches rather than replaces.
"""

import json

from calendar_grid import supports_month
from models import AppState, ImportValidationError, VIEWS
from navigation import Cursor
from placements import PlacementStore

STATE_FIELDS = ("year", "month", "view", "placements")


def dump_state(state: AppState) -> dict:
    return {
        "year": state.year,
        "month": state.month,
        "view": state.view,
        "placements": state.placements.to_dict(),
    }


def export_document(state: AppState) -> str:
    return json.dumps(dump_state(state), indent=2)


def export_filename(state: AppState) -> str:
    return f"sticker-year-{state.year}.json"


def parse_document(text: str | bytes):
    try:
        return json.loads(text)
    except (TypeError, ValueError) as e:
        raise ImportValidationError(f"Not valid JSON: {e}") from e


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_placements(placements) -> dict[str, str]:
    if not isinstance(placements, dict):
        raise ImportValidationError("'placements' must be an object")
    for key, value in placements.items():
        if not isinstance(value, str):
            raise ImportValidationError(f"placement for {key!r} is not a sticker id")
    return placements


def merge_document(state: AppState, doc) -> AppState:
    """Return a new state: *state* patched with the fields present in *doc*.

    *state* itself is never modified, so a rejected import leaves it as it was.
    """
    if not isinstance(doc, dict) or doc.get("placements") is None:
        raise ImportValidationError("That JSON doesn't look like a Sticker Year export.")

    placements = _check_placements(doc["placements"])

    year = doc.get("year")
    month = doc.get("month")
    view = doc.get("view")
    if year is None:
        year = state.year
    if month is None:
        month = state.month
    if view is None:
        view = state.view
    if not _is_int(year) or not _is_int(month):
        raise ImportValidationError("'year' and 'month' must be integers")
    if view not in VIEWS:
        raise ImportValidationError(f"'view' must be one of {', '.join(VIEWS)}")

    cursor = Cursor.normalized(year, month, view)
    if not supports_month(cursor.year, cursor.month):
        raise ImportValidationError(
            f"{cursor.year}-{cursor.month + 1:02d} is outside the years this calendar can show")
    return AppState(
        year=cursor.year,
        month=cursor.month,
        view=cursor.view,
        placements=PlacementStore(placements),
    )


def load_persisted(text: str | None) -> AppState | None:
    """Lenient read of the stored document. Anything unusable gives None."""
    if not text:
        return None
    try:
        doc = json.loads(text)
    except ValueError:
        return None
    if not isinstance(doc, dict):
        return None
    year, month = doc.get("year"), doc.get("month")
    if not _is_int(year) or not _is_int(month):
        return None
    view = doc.get("view")
    placements = doc.get("placements")
    if not isinstance(placements, dict):
        placements = {}
    cursor = Cursor.normalized(year, month, view if view in VIEWS else VIEWS[0])
    if not supports_month(cursor.year, cursor.month):
        return None
    return AppState(
        year=cursor.year,
        month=cursor.month,
        view=cursor.view,
        placements=PlacementStore({k: v for k, v in placements.items() if isinstance(v, str)}),
    )
