"""Data model classes, constants and errors for Sticker Year.

Months are 0-based everywhere in application state (0 = January), matching
the persisted document. Dates inside cells are plain ``datetime.date``.
"""

from dataclasses import dataclass, field
from datetime import date

from placements import PlacementStore


# === Constants ===
STORAGE_KEY = "stickerYear.v1"
SETTINGS_ORG = "StickerYear"
SETTINGS_APP = "StickerYear"

VIEW_MONTH = "month"
VIEW_YEAR = "year"
VIEWS = (VIEW_MONTH, VIEW_YEAR)

DEFAULT_CATEGORY = "Other"
IMAGE_FIELDS = ("file", "src")   # preferred first

GRID_ROWS = 6
GRID_COLS = 7
GRID_CELLS = GRID_ROWS * GRID_COLS  # 42

PICKER_LIMIT = 600

CATALOG_FILE = "stickers.json"
STICKERS_DIR = "stickers"
JSON_FILTER = "JSON Files (*.json)"

WEEKDAYS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
MONTHS = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


# === Errors ===

class StickerYearError(Exception):
    """Base class for all Sticker Year errors."""


class CatalogLoadError(StickerYearError):
    """The sticker feed is missing, unparseable, or the wrong shape."""


class ImportValidationError(StickerYearError):
    """An imported document failed the minimal shape check."""


class StorageUnavailable(StickerYearError):
    """The persistence backend could not be read or written."""


# === Data Model ===

@dataclass(frozen=True)
class StickerRecord:
    """One sticker in the catalog. Immutable once loaded."""
    id: str
    file: str
    label: str = ""
    category: str = DEFAULT_CATEGORY
    tags: frozenset[str] = frozenset()

    def __post_init__(self):
        if not self.label:
            object.__setattr__(self, 'label', self.id)

    @property
    def search_text(self) -> str:
        parts = [self.id, self.label, self.category, *sorted(self.tags)]
        return " ".join(p for p in parts if p).lower()


@dataclass(frozen=True)
class CategoryGroup:
    """A category name and its stickers, in display order."""
    name: str
    stickers: tuple[StickerRecord, ...] = ()


@dataclass(frozen=True)
class Catalog:
    """Normalized sticker catalog: flat list, grouped view and id lookup."""
    flat: tuple[StickerRecord, ...] = ()
    grouped: tuple[CategoryGroup, ...] = ()
    by_id: dict[str, StickerRecord] = field(default_factory=dict)

    def __len__(self):
        return len(self.flat)

    def get(self, sticker_id: str | None) -> StickerRecord | None:
        if sticker_id is None:
            return None
        return self.by_id.get(sticker_id)

    def categories(self) -> list[str]:
        return sorted({s.category for s in self.flat if s.category})

    def search(self, query: str = "", category: str = "",
               limit: int = PICKER_LIMIT) -> list[StickerRecord]:
        """Filter stickers for the picker.

        *category* must match exactly when given; *query* is a
        case-insensitive substring of id, label, category or any tag.
        """
        q = (query or "").strip().lower()
        found = []
        for s in self.flat:
            if category and s.category != category:
                continue
            if q and q not in s.search_text:
                continue
            found.append(s)
            if len(found) >= limit:
                break
        return found


@dataclass(frozen=True)
class DayCell:
    """One square of a calendar grid."""
    date: date
    day_key: str
    is_outside_month: bool = False


@dataclass
class AppState:
    """Everything that is persisted and exported."""
    year: int
    month: int
    view: str = VIEW_MONTH
    placements: PlacementStore = field(default_factory=PlacementStore)
