"""Navigation cursor: pure (year, month, view) transitions.

Month arithmetic is modular with carry into the year, never clamped.
"""

from dataclasses import dataclass, replace
from datetime import date

from models import VIEW_MONTH, VIEW_YEAR, VIEWS


@dataclass(frozen=True)
class Cursor:
    year: int
    month: int
    view: str = VIEW_MONTH

    def __post_init__(self):
        if not 0 <= self.month <= 11:
            raise ValueError(f"month must be 0..11, got {self.month}; use Cursor.normalized()")
        if self.view not in VIEWS:
            raise ValueError(f"unknown view {self.view!r}")

    @classmethod
    def normalized(cls, year: int, month: int, view: str = VIEW_MONTH) -> "Cursor":
        """Build a cursor, carrying month overflow/underflow into the year."""
        carry, month = divmod(month, 12)
        return cls(year + carry, month, view)

    @classmethod
    def for_date(cls, d: date, view: str = VIEW_MONTH) -> "Cursor":
        return cls(d.year, d.month - 1, view)

    def shifted(self, delta: int) -> "Cursor":
        return Cursor.normalized(self.year, self.month + delta, self.view)

    def toggled(self) -> "Cursor":
        return replace(self, view=VIEW_YEAR if self.view == VIEW_MONTH else VIEW_MONTH)

    def with_view(self, view: str) -> "Cursor":
        return replace(self, view=view)

    def at_date(self, d: date) -> "Cursor":
        """Retarget to the month containing *d*; view unchanged."""
        return replace(self, year=d.year, month=d.month - 1)

    def contains(self, d: date) -> bool:
        return (d.year, d.month - 1) == (self.year, self.month)
