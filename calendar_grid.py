"""Calendar grid builder.

Month view: always 6 rows x 7 columns = 42 cells, starting on the Sunday
on or before the 1st, with neighbouring-month days marked as outside.
Year view: per month, blank padding up to the first weekday followed by the
in-month days only. Outside days are never shown in the year view.

All date math is proleptic Gregorian via ``calendar`` and ``datetime``.
"""

import calendar
from datetime import date, timedelta

from daykey import day_key
from models import DayCell, GRID_CELLS


def days_in_month(year: int, month: int) -> int:
    """Number of days in 0-based *month* of *year*."""
    return calendar.monthrange(year, month + 1)[1]


def start_weekday(year: int, month: int) -> int:
    """Weekday of the 1st, with 0 = Sunday."""
    # calendar.weekday uses 0 = Monday
    return (calendar.weekday(year, month + 1, 1) + 1) % 7


def build_month_grid(year: int, month: int) -> list[DayCell]:
    """The 42 cells shown for 0-based *month* of *year*.

    Raises ValueError if the window would leave the range ``date`` supports.
    """
    if not 0 <= month <= 11:
        raise ValueError(f"month must be 0..11, got {month}")
    try:
        first = date(year, month + 1, 1)
        start = first - timedelta(days=start_weekday(year, month))
        cells = []
        for i in range(GRID_CELLS):
            d = start + timedelta(days=i)
            cells.append(DayCell(
                date=d,
                day_key=day_key(d),
                is_outside_month=(d.year, d.month) != (year, month + 1),
            ))
    except OverflowError as e:
        raise ValueError(f"{year}-{month + 1:02d} is outside the supported range") from e
    return cells


def supports_month(year: int, month: int) -> bool:
    """True if the month view of 0-based *month* of *year* can be built."""
    try:
        build_month_grid(year, month)
    except ValueError:
        return False
    return True


def build_month_days(year: int, month: int) -> list[DayCell | None]:
    """One year-view month: ``None`` placeholders then the in-month days."""
    cells: list[DayCell | None] = [None] * start_weekday(year, month)
    for day in range(1, days_in_month(year, month) + 1):
        d = date(year, month + 1, day)
        cells.append(DayCell(date=d, day_key=day_key(d)))
    return cells


def build_year_grid(year: int) -> list[list[DayCell | None]]:
    return [build_month_days(year, m) for m in range(12)]
