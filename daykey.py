"""Day Key codec: ``YYYY-MM-DD`` strings identifying a local calendar day.

Month arguments are 0-based to match application state; the key itself
carries the 1-based month.
"""

import re
from datetime import date

_KEY_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


def day_key(d: date) -> str:
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def parse_day_key(key: str) -> date:
    """Convert a Day Key back into a date. Raises ValueError on bad input."""
    m = _KEY_RE.match(key) if isinstance(key, str) else None
    if m is None:
        raise ValueError(f"Not a day key: {key!r}")
    y, mo, d = (int(g) for g in m.groups())
    return date(y, mo, d)


def year_prefix(year: int) -> str:
    return f"{year:04d}-"


def month_prefix(year: int, month: int) -> str:
    return f"{year:04d}-{month + 1:02d}-"
