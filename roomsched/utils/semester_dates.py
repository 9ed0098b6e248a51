from datetime import MAXYEAR, MINYEAR, date, timedelta
from typing import Tuple

# month each term opens on the 1st
START_MONTH = {
    "Spring": 1,
    "Summer I": 5,
    "Summer II": 6,
    "Fall": 8,
}

MIN_YEAR = MINYEAR
MAX_YEAR = MAXYEAR

SUMMER_LENGTH_DAYS = 60
REGULAR_LENGTH_DAYS = 120


def default_dates(name: str, year: int) -> Tuple[date, date]:
    """
    ("Fall", 2025) -> (2025-08-01, 2025-11-29)
    """
    if name not in START_MONTH:
        raise ValueError(f"Unknown semester name: {name!r}")
    start = date(year, START_MONTH[name], 1)
    length = SUMMER_LENGTH_DAYS if name.startswith("Summer") else REGULAR_LENGTH_DAYS
    return start, start + timedelta(days=length)
