from typing import Iterable, List

# weekends only exist on the calendar grid, never on a class
WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday")


def days_intersect(a: Iterable[str], b: Iterable[str]) -> bool:
    """Exact day-name match, "Tue" != "Tuesday"."""
    return not set(a).isdisjoint(b)


def normalize_days(days: Iterable[str]) -> List[str]:
    """
    ["Friday","Monday","Monday"] -> ["Monday","Friday"]
    """
    picked = set()
    for d in days or []:
        if d not in WEEKDAYS:
            raise ValueError(f"Invalid day: {d!r}. Choose from {', '.join(WEEKDAYS)}.")
        picked.add(d)
    if not picked:
        raise ValueError("Select at least one day.")
    return [d for d in WEEKDAYS if d in picked]
