# league_fairness/utils/misc_utils.py
import re
from typing import Optional

_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")
_VENUE_PREFIX = "sporthal "


def time_to_minutes(value: Optional[str]) -> Optional[int]:
    """Converts "HH:MM" (or "HH:MM:SS") into minutes since midnight, None if malformed."""
    if not value or not isinstance(value, str):
        return None
    match = _TIME_PATTERN.match(value.strip())
    if not match:
        return None
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        return None
    return hours * 60 + minutes


def label_start(label: str) -> str:
    """Start part of a timeslot label such as "19:00-20:00"."""
    return label.split("-", 1)[0].strip()


def normalize_venue_name(name: Optional[str]) -> str:
    """Lowercases, collapses whitespace and strips a leading "Sporthal " token."""
    if not name or not isinstance(name, str):
        return ""
    collapsed = re.sub(r"\s+", " ", name).strip().lower()
    if collapsed.startswith(_VENUE_PREFIX):
        collapsed = collapsed[len(_VENUE_PREFIX):].strip()
    return collapsed
