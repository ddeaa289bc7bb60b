from enum import Enum, IntEnum


class Weekday(IntEnum):
    """ISO day-of-week codes used for day preferences and match slots."""

    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6
    SUNDAY = 7


class FairnessRating(str, Enum):
    EXCELLENT = "EXCELLENT"  # 80 and above
    MODERATE = "MODERATE"  # 60 up to 80
    POOR = "POOR"


class ScoreTrend(str, Enum):
    ABOVE = "ABOVE"
    LEVEL = "LEVEL"
    BELOW = "BELOW"
