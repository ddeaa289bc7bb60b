from typing import Any, Dict, FrozenSet, Iterable, List, Optional

from loguru import logger

from league_fairness.models.enums import Weekday
from league_fairness.models.team import NormalizedPreferences, Team


class PreferenceNormalizer:
    """Converts stored play-moment preferences into NormalizedPreferences."""

    def __init__(self):
        # Key: lowercased day token, Value: ISO weekday
        self.day_aliases: Dict[str, Weekday] = {
            # Dutch
            "maandag": Weekday.MONDAY,
            "ma": Weekday.MONDAY,
            "dinsdag": Weekday.TUESDAY,
            "di": Weekday.TUESDAY,
            "woensdag": Weekday.WEDNESDAY,
            "wo": Weekday.WEDNESDAY,
            "donderdag": Weekday.THURSDAY,
            "do": Weekday.THURSDAY,
            "vrijdag": Weekday.FRIDAY,
            "vr": Weekday.FRIDAY,
            "zaterdag": Weekday.SATURDAY,
            "za": Weekday.SATURDAY,
            "zondag": Weekday.SUNDAY,
            "zo": Weekday.SUNDAY,
            # English
            "monday": Weekday.MONDAY,
            "mon": Weekday.MONDAY,
            "tuesday": Weekday.TUESDAY,
            "tue": Weekday.TUESDAY,
            "wednesday": Weekday.WEDNESDAY,
            "wed": Weekday.WEDNESDAY,
            "thursday": Weekday.THURSDAY,
            "thu": Weekday.THURSDAY,
            "friday": Weekday.FRIDAY,
            "fri": Weekday.FRIDAY,
            "saturday": Weekday.SATURDAY,
            "sat": Weekday.SATURDAY,
            "sunday": Weekday.SUNDAY,
            "sun": Weekday.SUNDAY,
        }
        logger.debug(
            f"PreferenceNormalizer initialized with {len(self.day_aliases)} day aliases."
        )

    def normalize(self, raw_teams: Iterable[Team]) -> Dict[int, NormalizedPreferences]:
        """Normalizes the preferences of every team, keyed by team id.

        Teams without usable preferences are included with preference_count 0.
        """
        normalized: Dict[int, NormalizedPreferences] = {}
        for team in raw_teams:
            normalized[team.team_id] = self.normalize_team(team)

        configured = sum(1 for p in normalized.values() if p.preference_count > 0)
        logger.info(
            f"Normalized preferences for {len(normalized)} teams ({configured} with preferences)."
        )
        return normalized

    def normalize_team(self, team: Team) -> NormalizedPreferences:
        prefs = team.preferred_play_moments
        if prefs is None:
            return NormalizedPreferences()

        days = self._collect(prefs.days, self._map_day, team, "day")
        timeslots = self._collect(prefs.timeslots, self._map_timeslot, team, "timeslot")
        venues = self._collect(prefs.venues, self._map_venue_id, team, "venue")
        return NormalizedPreferences(days=days, timeslots=timeslots, venues=venues)

    def _collect(
        self, raw_values: Optional[List[Any]], mapper, team: Team, dimension: str
    ) -> Optional[FrozenSet]:
        if not raw_values:
            return None
        mapped = set()
        for raw_value in raw_values:
            value = mapper(raw_value)
            if value is None:
                logger.debug(
                    f"Dropping unrecognized {dimension} preference {raw_value!r} for team {team.team_id}"
                )
                continue
            mapped.add(value)
        # An empty dimension means "no preference", never "matches nothing"
        return frozenset(mapped) or None

    def _map_day(self, raw_day: Any) -> Optional[int]:
        if isinstance(raw_day, bool):
            return None
        if isinstance(raw_day, int):
            return raw_day if 1 <= raw_day <= 7 else None
        if isinstance(raw_day, float):
            return int(raw_day) if raw_day.is_integer() and 1 <= raw_day <= 7 else None
        if not isinstance(raw_day, str):
            return None
        token = raw_day.lower().strip()
        if token.isdecimal():
            return self._map_day(int(token))
        day = self.day_aliases.get(token)
        return int(day) if day is not None else None

    def _map_timeslot(self, raw_label: Any) -> Optional[str]:
        if isinstance(raw_label, bool) or not isinstance(raw_label, (str, int)):
            return None
        label = str(raw_label).lower().strip()
        return label or None

    def _map_venue_id(self, raw_venue: Any) -> Optional[int]:
        if isinstance(raw_venue, bool):
            return None
        if isinstance(raw_venue, int):
            return raw_venue
        if isinstance(raw_venue, float) and raw_venue.is_integer():
            return int(raw_venue)
        if isinstance(raw_venue, str) and raw_venue.strip().isdecimal():
            return int(raw_venue.strip())
        return None
