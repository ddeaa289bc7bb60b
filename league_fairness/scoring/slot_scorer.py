from typing import List, Optional, Sequence

from loguru import logger

from league_fairness.models.fairness import SlotScore
from league_fairness.models.match import MatchSlot
from league_fairness.models.team import NormalizedPreferences
from league_fairness.scoring.fallback import FallbackSink, apply_adaptive_fallback
from league_fairness.scoring.policy import (
    FUZZY_TIME_TOLERANCE_MINUTES,
    NO_PREFERENCE_SCORE,
    SCORE_TABLE,
)
from league_fairness.scoring.venue_directory import VenueDirectory
from league_fairness.utils.misc_utils import label_start, time_to_minutes


class SlotScorer:
    """Scores how well a match slot fits a team's normalized preferences."""

    def __init__(self, tolerance_minutes: int = FUZZY_TIME_TOLERANCE_MINUTES):
        self.tolerance_minutes = tolerance_minutes

    def score(
        self,
        prefs: Optional[NormalizedPreferences],
        slot: MatchSlot,
        venues: VenueDirectory,
    ) -> SlotScore:
        """Returns the 0-3 preference score of ``slot`` for one team.

        Teams without preferences always score the maximum. Otherwise each
        configured dimension (day, timeslot, venue) that matches counts once and
        the (provided, matched) pair is looked up in the policy table.
        """
        if prefs is None or prefs.preference_count == 0:
            return SlotScore(
                score=NO_PREFERENCE_SCORE, matched_dimensions=0, provided_dimensions=0
            )

        matched = 0
        if prefs.days and slot.day_of_week in prefs.days:
            matched += 1
        if prefs.timeslots and self._timeslot_matches(prefs.timeslots, slot):
            matched += 1
        if prefs.venues and self._venue_matches(prefs.venues, slot, venues):
            matched += 1

        provided = prefs.preference_count
        score = SCORE_TABLE.get((provided, matched), 0.0)
        logger.trace(
            f"Slot {slot.label} day {slot.day_of_week} @ {slot.venue_name}: "
            f"matched {matched}/{provided} -> {score}"
        )
        return SlotScore(
            score=score, matched_dimensions=matched, provided_dimensions=provided
        )

    def score_series(
        self,
        team_id: int,
        prefs: Optional[NormalizedPreferences],
        slots: Sequence[MatchSlot],
        venues: VenueDirectory,
        sink: Optional[FallbackSink] = None,
    ) -> List[float]:
        """Scores a team against every candidate slot, with the adaptive fallback applied."""
        scores = [self.score(prefs, slot, venues).score for slot in slots]
        return apply_adaptive_fallback(team_id, scores, sink)

    def _timeslot_matches(self, timeslots, slot: MatchSlot) -> bool:
        start = slot.start_time.lower().strip()
        if start in timeslots or slot.label.lower().strip() in timeslots:
            return True
        # Preferences may store timeslot ids instead of labels
        if slot.timeslot_id is not None and str(slot.timeslot_id) in timeslots:
            return True

        slot_minutes = time_to_minutes(start)
        if slot_minutes is None:
            return False
        for preferred in timeslots:
            preferred_minutes = time_to_minutes(label_start(preferred))
            if preferred_minutes is None:
                continue
            if abs(slot_minutes - preferred_minutes) <= self.tolerance_minutes:
                return True
        return False

    def _venue_matches(self, venue_ids, slot: MatchSlot, venues: VenueDirectory) -> bool:
        venue_id = venues.resolve(slot.venue_name)
        if venue_id is None:
            return False
        return venue_id in venue_ids
