import math
from datetime import timedelta, tzinfo
from typing import Dict, Iterable, List, Optional
from zoneinfo import ZoneInfo

from loguru import logger

from league_fairness.models.fairness import (
    SeasonalFairnessMetrics,
    SeasonalFairnessReport,
    TeamSeasonalFairness,
)
from league_fairness.models.match import MatchRecord, MatchSlot
from league_fairness.models.team import Team
from league_fairness.models.venue import Venue
from league_fairness.normalization.normalizer import PreferenceNormalizer
from league_fairness.scoring.policy import (
    DEFICIT_PENALTY_FACTOR,
    EXPECTED_MINIMUM_SCORE,
    HIGH_SPREAD_STD_DEV,
    MAX_DEFICIT_PENALTY,
    MAX_SPREAD_PENALTY,
    SPREAD_PENALTY_FACTOR,
)
from league_fairness.scoring.slot_scorer import SlotScorer
from league_fairness.scoring.venue_directory import VenueDirectory

DEFAULT_TIMEZONE = "Europe/Brussels"
DEFAULT_MATCH_DURATION = timedelta(minutes=60)

SEASON_NOT_STARTED = (
    "No regular-season matches have been played yet; all teams start level."
)


class SeasonalFairnessAggregator:
    """Re-scores a season's regular matches and derives fairness statistics.

    The computation is rebuilt from scratch on every call and does not depend on
    the order in which matches are supplied.
    """

    def __init__(
        self,
        normalizer: Optional[PreferenceNormalizer] = None,
        scorer: Optional[SlotScorer] = None,
        league_timezone: Optional[tzinfo] = None,
        match_duration: timedelta = DEFAULT_MATCH_DURATION,
    ):
        self.normalizer = normalizer or PreferenceNormalizer()
        self.scorer = scorer or SlotScorer()
        self.league_timezone = league_timezone or ZoneInfo(DEFAULT_TIMEZONE)
        self.match_duration = match_duration

    def compute_fairness(
        self,
        teams: List[Team],
        matches: Iterable[MatchRecord],
        venues: Iterable[Venue],
    ) -> SeasonalFairnessReport:
        preferences = self.normalizer.normalize(teams)
        directory = VenueDirectory(venues)
        names = {team.team_id: team.team_name for team in teams}

        qualifying = sorted(
            (m for m in matches if self._qualifies(m)), key=lambda m: m.match_id
        )
        if not qualifying:
            logger.info("No qualifying regular-season matches, returning baseline.")
            return self._baseline(teams)

        totals: Dict[int, float] = {team_id: 0.0 for team_id in names}
        counts: Dict[int, int] = {team_id: 0 for team_id in names}

        for match in qualifying:
            slot = self.slot_for_match(match)
            for team_id in (match.home_team_id, match.away_team_id):
                if team_id not in names:
                    continue
                result = self.scorer.score(preferences.get(team_id), slot, directory)
                totals[team_id] += result.score
                counts[team_id] += 1

        if not any(counts.values()):
            logger.info("Qualifying matches involve none of the given teams, returning baseline.")
            return self._baseline(teams)

        per_team = [
            self._team_record(team_id, names[team_id], totals[team_id], counts[team_id])
            for team_id in sorted(names)
        ]
        metrics = self._metrics(per_team)
        logger.success(
            f"Seasonal fairness computed over {len(qualifying)} matches: "
            f"score {metrics.fairness_score:.1f}, {len(metrics.teams_needing_boost)} teams need a boost."
        )
        return SeasonalFairnessReport(metrics=metrics, per_team=per_team)

    def slot_for_match(self, match: MatchRecord) -> MatchSlot:
        """Derives the played slot. Matches only store a kickoff, so the end is nominal."""
        kickoff = match.match_date
        if kickoff.tzinfo is not None:
            kickoff = kickoff.astimezone(self.league_timezone)
        end = kickoff + self.match_duration
        return MatchSlot(
            day_of_week=kickoff.isoweekday(),
            start_time=kickoff.strftime("%H:%M"),
            end_time=end.strftime("%H:%M"),
            venue_name=match.location,
        )

    def _qualifies(self, match: MatchRecord) -> bool:
        return (
            match.is_regular_season
            and match.has_both_teams
            and match.match_date is not None
        )

    def _team_record(
        self, team_id: int, team_name: str, cumulative: float, matches: int
    ) -> TeamSeasonalFairness:
        average = cumulative / matches if matches else 0.0
        deficit = max(0.0, EXPECTED_MINIMUM_SCORE - average) if matches else 0.0
        return TeamSeasonalFairness(
            team_id=team_id,
            team_name=team_name,
            total_matches=matches,
            cumulative_score=cumulative,
            average_score=average,
            expected_minimum_score=EXPECTED_MINIMUM_SCORE,
            fairness_deficit=deficit,
        )

    def _metrics(self, per_team: List[TeamSeasonalFairness]) -> SeasonalFairnessMetrics:
        played = [t for t in per_team if t.total_matches > 0]
        averages = [t.average_score for t in played]

        overall = sum(averages) / len(averages)
        variance = sum((a - overall) ** 2 for a in averages) / len(averages)
        std_dev = math.sqrt(variance)
        min_score, max_score = min(averages), max(averages)
        total_deficit = sum(t.fairness_deficit for t in per_team)

        spread_penalty = min(MAX_SPREAD_PENALTY, (max_score - min_score) * SPREAD_PENALTY_FACTOR)
        deficit_penalty = min(MAX_DEFICIT_PENALTY, total_deficit * DEFICIT_PENALTY_FACTOR)
        fairness_score = max(0.0, min(100.0, 100.0 - spread_penalty - deficit_penalty))

        needing_boost = [
            t.team_id
            for t in played
            if t.average_score < overall or t.fairness_deficit > 0
        ]

        return SeasonalFairnessMetrics(
            overall_average=overall,
            standard_deviation=std_dev,
            min_score=min_score,
            max_score=max_score,
            fairness_score=fairness_score,
            teams_needing_boost=needing_boost,
            recommendations=self._recommendations(
                std_dev, played, total_deficit, needing_boost
            ),
        )

    def _recommendations(
        self,
        std_dev: float,
        played: List[TeamSeasonalFairness],
        total_deficit: float,
        needing_boost: List[int],
    ) -> List[str]:
        recommendations: List[str] = []
        if std_dev > HIGH_SPREAD_STD_DEV:
            recommendations.append(
                f"Preference satisfaction varies strongly between teams (standard deviation {std_dev:.2f}); "
                "prioritise under-served teams in the next rounds."
            )
        if total_deficit > 0:
            below = sum(1 for t in played if t.fairness_deficit > 0)
            recommendations.append(
                f"{below} team(s) average below the minimum of {EXPECTED_MINIMUM_SCORE:.1f}; "
                "review their preferences or the available timeslots."
            )
        if len(needing_boost) > len(played) / 2:
            recommendations.append(
                "More than half of the league is below par; the slot inventory may not fit team preferences."
            )
        if not recommendations:
            recommendations.append(
                "Preference satisfaction is evenly distributed across the league."
            )
        return recommendations

    def _baseline(self, teams: List[Team]) -> SeasonalFairnessReport:
        per_team = [
            self._team_record(team.team_id, team.team_name, 0.0, 0)
            for team in sorted(teams, key=lambda t: t.team_id)
        ]
        metrics = SeasonalFairnessMetrics(
            fairness_score=100.0,
            recommendations=[SEASON_NOT_STARTED],
        )
        return SeasonalFairnessReport(metrics=metrics, per_team=per_team)


def compute_fairness(
    teams: List[Team],
    matches: Iterable[MatchRecord],
    venues: Iterable[Venue],
) -> SeasonalFairnessReport:
    """Computes the seasonal fairness report with default policy and timezone."""
    return SeasonalFairnessAggregator().compute_fairness(teams, matches, venues)
