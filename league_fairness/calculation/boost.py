from typing import List, Optional

from league_fairness.models.fairness import TeamSeasonalFairness
from league_fairness.scoring.policy import (
    LOW_AVERAGE_BONUS,
    LOW_AVERAGE_RATIO,
    MAX_BASE_BOOST,
    UNPLAYED_TEAM_WEIGHT,
)


def _find(team_id: int, per_team: List[TeamSeasonalFairness]) -> Optional[TeamSeasonalFairness]:
    return next((t for t in per_team if t.team_id == team_id), None)


def league_average(per_team: List[TeamSeasonalFairness]) -> float:
    """Average score over the teams that have played at least one match."""
    played = [t.average_score for t in per_team if t.total_matches > 0]
    return sum(played) / len(played) if played else 0.0


def calculate_fairness_boost(team_id: int, per_team: List[TeamSeasonalFairness]) -> float:
    """Multiplier a scheduler applies to a team's slot scores.

    Returns 0 for unknown teams. Otherwise ``1 + deficit`` capped at 2, plus 0.5
    when the team averages below 80% of the league average.
    """
    team = _find(team_id, per_team)
    if team is None:
        return 0.0

    boost = min(MAX_BASE_BOOST, 1.0 + team.fairness_deficit)
    if team.average_score < LOW_AVERAGE_RATIO * league_average(per_team):
        boost += LOW_AVERAGE_BONUS
    return boost


def scheduling_weight(team_id: int, per_team: List[TeamSeasonalFairness]) -> float:
    """Boost as used when previewing a schedule.

    Teams that are known but have not played yet have no history to boost from
    and get a fixed weight instead.
    """
    team = _find(team_id, per_team)
    if team is not None and team.total_matches == 0:
        return UNPLAYED_TEAM_WEIGHT
    return calculate_fairness_boost(team_id, per_team)
