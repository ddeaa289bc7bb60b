from typing import List

from league_fairness.models.enums import FairnessRating, ScoreTrend
from league_fairness.models.fairness import TeamSeasonalFairness

TREND_TOLERANCE = 0.1


def fairness_rating(fairness_score: float) -> FairnessRating:
    if fairness_score >= 80:
        return FairnessRating.EXCELLENT
    if fairness_score >= 60:
        return FairnessRating.MODERATE
    return FairnessRating.POOR


def score_trend(average_score: float, overall_average: float) -> ScoreTrend:
    """Position of a team's average relative to the league average."""
    diff = average_score - overall_average
    if abs(diff) < TREND_TOLERANCE:
        return ScoreTrend.LEVEL
    return ScoreTrend.ABOVE if diff > 0 else ScoreTrend.BELOW


def order_for_report(per_team: List[TeamSeasonalFairness]) -> List[TeamSeasonalFairness]:
    """Teams with a deficit first, then by ascending average score."""
    return sorted(
        per_team,
        key=lambda t: (t.fairness_deficit <= 0, t.average_score, t.team_id),
    )
