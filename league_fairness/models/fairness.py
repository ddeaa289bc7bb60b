from typing import List

from pydantic import BaseModel, ConfigDict, Field

from league_fairness.scoring.policy import POLICY_VERSION


class SlotScore(BaseModel):
    """Preference satisfaction of one team for one slot."""

    model_config = ConfigDict(frozen=True)

    score: float = Field(..., ge=0, le=3)
    matched_dimensions: int = Field(0, ge=0, le=3)
    provided_dimensions: int = Field(0, ge=0, le=3)


class FallbackEvent(BaseModel):
    """Emitted when a team's slot scores were all zero and got replaced."""

    model_config = ConfigDict(frozen=True)

    team_id: int
    slot_count: int
    replacement_score: float


class TeamSeasonalFairness(BaseModel):
    """Per-team accumulation of preference scores over the season."""

    team_id: int
    team_name: str = ""
    total_matches: int = 0
    cumulative_score: float = 0.0
    average_score: float = 0.0
    expected_minimum_score: float
    fairness_deficit: float = 0.0


class SeasonalFairnessMetrics(BaseModel):
    """League-wide summary derived from the per-team records."""

    overall_average: float = 0.0
    standard_deviation: float = 0.0
    min_score: float = 0.0
    max_score: float = 0.0
    fairness_score: float = Field(100.0, ge=0, le=100)
    teams_needing_boost: List[int] = []
    recommendations: List[str] = []


class SeasonalFairnessReport(BaseModel):
    metrics: SeasonalFairnessMetrics
    policy_version: str = POLICY_VERSION
    per_team: List[TeamSeasonalFairness] = []
