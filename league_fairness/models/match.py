from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MatchSlot(BaseModel):
    """A day/time/venue assignment, either a candidate or a played match."""

    day_of_week: int = Field(..., ge=1, le=7, description="ISO weekday, Monday = 1.")
    start_time: str = Field(..., description="Kickoff as HH:MM.")
    end_time: Optional[str] = None
    venue_name: Optional[str] = None
    # Set when the slot comes from the season's timeslot inventory
    timeslot_id: Optional[int] = None

    @property
    def label(self) -> str:
        """The "start-end" label used by stored timeslot preferences."""
        if self.end_time:
            return f"{self.start_time}-{self.end_time}"
        return self.start_time


class MatchRecord(BaseModel):
    """A match row from the store. Only the fields needed for fairness are kept."""

    model_config = ConfigDict(extra="ignore")

    match_id: int
    home_team_id: Optional[int] = None
    away_team_id: Optional[int] = None
    match_date: Optional[datetime] = None
    location: Optional[str] = None
    is_cup_match: bool = False
    is_playoff_match: bool = False

    @field_validator("is_cup_match", "is_playoff_match", mode="before")
    @classmethod
    def _null_is_false(cls, value: Any) -> Any:
        return False if value is None else value

    @property
    def is_regular_season(self) -> bool:
        return not (self.is_cup_match or self.is_playoff_match)

    @property
    def has_both_teams(self) -> bool:
        return self.home_team_id is not None and self.away_team_id is not None
