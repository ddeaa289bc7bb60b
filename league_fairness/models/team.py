# league_fairness/models/team.py
from typing import Any, FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, computed_field, field_validator


class PreferredPlayMoments(BaseModel):
    """Raw preference payload as stored on a team. Entries are not validated here."""

    model_config = ConfigDict(extra="ignore")

    days: Optional[List[Any]] = None
    timeslots: Optional[List[Any]] = None
    venues: Optional[List[Any]] = None
    notes: Optional[str] = None

    @field_validator("days", "timeslots", "venues", mode="before")
    @classmethod
    def _lists_only(cls, value: Any) -> Optional[List[Any]]:
        # Anything that is not a list is treated as "not configured"
        if isinstance(value, (list, tuple)):
            return list(value)
        return None

    @field_validator("notes", mode="before")
    @classmethod
    def _notes_as_text(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        return str(value)


class Team(BaseModel):
    """A team as read from the store, with its optional play-moment preferences."""

    model_config = ConfigDict(extra="ignore")

    team_id: int
    team_name: str = ""
    preferred_play_moments: Optional[PreferredPlayMoments] = None

    @field_validator("team_name", mode="before")
    @classmethod
    def _name_or_empty(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("preferred_play_moments", mode="before")
    @classmethod
    def _mapping_or_none(cls, value: Any) -> Any:
        # Payloads are free-form JSON; non-mappings mean no preferences
        if isinstance(value, (dict, PreferredPlayMoments)):
            return value
        return None


class NormalizedPreferences(BaseModel):
    """Canonical preferences of a single team. A missing dimension means no preference."""

    model_config = ConfigDict(frozen=True)

    days: Optional[FrozenSet[int]] = None
    timeslots: Optional[FrozenSet[str]] = None
    venues: Optional[FrozenSet[int]] = None

    @computed_field  # type: ignore[misc]
    @property
    def preference_count(self) -> int:
        """Number of configured dimensions (0-3)."""
        return sum(
            1 for dimension in (self.days, self.timeslots, self.venues) if dimension
        )
