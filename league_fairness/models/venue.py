from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Venue(BaseModel):
    """A venue entry from the season configuration."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    # Older season configs store the id as "id"
    venue_id: int = Field(..., validation_alias=AliasChoices("venue_id", "id"))
    name: Optional[str] = None
    venue_name: Optional[str] = None
