from typing import Dict, Iterable, Optional

from loguru import logger

from league_fairness.models.venue import Venue
from league_fairness.utils.misc_utils import normalize_venue_name


class VenueDirectory:
    """Resolves free-text venue names (as stored on matches) to venue ids."""

    def __init__(self, venues: Iterable[Venue] = ()):
        self._by_name: Dict[str, int] = {}
        for venue in venues:
            for raw_name in (venue.name, venue.venue_name):
                key = normalize_venue_name(raw_name)
                if key:
                    # First venue listed keeps an ambiguous name
                    self._by_name.setdefault(key, venue.venue_id)
        logger.debug(f"VenueDirectory built with {len(self._by_name)} name keys.")

    def resolve(self, venue_name: Optional[str]) -> Optional[int]:
        key = normalize_venue_name(venue_name)
        if not key:
            return None
        return self._by_name.get(key)
