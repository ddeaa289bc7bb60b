# league_fairness/storage/supabase_client.py
from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar

import httpx
from loguru import logger
from postgrest import APIResponse
from postgrest.exceptions import APIError
from pydantic import BaseModel, ValidationError
from supabase import AsyncClient, create_async_client
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from league_fairness.config.settings import settings
from league_fairness.models.match import MatchRecord
from league_fairness.models.team import Team
from league_fairness.models.venue import Venue

ModelT = TypeVar("ModelT", bound=BaseModel)

SeasonInputs = Tuple[List[Team], List[MatchRecord], List[Venue]]

TEAM_COLUMNS = "team_id, team_name, preferred_play_moments"
MATCH_COLUMNS = (
    "match_id, match_date, location, home_team_id, away_team_id, "
    "is_cup_match, is_playoff_match"
)

# Module-level storage for the async client instance
_async_supabase_client: Optional[AsyncClient] = None


async def initialize_supabase() -> Optional[AsyncClient]:
    """Initializes the global ASYNC Supabase client and returns it."""
    global _async_supabase_client
    if _async_supabase_client:
        logger.debug("Async Supabase client already initialized.")
        return _async_supabase_client

    if not settings.supabase_url or not settings.supabase_key:
        logger.critical("Supabase URL or Key not configured in settings.")
        raise SystemExit("Supabase configuration missing.")

    logger.debug(
        f"Attempting to initialize Async Supabase client with URL: {settings.supabase_url}"
    )

    try:
        client: AsyncClient = await create_async_client(
            settings.supabase_url, settings.supabase_key
        )
        _async_supabase_client = client
        logger.success("Async Supabase client initialized successfully.")
        return client
    except Exception as e:
        logger.exception(f"Failed to initialize Async Supabase client: {e}")
        return None


@retry(
    stop=stop_after_attempt(settings.fetch_retry_attempts),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type(httpx.TransportError),
    reraise=True,
)
async def _execute(query) -> APIResponse:
    """Executes a PostgREST query, retrying transport failures."""
    return await query.execute()


def _parse_rows(rows: List[Dict[str, Any]], model: Type[ModelT], label: str) -> List[ModelT]:
    """Validates raw rows into models, skipping the ones that do not fit."""
    parsed: List[ModelT] = []
    for row in rows:
        try:
            parsed.append(model.model_validate(row))
        except ValidationError as e:
            logger.warning(f"Skipping malformed {label} row {row!r}: {e.error_count()} error(s)")
    return parsed


async def _fetch(query, model: Type[ModelT], label: str) -> Optional[List[ModelT]]:
    try:
        response = await _execute(query)
    except APIError as e:
        logger.error(f"Supabase API error fetching {label}: {e.message}")
        logger.debug(f"Full APIError details: {e}")
        return None
    except httpx.HTTPError as e:
        logger.error(f"Network error fetching {label} after retries: {e}")
        return None

    rows = response.data or []
    parsed = _parse_rows(rows, model, label)
    logger.info(f"Fetched {len(parsed)} {label} record(s) ({len(rows)} rows).")
    return parsed


async def fetch_teams(client: AsyncClient) -> Optional[List[Team]]:
    """Fetches all teams with their play-moment preferences."""
    query = client.table("teams").select(TEAM_COLUMNS).order("team_id")
    return await _fetch(query, Team, "team")


async def fetch_regular_season_matches(client: AsyncClient) -> Optional[List[MatchRecord]]:
    """Fetches non-cup matches. Playoff matches are filtered out during aggregation."""
    query = (
        client.table("matches")
        .select(MATCH_COLUMNS)
        .or_("is_cup_match.is.null,is_cup_match.eq.false")
        .order("match_date")
    )
    return await _fetch(query, MatchRecord, "match")


async def fetch_venues(client: AsyncClient) -> Optional[List[Venue]]:
    """Reads the venue list from the active season configuration."""
    query = (
        client.table("application_settings")
        .select("setting_value")
        .eq("setting_category", "season_data")
        .eq("setting_name", "main_config")
        .eq("is_active", True)
        .limit(1)
    )
    try:
        response = await _execute(query)
    except APIError as e:
        logger.error(f"Supabase API error fetching season data: {e.message}")
        return None
    except httpx.HTTPError as e:
        logger.error(f"Network error fetching season data after retries: {e}")
        return None

    if not response.data:
        logger.warning("No active season data found; venue preferences cannot be resolved.")
        return []

    setting_value = response.data[0].get("setting_value") or {}
    raw_venues = setting_value.get("venues") if isinstance(setting_value, dict) else None
    if not isinstance(raw_venues, list):
        logger.warning("Season data has no venue list.")
        return []
    venues = _parse_rows(raw_venues, Venue, "venue")
    logger.info(f"Fetched {len(venues)} venue(s) from season data.")
    return venues


async def load_season_inputs(client: AsyncClient) -> Optional[SeasonInputs]:
    """Fetches teams, matches and venues. Returns None if any of them failed."""
    teams = await fetch_teams(client)
    matches = await fetch_regular_season_matches(client)
    venues = await fetch_venues(client)
    if teams is None or matches is None or venues is None:
        logger.error("Could not load all season inputs from Supabase.")
        return None
    return teams, matches, venues
