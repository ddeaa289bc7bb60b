# tests/test_supabase_client.py
from types import SimpleNamespace
from unittest.mock import MagicMock

import httpx
import pytest
from postgrest.exceptions import APIError
from tenacity import wait_none

from league_fairness.storage import supabase_client
from league_fairness.storage.supabase_client import (
    fetch_regular_season_matches,
    fetch_teams,
    fetch_venues,
    load_season_inputs,
)


class FakeQuery:
    """Chainable stand-in for a PostgREST request builder."""

    def __init__(self, data=None, error=None):
        self.data = data
        self.error = error
        self.calls = []

    def __getattr__(self, name):
        def _chain(*args, **kwargs):
            self.calls.append((name, args))
            return self

        return _chain

    async def execute(self):
        if self.error is not None:
            raise self.error
        return SimpleNamespace(data=self.data)


def client_for(**tables):
    client = MagicMock()
    client.table.side_effect = lambda name: tables[name]
    return client


SEASON_ROW = {
    "setting_value": {
        "venues": [
            {"venue_id": 5, "name": "Sporthal Dageraad", "address": "Straat 1"},
            {"id": 7, "venue_name": "Vlasschaard"},
            {"name": "no id"},
        ]
    }
}


@pytest.mark.asyncio
async def test_fetch_teams_parses_preferences():
    teams_query = FakeQuery(
        data=[
            {"team_id": 1, "team_name": "A", "preferred_play_moments": {"days": ["ma"]}},
            {"team_id": 2, "team_name": "B", "preferred_play_moments": None},
        ]
    )
    teams = await fetch_teams(client_for(teams=teams_query))

    assert [t.team_id for t in teams] == [1, 2]
    assert teams[0].preferred_play_moments.days == ["ma"]
    assert teams[1].preferred_play_moments is None


@pytest.mark.asyncio
async def test_fetch_matches_filters_cup_matches_and_skips_malformed_rows():
    matches_query = FakeQuery(
        data=[
            {
                "match_id": 1,
                "match_date": "2024-09-02T19:00:00+00:00",
                "location": "Sporthal Dageraad",
                "home_team_id": 1,
                "away_team_id": 2,
                "is_cup_match": None,
                "is_playoff_match": False,
            },
            {"match_id": "not-a-number"},
        ]
    )
    matches = await fetch_regular_season_matches(client_for(matches=matches_query))

    assert [m.match_id for m in matches] == [1]
    assert matches[0].is_regular_season
    assert ("or_", ("is_cup_match.is.null,is_cup_match.eq.false",)) in matches_query.calls


@pytest.mark.asyncio
async def test_fetch_venues_reads_season_config():
    venues = await fetch_venues(client_for(application_settings=FakeQuery(data=[SEASON_ROW])))
    assert [v.venue_id for v in venues] == [5, 7]


@pytest.mark.asyncio
async def test_fetch_venues_without_season_data():
    venues = await fetch_venues(client_for(application_settings=FakeQuery(data=[])))
    assert venues == []


@pytest.mark.asyncio
async def test_api_error_returns_none():
    error = APIError({"message": "permission denied", "code": "42501"})
    assert await fetch_teams(client_for(teams=FakeQuery(error=error))) is None


@pytest.mark.asyncio
async def test_load_season_inputs_fails_when_any_fetch_fails():
    error = APIError({"message": "boom", "code": "500"})
    client = client_for(
        teams=FakeQuery(data=[]),
        matches=FakeQuery(error=error),
        application_settings=FakeQuery(data=[SEASON_ROW]),
    )
    assert await load_season_inputs(client) is None


@pytest.mark.asyncio
async def test_load_season_inputs():
    client = client_for(
        teams=FakeQuery(data=[{"team_id": 1, "team_name": "A"}]),
        matches=FakeQuery(data=[]),
        application_settings=FakeQuery(data=[SEASON_ROW]),
    )
    teams, matches, venues = await load_season_inputs(client)
    assert len(teams) == 1
    assert matches == []
    assert len(venues) == 2


@pytest.mark.asyncio
async def test_transport_errors_are_retried():
    attempts = []

    class FlakyQuery(FakeQuery):
        async def execute(self):
            attempts.append(1)
            if len(attempts) < 3:
                raise httpx.ConnectError("connection reset")
            return SimpleNamespace(data=[{"team_id": 3}])

    execute = supabase_client._execute.retry_with(wait=wait_none())
    response = await execute(FlakyQuery())
    assert response.data == [{"team_id": 3}]
    assert len(attempts) == 3
