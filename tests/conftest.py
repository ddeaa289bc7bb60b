# tests/conftest.py
import pytest

from league_fairness.models.match import MatchRecord
from league_fairness.models.team import Team
from league_fairness.models.venue import Venue
from league_fairness.scoring.venue_directory import VenueDirectory


@pytest.fixture
def venues():
    """Venue list as stored in the season configuration."""
    return [
        Venue(venue_id=5, name="Sporthal Dageraad"),
        Venue(venue_id=7, venue_name="Vlasschaard"),
    ]


@pytest.fixture
def directory(venues):
    return VenueDirectory(venues)


@pytest.fixture
def make_team():
    def _make(team_id, prefs=None, name=None):
        return Team(
            team_id=team_id,
            team_name=name or f"Team {team_id}",
            preferred_play_moments=prefs,
        )

    return _make


@pytest.fixture
def make_match():
    """Builds a regular-season match; kickoff as naive local time."""
    counter = {"next": 1}

    def _make(home, away, kickoff, location="Sporthal Dageraad", **flags):
        match_id = counter["next"]
        counter["next"] += 1
        return MatchRecord(
            match_id=match_id,
            home_team_id=home,
            away_team_id=away,
            match_date=kickoff,
            location=location,
            **flags,
        )

    return _make

