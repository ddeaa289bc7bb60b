# tests/test_normalizer.py
import pytest
from pydantic import ValidationError

from league_fairness.models.team import NormalizedPreferences, Team
from league_fairness.normalization.normalizer import PreferenceNormalizer


@pytest.fixture
def normalizer():
    return PreferenceNormalizer()


class TestDayNormalization:
    def test_dutch_english_and_numeric_days(self, normalizer, make_team):
        team = make_team(1, {"days": ["Maandag", "di", 3, "thursday", " ZO ", "5"]})
        prefs = normalizer.normalize_team(team)
        assert prefs.days == frozenset({1, 2, 3, 4, 7, 5})

    def test_unknown_and_out_of_range_days_are_dropped(self, normalizer, make_team):
        team = make_team(1, {"days": ["someday", 0, 8, True, None, {"x": 1}, "wo"]})
        prefs = normalizer.normalize_team(team)
        assert prefs.days == frozenset({3})

    def test_only_unknown_days_collapse_to_absent(self, normalizer, make_team):
        prefs = normalizer.normalize_team(make_team(1, {"days": ["never", 12]}))
        assert prefs.days is None
        assert prefs.preference_count == 0

    def test_superscript_digits_are_not_days(self, normalizer, make_team):
        prefs = normalizer.normalize_team(make_team(1, {"days": ["²", "ma"]}))
        assert prefs.days == frozenset({1})


class TestOtherDimensions:
    def test_timeslots_are_lowercased_and_trimmed(self, normalizer, make_team):
        prefs = normalizer.normalize_team(
            make_team(1, {"timeslots": ["  19:00-20:00 ", "Late Evening", ""]})
        )
        assert prefs.timeslots == frozenset({"19:00-20:00", "late evening"})

    def test_venues_keep_numeric_ids_only(self, normalizer, make_team):
        prefs = normalizer.normalize_team(
            make_team(1, {"venues": [5, "7", "Dageraad", 2.0, 2.5, None]})
        )
        assert prefs.venues == frozenset({5, 7, 2})

    def test_superscript_digits_are_not_venue_ids(self, normalizer, make_team):
        prefs = normalizer.normalize_team(make_team(1, {"venues": ["²", 5]}))
        assert prefs.venues == frozenset({5})

    def test_odd_digit_strings_do_not_break_a_season(self, normalizer, make_team):
        teams = [make_team(1, {"days": ["³"], "venues": ["¹"]}), make_team(2, {"days": [2]})]
        result = normalizer.normalize(teams)
        assert result[1].preference_count == 0
        assert result[2].days == frozenset({2})

    def test_empty_lists_mean_no_preference(self, normalizer, make_team):
        prefs = normalizer.normalize_team(
            make_team(1, {"days": [], "timeslots": [], "venues": [], "notes": "flexibel"})
        )
        assert prefs == NormalizedPreferences()
        assert prefs.preference_count == 0


class TestNormalize:
    def test_preference_count_counts_configured_dimensions(self, normalizer, make_team):
        teams = [
            make_team(1, {"days": [1], "timeslots": ["19:00"], "venues": [5]}),
            make_team(2, {"days": ["ma"], "venues": []}),
            make_team(3),
        ]
        result = normalizer.normalize(teams)
        assert {tid: p.preference_count for tid, p in result.items()} == {1: 3, 2: 1, 3: 0}

    def test_malformed_payloads_degrade_gracefully(self, normalizer):
        teams = [
            Team(team_id=1, team_name="A", preferred_play_moments="maandag"),
            Team(team_id=2, team_name="B", preferred_play_moments={"days": "maandag"}),
            Team(team_id=3, team_name=None, preferred_play_moments={"unexpected": [1]}),
        ]
        result = normalizer.normalize(teams)
        assert all(p.preference_count == 0 for p in result.values())
        assert set(result) == {1, 2, 3}

    def test_normalized_preferences_are_immutable(self, normalizer, make_team):
        prefs = normalizer.normalize_team(make_team(1, {"days": [1]}))
        with pytest.raises(ValidationError):
            prefs.days = frozenset({2})
