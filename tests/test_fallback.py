# tests/test_fallback.py
from loguru import logger

from league_fairness.scoring.fallback import apply_adaptive_fallback


def test_all_zero_series_becomes_threes():
    events = []
    result = apply_adaptive_fallback(11, [0, 0, 0, 0], sink=events.append)
    assert result == [3.0, 3.0, 3.0, 3.0]
    assert len(events) == 1
    assert events[0].team_id == 11
    assert events[0].slot_count == 4


def test_series_with_a_non_zero_entry_is_unchanged():
    events = []
    scores = [0, 0, 1.5, 0]
    result = apply_adaptive_fallback(11, scores, sink=events.append)
    assert result == scores
    assert result is not scores
    assert events == []


def test_empty_series_is_left_alone():
    events = []
    assert apply_adaptive_fallback(11, [], sink=events.append) == []
    assert events == []


def test_default_sink_logs_a_warning():
    messages = []
    handler_id = logger.add(messages.append, level="WARNING", format="{message}")
    try:
        apply_adaptive_fallback(12, [0.0, 0.0])
    finally:
        logger.remove(handler_id)
    assert len(messages) == 1
    assert "Team 12" in messages[0]
