# tests/test_logging_setup.py
import logging

from loguru import logger

from league_fairness.config.settings import settings
from league_fairness.logging.setup import sensitive_data_filter, setup_logging


def test_sensitive_extra_values_are_masked():
    record = {
        "message": "connecting",
        "extra": {"supabase_key": "abcdefghijklmnop", "team_id": 3, "token": "short"},
    }
    assert sensitive_data_filter(record) is True
    assert record["extra"]["supabase_key"] == "abcd****mnop"
    assert record["extra"]["token"] == "********"
    assert record["extra"]["team_id"] == 3


def test_supabase_key_is_removed_from_messages(monkeypatch):
    monkeypatch.setattr(settings, "supabase_key", "super-secret-anon-key")
    record = {"message": "using super-secret-anon-key", "extra": {}}
    sensitive_data_filter(record)
    assert record["message"] == "using ********"


def test_standard_logging_is_routed_to_loguru():
    setup_logging()
    messages = []
    handler_id = logger.add(messages.append, level="INFO", format="{message}")
    try:
        logging.getLogger("httpx").warning("HTTP Request: GET /rest/v1/teams")
    finally:
        logger.remove(handler_id)
    assert any("/rest/v1/teams" in m for m in messages)
