"""Tests for configuration loading."""

from pathlib import Path

from scorekeeper.config import Config


def test_defaults(monkeypatch):
    for name in ("SCOREKEEPER_DATABASE_URL", "SCOREKEEPER_PORT", "SCOREKEEPER_JSON_LOGS"):
        monkeypatch.delenv(name, raising=False)
    config = Config.from_env()
    assert config.database_url == "sqlite:///./scorekeeper.db"
    assert config.port == 1965
    assert not config.json_logs
    assert config.games_key == "card_game_games"


def test_from_env(monkeypatch):
    monkeypatch.setenv("SCOREKEEPER_DATABASE_URL", "sqlite:///tmp/x.db")
    monkeypatch.setenv("SCOREKEEPER_PORT", "1966")
    monkeypatch.setenv("SCOREKEEPER_JSON_LOGS", "yes")
    monkeypatch.setenv("SCOREKEEPER_LOG_FILE", "/tmp/scorekeeper.log")
    monkeypatch.setenv("SCOREKEEPER_GAMES_KEY", "games")
    monkeypatch.setenv("SCOREKEEPER_MAX_DRAFTS", "5")
    monkeypatch.setenv("SCOREKEEPER_DRAFT_TTL_MINUTES", "30")
    config = Config.from_env()
    assert config.database_url == "sqlite:///tmp/x.db"
    assert config.port == 1966
    assert config.json_logs
    assert config.log_file == Path("/tmp/scorekeeper.log")
    assert config.games_key == "games"
    assert config.max_drafts == 5
    assert config.draft_ttl_minutes == 30
