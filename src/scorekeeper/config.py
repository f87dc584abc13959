"""Configuration for Scorekeeper."""

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass
class Config:
    """Application configuration."""

    database_url: str = "sqlite:///./scorekeeper.db"
    host: str = "localhost"
    port: int = 1965
    certfile: Path | None = None
    keyfile: Path | None = None
    log_level: str = "INFO"
    log_file: Path | None = None
    json_logs: bool = False
    games_key: str = "card_game_games"
    stats_key: str = "card_game_statistics"
    max_drafts: int = 50
    draft_ttl_minutes: int = 720

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        certfile = os.getenv("SCOREKEEPER_CERTFILE")
        keyfile = os.getenv("SCOREKEEPER_KEYFILE")
        log_file = os.getenv("SCOREKEEPER_LOG_FILE")

        return cls(
            database_url=os.getenv("SCOREKEEPER_DATABASE_URL", cls.database_url),
            host=os.getenv("SCOREKEEPER_HOST", cls.host),
            port=int(os.getenv("SCOREKEEPER_PORT", str(cls.port))),
            certfile=Path(certfile) if certfile else None,
            keyfile=Path(keyfile) if keyfile else None,
            log_level=os.getenv("SCOREKEEPER_LOG_LEVEL", cls.log_level),
            log_file=Path(log_file) if log_file else None,
            json_logs=os.getenv("SCOREKEEPER_JSON_LOGS", "").lower()
            in ("true", "1", "yes"),
            games_key=os.getenv("SCOREKEEPER_GAMES_KEY", cls.games_key),
            stats_key=os.getenv("SCOREKEEPER_STATS_KEY", cls.stats_key),
            max_drafts=int(os.getenv("SCOREKEEPER_MAX_DRAFTS", str(cls.max_drafts))),
            draft_ttl_minutes=int(
                os.getenv("SCOREKEEPER_DRAFT_TTL_MINUTES", str(cls.draft_ttl_minutes))
            ),
        )
