"""Xitzin application factory for Scorekeeper."""

import datetime as dt
from pathlib import Path

from sqlmodel import SQLModel, create_engine
from xitzin import Xitzin

from .config import Config
from .logging import get_logger
from .session import DraftRegistry
from .store import BlobStore, GameStore

logger = get_logger(__name__)


def create_app(config: Config | None = None) -> Xitzin:
    """Create and configure the Xitzin application."""
    config = config or Config.from_env()

    templates_dir = Path(__file__).parent / "templates"

    app = Xitzin(
        title="Scorekeeper",
        version="0.1.0",
        templates_dir=templates_dir,
    )

    engine = create_engine(config.database_url)
    app.state.engine = engine
    app.state.config = config
    app.state.store = GameStore(
        BlobStore(engine),
        games_key=config.games_key,
        stats_key=config.stats_key,
    )
    app.state.drafts = DraftRegistry(
        max_drafts=config.max_drafts,
        max_age=dt.timedelta(minutes=config.draft_ttl_minutes),
    )

    @app.on_startup
    async def startup():
        """Initialize the database."""
        SQLModel.metadata.create_all(engine)
        logger.debug("database_setup_complete")

        games = app.state.store.list()
        logger.info(
            "startup_complete",
            games=len(games),
            completed=sum(1 for game in games if game.is_completed),
        )

    from .routes import home, play, records

    home.register_routes(app)
    play.register_routes(app)
    records.register_routes(app)

    return app
