"""Shared test fixtures for Scorekeeper."""

import datetime as dt
from pathlib import Path

import pytest
from sqlmodel import SQLModel, create_engine

from scorekeeper.app import create_app
from scorekeeper.config import Config
from scorekeeper.engine.game import Game, Player
from scorekeeper.store import BlobStore, GameStore


@pytest.fixture
def db_engine(tmp_path: Path):
    db_url = f"sqlite:///{tmp_path}/test.db"
    engine = create_engine(db_url)
    SQLModel.metadata.create_all(engine)
    return engine


@pytest.fixture
def blobs(db_engine) -> BlobStore:
    return BlobStore(db_engine)


@pytest.fixture
def store(blobs: BlobStore) -> GameStore:
    return GameStore(blobs)


@pytest.fixture
def make_game():
    """Build a game record directly, bypassing the state machine."""

    def _make(
        game_id: str,
        scores: dict[str, int],
        winner: str | None = None,
        rounds: int = 1,
    ) -> Game:
        players = [
            Player(id=f"{game_id}_{index}", name=name, score=score)
            for index, (name, score) in enumerate(scores.items())
        ]
        return Game(
            id=game_id,
            players=players,
            date=dt.datetime(2025, 3, 14, 20, 15, tzinfo=dt.UTC),
            is_completed=winner is not None,
            winner=winner,
            total_rounds=rounds,
        )

    return _make


@pytest.fixture
def test_config(tmp_path: Path) -> Config:
    return Config(database_url=f"sqlite:///{tmp_path}/test.db")


@pytest.fixture
def app(test_config: Config):
    return create_app(test_config)


@pytest.fixture
def client(app):
    from xitzin.testing import test_app

    with test_app(app) as client:
        yield client
