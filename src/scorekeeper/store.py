"""Persistence for games.

All games live in one JSON blob under a single key. Every change reads the
whole collection, edits it in memory and writes it back. Writers take the
store's lock, and the write itself is a compare-and-swap on the blob
version, so a change made behind the store's back is rejected instead of
being overwritten. ``replace`` can also be given the copy of the game the
caller started from; if the stored record no longer matches it, the
replace is rejected.

Storage failures stop here: they are logged and reported as ``False`` (or
an empty list) so that screens degrade to an empty view.
"""

import datetime as dt
import threading
from collections.abc import Callable

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session

from .config import Config
from .engine.codec import decode_games, encode_games, game_to_dict
from .engine.game import Game
from .engine.statistics import GameStatistics, compute_statistics
from .errors import StaleWriteError
from .logging import get_logger
from .models import StoredBlob

logger = get_logger(__name__)

# version reported for a key that has never been written
ABSENT = 0


class BlobStore:
    """Versioned key-value access on top of the ``storedblob`` table.

    Deleting a key leaves a row with no value behind, so versions only ever
    grow and a writer holding a version from before the delete is refused.
    """

    def __init__(self, engine):
        self.engine = engine

    def read(self, key: str) -> tuple[str | None, int]:
        """Return ``(value, version)``; ``(None, ABSENT)`` when never written."""
        with Session(self.engine) as session:
            blob = session.get(StoredBlob, key)
            if blob is None:
                return None, ABSENT
            return blob.value, blob.version

    def version(self, key: str) -> int:
        with Session(self.engine) as session:
            blob = session.get(StoredBlob, key)
            return blob.version if blob else ABSENT

    def write(self, key: str, value: str, expected_version: int) -> int:
        """Store ``value`` if the blob is still at ``expected_version``.

        Returns the new version. Raises StaleWriteError otherwise.
        """
        with Session(self.engine) as session:
            if expected_version == ABSENT:
                session.add(StoredBlob(key=key, value=value))
                try:
                    session.commit()
                except IntegrityError as exc:
                    session.rollback()
                    raise StaleWriteError(
                        key, expected_version, self.version(key)
                    ) from exc
                return 1

            result = session.execute(
                update(StoredBlob)
                .where(StoredBlob.key == key)
                .where(StoredBlob.version == expected_version)
                .values(
                    value=value,
                    version=expected_version + 1,
                    updated_at=dt.datetime.now(dt.UTC),
                )
            )
            if result.rowcount != 1:
                session.rollback()
                raise StaleWriteError(key, expected_version, self.version(key))
            session.commit()
            return expected_version + 1

    def delete(self, key: str) -> None:
        """Drop the value and bump the version."""
        with Session(self.engine) as session:
            session.execute(
                update(StoredBlob)
                .where(StoredBlob.key == key)
                .values(
                    value=None,
                    version=StoredBlob.version + 1,
                    updated_at=dt.datetime.now(dt.UTC),
                )
            )
            session.commit()


class GameStore:
    """The ordered collection of every stored game."""

    def __init__(
        self,
        blobs: BlobStore,
        games_key: str = Config.games_key,
        stats_key: str = Config.stats_key,
    ):
        self.blobs = blobs
        self.games_key = games_key
        self.stats_key = stats_key
        self._lock = threading.Lock()

    def _load(self) -> tuple[list[Game], int]:
        text, version = self.blobs.read(self.games_key)
        if text is None:
            return [], version
        return decode_games(text), version

    def _mutate(self, action: str, change: Callable[[list[Game]], bool]) -> bool:
        """Read, apply ``change``, write back.

        ``change`` edits the list in place and returns False when there was
        nothing to do, in which case nothing is written.
        """
        with self._lock:
            try:
                games, version = self._load()
                if not change(games):
                    return False
                self.blobs.write(self.games_key, encode_games(games), version)
            except StaleWriteError as exc:
                logger.warning(
                    "game_store_stale_write",
                    action=action,
                    key=exc.key,
                    expected=exc.expected,
                    actual=exc.actual,
                )
                return False
            except (SQLAlchemyError, TypeError, ValueError) as exc:
                logger.error("game_store_write_failed", action=action, error=str(exc))
                return False
        return True

    def append(self, game: Game) -> bool:
        """Add a game at the end of the collection."""

        def change(games: list[Game]) -> bool:
            games.append(game)
            return True

        ok = self._mutate("append", change)
        if ok:
            logger.info("game_appended", game_id=game.id)
        return ok

    def list(self) -> list[Game]:
        """Every stored game in insertion order; empty on any failure."""
        try:
            games, _ = self._load()
        except (SQLAlchemyError, ValueError) as exc:
            logger.error("game_store_read_failed", error=str(exc))
            return []
        return games

    def get(self, game_id: str) -> Game | None:
        for game in self.list():
            if game.id == game_id:
                return game
        return None

    def replace(
        self, game_id: str, game: Game, expected: Game | None = None
    ) -> bool:
        """Overwrite the first game with ``game_id``.

        With ``expected``, the stored record must still match it. Returns
        False when the game is missing or has changed since.
        """

        def change(games: list[Game]) -> bool:
            for index, existing in enumerate(games):
                if existing.id != game_id:
                    continue
                # compared in stored form, where dates carry milliseconds only
                if expected is not None and (
                    game_to_dict(existing) != game_to_dict(expected)
                ):
                    raise StaleWriteError(
                        game_id, expected.total_rounds, existing.total_rounds
                    )
                games[index] = game
                return True
            logger.debug("game_not_found", action="replace", game_id=game_id)
            return False

        ok = self._mutate("replace", change)
        if ok:
            logger.info("game_updated", game_id=game_id)
        return ok

    def remove(self, game_id: str) -> bool:
        """Delete the first game with ``game_id``. False if absent."""

        def change(games: list[Game]) -> bool:
            for index, existing in enumerate(games):
                if existing.id == game_id:
                    del games[index]
                    return True
            logger.debug("game_not_found", action="remove", game_id=game_id)
            return False

        ok = self._mutate("remove", change)
        if ok:
            logger.info("game_deleted", game_id=game_id)
        return ok

    def clear(self) -> bool:
        """Drop every game along with the reserved statistics key."""
        with self._lock:
            try:
                self.blobs.delete(self.games_key)
                self.blobs.delete(self.stats_key)
            except SQLAlchemyError as exc:
                logger.error("game_store_clear_failed", error=str(exc))
                return False
        logger.info("game_store_cleared")
        return True

    def statistics(self) -> GameStatistics:
        """Statistics over everything stored, recomputed on each call."""
        return compute_statistics(self.list())
