"""Session layer bridging the scoring engine and the game store."""

import copy
import datetime as dt
import threading
from collections import OrderedDict
from collections.abc import Sequence

from .engine.game import Game, add_round, finish_game, new_game, reset_scores
from .engine.rules import parse_round_scores, validate_player_names
from .logging import get_logger
from .store import GameStore

logger = get_logger(__name__)


class ScoreSession:
    """Wraps one Game and decides when it is written to the store.

    A game is only stored once it has a round: the first round appends it,
    every later change replaces it. The session remembers the game as it
    was last read or written, and a replace is refused if the stored game
    no longer looks like that.
    """

    def __init__(self, store: GameStore, game: Game, persisted: bool = False):
        self.store = store
        self.game = game
        self.persisted = persisted
        self._snapshot = copy.deepcopy(game) if persisted else None

    @classmethod
    def start(cls, store: GameStore, names: Sequence[str]) -> "ScoreSession":
        """Validate the roster and open a new, unsaved game."""
        game = new_game(validate_player_names(names))
        logger.info("game_created", game_id=game.id, players=len(game.players))
        return cls(store, game)

    @classmethod
    def resume(cls, store: GameStore, game_id: str) -> "ScoreSession | None":
        """Reopen a stored game, or None if it isn't in the store."""
        game = store.get(game_id)
        if game is None:
            return None
        return cls(store, game, persisted=True)

    def add_round(self, raw_scores: str) -> bool:
        """Parse one round of input, apply it and save.

        Raises ValidationError for blank or short input. Returns whether
        the store accepted the write.
        """
        scores = parse_round_scores(raw_scores, len(self.game.players))
        add_round(self.game, scores)
        logger.debug(
            "round_added",
            game_id=self.game.id,
            round=self.game.total_rounds,
            scores=scores,
        )
        return self.save()

    def finish(self) -> bool:
        """Complete the game and save it. Returns whether it was stored."""
        finish_game(self.game)
        logger.info("game_finished", game_id=self.game.id, winner=self.game.winner)
        return self.save()

    def reset(self) -> bool:
        """Zero all scores. Only touches the store if the game is stored."""
        reset_scores(self.game)
        logger.info("game_reset", game_id=self.game.id)
        if not self.persisted:
            return True
        return self.save()

    def save(self) -> bool:
        if self.persisted:
            saved = self.store.replace(
                self.game.id, self.game, expected=self._snapshot
            )
        else:
            saved = self.store.append(self.game)
            self.persisted = saved
        if saved:
            self._snapshot = copy.deepcopy(self.game)
        else:
            logger.warning("game_not_saved", game_id=self.game.id)
        return saved


class DraftRegistry:
    """Games that have a roster but no stored round yet.

    Drafts older than ``max_age`` are dropped, and beyond ``max_drafts`` the
    oldest go first.
    """

    def __init__(self, max_drafts: int = 50, max_age: dt.timedelta | None = None):
        self.max_drafts = max_drafts
        self.max_age = max_age or dt.timedelta(hours=12)
        self._drafts: OrderedDict[str, ScoreSession] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._drafts)

    def __contains__(self, game_id: str) -> bool:
        return game_id in self._drafts

    def ids(self) -> list[str]:
        """Draft ids, oldest first."""
        return list(self._drafts)

    def add(self, session: ScoreSession, now: dt.datetime | None = None) -> None:
        with self._lock:
            self._drafts[session.game.id] = session
            self._evict(now or dt.datetime.now(dt.UTC))

    def get(self, game_id: str, now: dt.datetime | None = None) -> ScoreSession | None:
        with self._lock:
            self._evict(now or dt.datetime.now(dt.UTC))
            return self._drafts.get(game_id)

    def pop(self, game_id: str) -> ScoreSession | None:
        with self._lock:
            return self._drafts.pop(game_id, None)

    def clear(self) -> None:
        with self._lock:
            self._drafts.clear()

    def _evict(self, now: dt.datetime) -> None:
        cutoff = now - self.max_age
        for game_id, session in list(self._drafts.items()):
            if session.game.date < cutoff:
                del self._drafts[game_id]
                logger.info("draft_expired", game_id=game_id)
        while len(self._drafts) > self.max_drafts:
            game_id, _ = self._drafts.popitem(last=False)
            logger.info("draft_evicted", game_id=game_id)
