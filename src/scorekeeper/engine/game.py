"""Game records and the round/completion state machine.

A game starts in memory with every score at zero. Rounds add one score per
player; finishing picks the winner and freezes the game. Nothing here talks
to storage: ``ScoreSession`` decides when a game is written.
"""

import datetime as dt
from collections.abc import Sequence
from dataclasses import dataclass, field
from uuid import uuid4

from ..errors import GameCompletedError, NoRoundsPlayedError


def _millis(now: dt.datetime) -> int:
    return int(now.timestamp() * 1000)


@dataclass
class Player:
    """One seat at the table. Only meaningful inside its game."""

    id: str
    name: str
    score: int = 0


@dataclass
class Game:
    """A played session: fixed roster, running scores, completion state."""

    id: str
    players: list[Player]
    date: dt.datetime = field(default_factory=lambda: dt.datetime.now(dt.UTC))
    is_completed: bool = False
    winner: str | None = None
    total_rounds: int = 0

    @property
    def is_started(self) -> bool:
        return self.total_rounds > 0

    def player_names(self) -> list[str]:
        return [player.name for player in self.players]


def new_game(names: Sequence[str], now: dt.datetime | None = None) -> Game:
    """Create a fresh, unpersisted game for the given (validated) names."""
    now = now or dt.datetime.now(dt.UTC)
    # two games can start in the same millisecond
    stamp = f"{_millis(now)}_{uuid4().hex[:8]}"
    players = [
        Player(id=f"player_{index}_{stamp}", name=name)
        for index, name in enumerate(names)
    ]
    return Game(id=f"game_{stamp}", players=players, date=now)


def add_round(game: Game, round_scores: Sequence[int]) -> Game:
    """Apply one round: every player's score grows by their entry."""
    if game.is_completed:
        raise GameCompletedError(f"game {game.id} is already finished")
    if len(round_scores) != len(game.players):
        raise ValueError(
            f"expected {len(game.players)} scores, got {len(round_scores)}"
        )

    for player, points in zip(game.players, round_scores):
        player.score += points
    game.total_rounds += 1
    return game


def determine_winner(players: Sequence[Player]) -> Player:
    """Highest score wins; on a tie the earlier player keeps the lead."""
    if not players:
        raise ValueError("a game without players has no winner")

    best = players[0]
    for player in players[1:]:
        if player.score > best.score:
            best = player
    return best


def finish_game(game: Game) -> Game:
    """Mark the game completed and record its winner."""
    if game.is_completed:
        raise GameCompletedError(f"game {game.id} is already finished")
    if game.total_rounds < 1:
        raise NoRoundsPlayedError(
            "Please play at least one round before finishing the game."
        )

    game.winner = determine_winner(game.players).name
    game.is_completed = True
    return game


def reset_scores(game: Game) -> Game:
    """Zero every score and the round count.

    Identity, roster and completion state are left alone.
    """
    for player in game.players:
        player.score = 0
    game.total_rounds = 0
    return game
