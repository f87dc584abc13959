"""Per-player statistics over completed games.

Players are matched across games by name: a player's ``id`` only lives as
long as one game, so the name is the only identity two games share.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from .game import Game, Player


@dataclass
class PlayerStats:
    games_played: int = 0
    games_won: int = 0
    total_score: int = 0
    average_score: float = 0.0
    win_rate: float = 0.0


@dataclass
class GameStatistics:
    total_games: int = 0
    player_stats: dict[str, PlayerStats] = field(default_factory=dict)


def compute_statistics(games: Iterable[Game]) -> GameStatistics:
    """Aggregate every completed game into per-name statistics."""
    completed = [game for game in games if game.is_completed]
    player_stats: dict[str, PlayerStats] = {}

    for game in completed:
        for player in game.players:
            stats = player_stats.setdefault(player.name, PlayerStats())
            stats.games_played += 1
            stats.total_score += player.score
            if game.winner == player.name:
                stats.games_won += 1

    # games_played is at least 1 for every entry created above
    for stats in player_stats.values():
        stats.average_score = stats.total_score / stats.games_played
        stats.win_rate = stats.games_won / stats.games_played * 100

    return GameStatistics(total_games=len(completed), player_stats=player_stats)


def top_by_win_rate(
    statistics: GameStatistics, limit: int = 5
) -> list[tuple[str, PlayerStats]]:
    """Best win rates first. Ties keep first-seen order."""
    ranked = sorted(
        statistics.player_stats.items(),
        key=lambda item: item[1].win_rate,
        reverse=True,
    )
    return ranked[:limit]


def top_by_average(
    statistics: GameStatistics, limit: int = 5
) -> list[tuple[str, PlayerStats]]:
    """Best average scores first. Ties keep first-seen order."""
    ranked = sorted(
        statistics.player_stats.items(),
        key=lambda item: item[1].average_score,
        reverse=True,
    )
    return ranked[:limit]


def recent_games(games: Sequence[Game], limit: int = 3) -> list[Game]:
    """The last ``limit`` games stored, newest first."""
    if limit <= 0:
        return []
    return list(reversed(games[-limit:]))


def top_players(game: Game, limit: int = 3) -> list[Player]:
    """A game's players ordered by score, highest first."""
    return sorted(game.players, key=lambda player: player.score, reverse=True)[
        :limit
    ]
