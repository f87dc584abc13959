"""JSON text form of the stored game collection.

Field names and the date format match the blobs written by the mobile
app (camelCase keys, ``2024-05-01T18:30:00.000Z`` timestamps), so an
exported collection can be read by either side.
"""

import datetime as dt
import json
from collections.abc import Iterable
from typing import Any

from .game import Game, Player


def encode_date(value: dt.datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=dt.UTC)
    text = value.astimezone(dt.UTC).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


def decode_date(text: str) -> dt.datetime:
    value = dt.datetime.fromisoformat(text)
    if value.tzinfo is None:
        value = value.replace(tzinfo=dt.UTC)
    return value


def game_to_dict(game: Game) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": game.id,
        "players": [
            {"id": p.id, "name": p.name, "score": p.score} for p in game.players
        ],
        "date": encode_date(game.date),
        "isCompleted": game.is_completed,
        "totalRounds": game.total_rounds,
    }
    if game.winner is not None:
        data["winner"] = game.winner
    return data


def game_from_dict(data: dict[str, Any]) -> Game:
    return Game(
        id=data["id"],
        players=[
            Player(id=p["id"], name=p["name"], score=int(p["score"]))
            for p in data["players"]
        ],
        date=decode_date(data["date"]),
        is_completed=bool(data.get("isCompleted", False)),
        winner=data.get("winner"),
        total_rounds=int(data.get("totalRounds", 0)),
    )


def encode_games(games: Iterable[Game]) -> str:
    return json.dumps([game_to_dict(game) for game in games])


def decode_games(text: str) -> list[Game]:
    """Parse a stored collection. Malformed content raises ValueError."""
    raw = json.loads(text)
    if not isinstance(raw, list):
        raise ValueError("stored games must be a JSON list")
    try:
        return [game_from_dict(item) for item in raw]
    except (KeyError, TypeError) as exc:
        raise ValueError(f"malformed game record: {exc!r}") from exc
