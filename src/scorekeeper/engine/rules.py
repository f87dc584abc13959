"""Input rules for starting games and entering rounds."""

import re
from collections.abc import Iterable

from ..errors import ValidationError

MIN_PLAYERS = 2
MAX_PLAYERS = 8
MAX_NAME_LENGTH = 20

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_SEPARATORS = re.compile(r"[,\s]+")


def split_names(raw: str) -> list[str]:
    """Split a comma-separated roster into names."""
    return raw.split(",")


def validate_player_names(names: Iterable[str]) -> list[str]:
    """Return the cleaned roster, or raise ValidationError."""
    cleaned = [name.strip() for name in names if name.strip()]

    if len(cleaned) < MIN_PLAYERS:
        raise ValidationError(
            f"Please add at least {MIN_PLAYERS} players to start the game."
        )
    if len(cleaned) > MAX_PLAYERS:
        raise ValidationError(f"A game can have at most {MAX_PLAYERS} players.")

    for name in cleaned:
        if len(name) > MAX_NAME_LENGTH:
            raise ValidationError(
                f"Player name {name!r} is longer than {MAX_NAME_LENGTH} characters."
            )

    if len(set(cleaned)) != len(cleaned):
        raise ValidationError("Please make sure all player names are unique.")

    return cleaned


def parse_score(text: str) -> int:
    """Read the leading integer of an entry; anything else counts as 0.

    ``"12abc"`` is 12, ``"3.7"`` is 3, ``"abc"`` is 0.
    """
    match = _LEADING_INT.match(text)
    if match is None:
        return 0
    return int(match.group(1))


def parse_round_scores(raw: str, player_count: int) -> list[int]:
    """Turn one line of round input into a score per player.

    Entries are separated by commas or whitespace and listed in player
    order. Blank input, or a count that doesn't match the table, is
    rejected so that no player is silently skipped.
    """
    entries = [entry for entry in _SEPARATORS.split(raw.strip()) if entry]

    if not entries:
        raise ValidationError(
            "Please enter scores for all players before adding the round."
        )
    if len(entries) != player_count:
        raise ValidationError(
            f"Expected {player_count} scores, one per player, got {len(entries)}."
        )

    return [parse_score(entry) for entry in entries]
