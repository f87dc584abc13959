"""Exceptions raised by Scorekeeper."""


class ScorekeeperError(Exception):
    """Base class for all Scorekeeper errors."""


class ValidationError(ScorekeeperError):
    """User input was rejected before any game was touched."""


class GameCompletedError(ScorekeeperError):
    """The game is already finished and accepts no more rounds."""


class NoRoundsPlayedError(ScorekeeperError):
    """A game cannot be finished before its first round."""


class StaleWriteError(ScorekeeperError):
    """Stored data changed between being read and being written back."""

    def __init__(self, key: str, expected: int, actual: int):
        super().__init__(
            f"{key!r} is at {actual}, expected {expected}"
        )
        self.key = key
        self.expected = expected
        self.actual = actual
