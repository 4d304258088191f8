from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .moves import MoveResult


class SaaError(Exception):
    """Base class for every error raised by the game engine."""


class FatalError(SaaError, RuntimeError):
    """An error after which no game can continue."""


class PoolExhausted(FatalError):
    """The card pool ran out of cells. Indicates broken card accounting."""


class ClockUnavailable(FatalError):
    """The wall clock could not be read to seed the shuffle."""


class SaveFileError(SaaError):
    """Recoverable failure while saving or restoring a game."""


class SaveOpenFailed(SaveFileError, OSError):
    pass


class SaveWriteFailed(SaveFileError, OSError):
    pass


class CorruptSaveFile(SaveFileError, ValueError):
    pass


class InvalidCommand(SaaError, ValueError):
    def __init__(self, key: str) -> None:
        super().__init__(f'Bad input {key!r}')
        self.key = key


class IllegalMove(SaaError, ValueError):
    """A move that breaks a game rule. Carries the failed MoveResult."""

    def __init__(self, result: 'MoveResult') -> None:
        super().__init__(result.describe())
        self.result = result
