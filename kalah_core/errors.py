from __future__ import annotations

from typing import Tuple

INVALID_PIT_NUMBER = "Invalid pit number"
NEGATIVE_STONES = "You can not put less then 0 stones in a pit"
INVALID_MOVE = "Invalid move"
INPUT_ARRAY_LENGTH_SIZE_IS_INVALID = "Input array length size is invalid"
GAME_OVER = "Game over! Score is {}:{}"
INVALID_GAME_NUMBER = "This game is not created yet"
NON_NUMERIC_VALUE = "Game id and pit number should be numeric and valid"


class KalahError(Exception):
    """Base class for every failure raised by the rules engine and registry."""
    message = "Kalah error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)

    @property
    def kind(self) -> str:
        return type(self).__name__


class InvalidPit(KalahError):
    message = INVALID_PIT_NUMBER


class NegativeStones(KalahError):
    message = NEGATIVE_STONES


class InvalidMove(KalahError):
    message = INVALID_MOVE


class InvalidInput(KalahError):
    message = INPUT_ARRAY_LENGTH_SIZE_IS_INVALID


class UnknownGame(KalahError):
    message = INVALID_GAME_NUMBER


class GameOver(KalahError):
    """Terminal signal carrying the settled store totals of both players."""

    def __init__(self, score1: int, score2: int) -> None:
        self.score1 = int(score1)
        self.score2 = int(score2)
        super().__init__(GAME_OVER.format(self.score1, self.score2))

    @property
    def score(self) -> Tuple[int, int]:
        return (self.score1, self.score2)
