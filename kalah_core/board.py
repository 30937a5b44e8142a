from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Dict, Iterable, List, Tuple

from .errors import InvalidInput, InvalidPit, NegativeStones

DEFAULT_STONES_PER_PIT = 6

Pit = int


class Player(IntEnum):
    FIRST = 1
    SECOND = 2

    def opponent(self) -> 'Player':
        return Player.SECOND if self is Player.FIRST else Player.FIRST


class Phase(str, Enum):
    INITIAL = "initial"
    STARTED = "started"
    FINISHED = "finished"


@dataclass
class Board:
    """Mutable Kalah board: pit counts keyed 1..N, whose turn it is and the game phase.

    Player 1 owns pits 1..N/2-1 and the store N/2; Player 2 owns pits N/2+1..N-1
    and the store N, where N = 2 * stones_per_pit + 2.
    """
    stones_per_pit: int = DEFAULT_STONES_PER_PIT
    infer_player: bool = False
    current_player: Player = Player.FIRST
    phase: Phase = Phase.INITIAL
    pits: Dict[Pit, int] = field(default_factory=dict)

    @property
    def pit_count(self) -> int:
        return 2 * self.stones_per_pit + 2

    def validate_pit(self, pit: Pit) -> None:
        if not isinstance(pit, int) or isinstance(pit, bool) or pit < 1 or pit > self.pit_count:
            raise InvalidPit()

    def get_stones(self, pit: Pit) -> int:
        self.validate_pit(pit)
        return self.pits.get(pit, 0)

    def set_stones(self, pit: Pit, stones: int) -> None:
        self.validate_pit(pit)
        if stones < 0:
            raise NegativeStones()
        self.pits[pit] = stones

    def add_stones(self, pit: Pit, stones: int) -> None:
        self.set_stones(pit, self.get_stones(pit) + stones)

    def store_pit(self, player: Player) -> Pit:
        """Returns the store ("Kalah") index of the given player."""
        return self.pit_count // 2 if player == Player.FIRST else self.pit_count

    def pit_range(self, player: Player) -> range:
        """Playable pits of a player, store excluded."""
        store = self.store_pit(player)
        return range(store - self.stones_per_pit, store)

    def is_store(self, pit: Pit) -> bool:
        return pit == self.pit_count // 2 or pit == self.pit_count

    def is_own_store(self, pit: Pit, player: Player) -> bool:
        return pit == self.store_pit(player)

    def is_own_pit(self, pit: Pit, player: Player) -> bool:
        return pit in self.pit_range(player)

    def opposite_pit(self, pit: Pit) -> Pit:
        """Mirror pit across the board, used for captures. Stores have no opposite."""
        self.validate_pit(pit)
        if self.is_store(pit):
            raise InvalidPit()
        return self.pit_count - pit

    def sum_pits(self, player: Player, include_store: bool = False) -> int:
        total = sum(self.get_stones(p) for p in self.pit_range(player))
        if include_store:
            total += self.get_stones(self.store_pit(player))
        return total

    def scores(self) -> Tuple[int, int]:
        return (self.get_stones(self.store_pit(Player.FIRST)), self.get_stones(self.store_pit(Player.SECOND)))

    def total_stones(self) -> int:
        return sum(self.get_stones(p) for p in range(1, self.pit_count + 1))

    def render(self) -> str:
        """Deterministic comma-separated pit values, pit 1..N in order."""
        return ",".join(str(self.get_stones(p)) for p in range(1, self.pit_count + 1))

    def pretty(self) -> str:
        """Two-row view with Player 2 on top (right to left) and the stores on the sides."""
        top = [self.get_stones(p) for p in reversed(self.pit_range(Player.SECOND))]
        bottom = [self.get_stones(p) for p in self.pit_range(Player.FIRST)]
        width = max(2, max(len(str(v)) for v in top + bottom))
        s1, s2 = self.scores()
        pad = " " * (width + 2)
        lines: List[str] = [
            pad + " ".join(str(v).rjust(width) for v in top),
            str(s2).rjust(width) + "  " + " " * (len(top) * (width + 1) - 1) + "  " + str(s1).rjust(width),
            pad + " ".join(str(v).rjust(width) for v in bottom),
        ]
        return "\n".join(lines)


def create_board(stones_per_pit: int = DEFAULT_STONES_PER_PIT, infer_player: bool = False) -> Board:
    """Creates a board with every playable pit filled and both stores empty."""
    if stones_per_pit < 1:
        raise InvalidInput("stones_per_pit must be positive")
    board = Board(stones_per_pit=stones_per_pit, infer_player=infer_player)
    for pit in range(1, board.pit_count + 1):
        board.pits[pit] = 0 if board.is_store(pit) else stones_per_pit
    return board


def snapshot(board: Board) -> List[Tuple[Pit, int]]:
    """Ordered (pit, stones) pairs for pits 1..N."""
    return [(pit, board.get_stones(pit)) for pit in range(1, board.pit_count + 1)]


def load_pits(board: Board, values: Iterable[int]) -> None:
    """Overwrites pit values positionally from pit 1; used to seed fixtures.

    The phase goes back to INITIAL so a seeded board behaves like a fresh one.
    """
    vals = list(values)
    if any(not isinstance(v, int) or isinstance(v, bool) for v in vals):
        raise InvalidInput("pit values must be integers")
    if len(vals) < 1 or len(vals) > board.pit_count:
        raise InvalidInput()
    if any(v < 0 for v in vals):
        raise NegativeStones()
    for i, v in enumerate(vals):
        board.pits[i + 1] = v
    board.phase = Phase.INITIAL
