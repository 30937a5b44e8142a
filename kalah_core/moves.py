from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple, Union

from .board import Board, Phase, Pit, Player, snapshot
from .errors import GameOver, InvalidMove, InvalidPit, KalahError


@dataclass(frozen=True)
class Applied:
    """Move went through and the game continues."""
    snapshot: Tuple[Tuple[Pit, int], ...]
    current_player: Player
    extra_turn: bool
    phase: Phase = Phase.STARTED


@dataclass(frozen=True)
class Rejected:
    """Move was illegal; the board is untouched."""
    reason: KalahError


@dataclass(frozen=True)
class Finished:
    """Game is over, either by this move or earlier."""
    score1: int
    score2: int
    snapshot: Tuple[Tuple[Pit, int], ...] = ()

    @property
    def score(self) -> Tuple[int, int]:
        return (self.score1, self.score2)


MoveResult = Union[Applied, Rejected, Finished]


def _game_over(board: Board) -> GameOver:
    return GameOver(*board.scores())


def _resolve_player(board: Board, pit: Pit) -> Player:
    """Player who moves from `pit`; only differs from current_player on an inferring INITIAL board."""
    if board.phase == Phase.INITIAL and board.infer_player:
        return Player.FIRST if pit <= board.pit_count // 2 else Player.SECOND
    return board.current_player


def legal_moves(board: Board) -> List[Pit]:
    """Pits the current player may sow from."""
    if board.phase == Phase.FINISHED:
        return []
    players = [board.current_player]
    if board.phase == Phase.INITIAL and board.infer_player:
        players = [Player.FIRST, Player.SECOND]
    return [p for pl in players for p in board.pit_range(pl) if board.get_stones(p) > 0]


def sow(board: Board, pit: Pit, player: Player) -> Pit:
    """Empties `pit` and drops its stones one by one forward, skipping the opponent's store.

    Returns the landing pit.
    """
    stones = board.get_stones(pit)
    board.set_stones(pit, 0)
    skip = board.store_pit(player.opponent())
    current = pit
    while stones > 0:
        current = 1 if current == board.pit_count else current + 1
        if current == skip:
            continue
        board.add_stones(current, 1)
        stones -= 1
    return current


def capture(board: Board, landing: Pit, player: Player) -> int:
    """Captures the landing stone and the opposite pit when the last stone hit an empty own pit.

    Returns the number of stones moved into the store (0 when nothing was captured).
    """
    if not board.is_own_pit(landing, player) or board.get_stones(landing) != 1:
        return 0
    opposite = board.opposite_pit(landing)
    taken = board.get_stones(opposite)
    if taken == 0:
        return 0
    board.set_stones(opposite, 0)
    board.set_stones(landing, 0)
    board.add_stones(board.store_pit(player), taken + 1)
    return taken + 1


def _sweep(board: Board, player: Player) -> None:
    remaining = board.sum_pits(player, include_store=False)
    for p in board.pit_range(player):
        board.set_stones(p, 0)
    board.add_stones(board.store_pit(player), remaining)


def apply_move(board: Board, pit: Pit) -> None:
    """Executes one move for the current player, mutating the board in place.

    Raises GameOver on a finished board or when this move ends the game (after the
    final sweep has been committed), InvalidPit for an out-of-range pit and
    InvalidMove for an empty pit, a store, or a pit of the other player. Rejected
    moves leave the board unchanged.
    """
    if board.phase == Phase.FINISHED:
        raise _game_over(board)
    board.validate_pit(pit)

    player = _resolve_player(board, pit)
    if board.get_stones(pit) == 0 or board.is_store(pit) or not board.is_own_pit(pit, player):
        raise InvalidMove()

    board.current_player = player
    board.phase = Phase.STARTED

    landing = sow(board, pit, player)
    capture(board, landing, player)

    if not board.is_own_store(landing, player):
        board.current_player = player.opponent()

    # The player about to move has nothing left: the other side keeps its stones.
    if board.sum_pits(board.current_player, include_store=False) == 0:
        _sweep(board, board.current_player.opponent())
        board.phase = Phase.FINISHED
        raise _game_over(board)


def play(board: Board, pit: Pit) -> MoveResult:
    """Like apply_move, but reports the outcome as a value instead of raising."""
    mover = _resolve_player(board, pit) if isinstance(pit, int) else board.current_player
    try:
        apply_move(board, pit)
    except GameOver as e:
        return Finished(e.score1, e.score2, tuple(snapshot(board)))
    except (InvalidPit, InvalidMove) as e:
        return Rejected(e)
    return Applied(
        snapshot=tuple(snapshot(board)),
        current_player=board.current_player,
        extra_turn=board.current_player == mover,
        phase=board.phase,
    )
