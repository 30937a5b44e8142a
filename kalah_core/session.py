from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from .board import Board, Phase, Pit, Player, create_board, load_pits, snapshot
from .errors import GameOver
from .moves import Finished, MoveResult, apply_move, legal_moves
from .moves import play as play_move

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameView:
    """Consistent picture of one game, taken under a single lock acquisition."""
    snapshot: Tuple[Tuple[Pit, int], ...]
    current_player: Player
    phase: Phase
    legal_moves: Tuple[Pit, ...]


class GameSession:
    """One game: an id, its public URI and the board it owns.

    Every read and write of the board happens under the session lock, so two
    moves submitted for the same game never interleave.
    """

    def __init__(self, game_id: int, board: Board | None = None, uri: str = "") -> None:
        self.game_id = int(game_id)
        self.uri = uri or f"/games/{self.game_id}"
        self._board = board if board is not None else create_board()
        self._lock = threading.Lock()

    def make_move(self, pit: Pit) -> List[Tuple[Pit, int]]:
        """Applies a move and returns the new snapshot; engine errors propagate unchanged."""
        with self._lock:
            try:
                apply_move(self._board, pit)
            except GameOver as e:
                logger.info("game %s over, score %s:%s", self.game_id, e.score1, e.score2)
                raise
            logger.debug("game %s pit %s -> %s", self.game_id, pit, self._board.render())
            return snapshot(self._board)

    def play(self, pit: Pit) -> MoveResult:
        with self._lock:
            result = play_move(self._board, pit)
            if isinstance(result, Finished):
                logger.info("game %s over, score %s:%s", self.game_id, result.score1, result.score2)
            else:
                logger.debug("game %s pit %s %s -> %s", self.game_id, pit, type(result).__name__, self._board.render())
            return result

    def load_pits(self, values: Iterable[int]) -> None:
        with self._lock:
            load_pits(self._board, values)

    def snapshot(self) -> List[Tuple[Pit, int]]:
        with self._lock:
            return snapshot(self._board)

    def view(self) -> GameView:
        with self._lock:
            return GameView(
                snapshot=tuple(snapshot(self._board)),
                current_player=self._board.current_player,
                phase=self._board.phase,
                legal_moves=tuple(legal_moves(self._board)),
            )

    def status(self) -> Dict[Pit, int]:
        return dict(self.snapshot())

    def legal_moves(self) -> List[Pit]:
        with self._lock:
            return legal_moves(self._board)

    def scores(self) -> Tuple[int, int]:
        with self._lock:
            return self._board.scores()

    @property
    def current_player(self) -> Player:
        with self._lock:
            return self._board.current_player

    @current_player.setter
    def current_player(self, player: Player) -> None:
        with self._lock:
            self._board.current_player = Player(player)

    @property
    def phase(self) -> Phase:
        with self._lock:
            return self._board.phase

    @property
    def pit_count(self) -> int:
        return self._board.pit_count
