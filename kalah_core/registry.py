from __future__ import annotations

import itertools
import logging
import threading
from typing import Dict, List

from .board import DEFAULT_STONES_PER_PIT, create_board
from .errors import UnknownGame
from .session import GameSession

logger = logging.getLogger(__name__)


class GameRegistry:
    """In-memory map of game id -> GameSession.

    The registry lock only guards the map and the id counter; moves take the
    session's own lock, so one game never blocks another.
    """

    def __init__(self, stones_per_pit: int = DEFAULT_STONES_PER_PIT, infer_player: bool = False) -> None:
        self.stones_per_pit = stones_per_pit
        self.infer_player = infer_player
        self._games: Dict[int, GameSession] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def create(self, uri_prefix: str = "") -> GameSession:
        board = create_board(self.stones_per_pit, infer_player=self.infer_player)
        with self._lock:
            game_id = next(self._ids)
            session = GameSession(game_id, board, uri=f"{uri_prefix.rstrip('/')}/{game_id}" if uri_prefix else "")
            self._games[game_id] = session
        logger.info("created game %s (%s stones per pit)", game_id, self.stones_per_pit)
        return session

    def get(self, game_id: int) -> GameSession:
        with self._lock:
            session = self._games.get(game_id)
        if session is None:
            raise UnknownGame()
        return session

    def discard(self, game_id: int) -> None:
        with self._lock:
            if self._games.pop(game_id, None) is None:
                raise UnknownGame()
        logger.info("discarded game %s", game_id)

    def ids(self) -> List[int]:
        with self._lock:
            return sorted(self._games)

    def __contains__(self, game_id: object) -> bool:
        with self._lock:
            return game_id in self._games

    def __len__(self) -> int:
        with self._lock:
            return len(self._games)
