from __future__ import annotations

# Facade module that re-exports the Kalah core.
# The Flask app and tests import from here; single-responsibility modules live under kalah_core/*.

from kalah_core.board import (  # noqa: F401
    DEFAULT_STONES_PER_PIT,
    Board,
    Phase,
    Pit,
    Player,
    create_board,
    load_pits,
    snapshot,
)
from kalah_core.errors import (  # noqa: F401
    GameOver,
    InvalidInput,
    InvalidMove,
    InvalidPit,
    KalahError,
    NegativeStones,
    UnknownGame,
)
from kalah_core.moves import (  # noqa: F401
    Applied,
    Finished,
    MoveResult,
    Rejected,
    apply_move,
    capture,
    legal_moves,
    play,
    sow,
)
from kalah_core.registry import GameRegistry  # noqa: F401
from kalah_core.session import GameSession, GameView  # noqa: F401


def main() -> None:
    # CLI driver delegated to kalah_core.cli
    from kalah_core.cli import main as _main
    _main()


if __name__ == '__main__':
    main()
