from __future__ import annotations

import argparse
import logging
from typing import List, Optional, Tuple

from .board import DEFAULT_STONES_PER_PIT, Board, Phase, create_board
from .errors import GameOver, KalahError
from .moves import apply_move, legal_moves


def prompt_pit(board: Board) -> int:
    moves = legal_moves(board)
    if board.phase == Phase.INITIAL and board.infer_player:
        print('Either player may open. Legal pits:', moves)
    else:
        print(f'Player {int(board.current_player)} to move. Legal pits:', moves)
    while True:
        text = input('Enter a pit number: ').strip()
        try:
            pit = int(text)
        except ValueError:
            print('Could not parse. Try again.')
            continue
        if pit in moves:
            return pit
        print('Illegal move. Try again.')


def run(board: Board) -> Tuple[int, int]:
    """Plays a hot-seat game on `board` until it ends; returns the final score."""
    print(board.pretty())
    while True:
        pit = prompt_pit(board)
        try:
            apply_move(board, pit)
        except GameOver as e:
            print(board.pretty())
            s1, s2 = e.score
            if s1 == s2:
                print(f'Draw! Score is {s1}:{s2}')
            else:
                print(f'Player {1 if s1 > s2 else 2} wins! Score is {s1}:{s2}')
            return e.score
        except KalahError as e:
            print('error:', e)
            continue
        print(board.pretty())


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description='Two-player Kalah at one terminal')
    parser.add_argument('--stones', type=int, default=DEFAULT_STONES_PER_PIT, help='Stones per pit (board has 2*stones+2 pits)')
    parser.add_argument('--infer-player', action='store_true', help='Let the first move decide which player opens')
    parser.add_argument('--log-level', default='WARNING', help='Logging level')
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, str(args.log_level).upper(), logging.WARNING))
    if args.stones < 1:
        parser.error('--stones must be positive')
    board = create_board(args.stones, infer_player=args.infer_player)
    try:
        run(board)
    except (KeyboardInterrupt, EOFError):
        print('\nbye')
