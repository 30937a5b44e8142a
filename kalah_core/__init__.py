"""
Kalah core Python package.

Pure rules logic shared by the Flask app (app.py) and the hot-seat CLI.
Modules:
- board.py: Board, Player, Phase, create_board, snapshot, load_pits
- errors.py: error taxonomy and user-facing messages
- moves.py: apply_move (sowing, captures, turns, end of game) and the tagged play() result
- session.py: GameSession, one locked board per game
- registry.py: GameRegistry, id -> session map
"""
