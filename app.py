from __future__ import annotations

import logging
import os
from typing import Any, Dict, Iterable, Optional, Tuple

from flask import Flask, jsonify, request

from game import (
    Finished,
    GameRegistry,
    GameOver,
    GameSession,
    KalahError,
    Phase,
    Pit,
    Player,
    Rejected,
    UnknownGame,
)
from kalah_core.errors import NON_NUMERIC_VALUE


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "on")


STONES_PER_PIT = int(os.getenv("KALAH_STONES_PER_PIT", "6"))
INFER_PLAYER = _env_flag("KALAH_INFER_PLAYER")
LOG_LEVEL = os.getenv("KALAH_LOG_LEVEL", "INFO").upper()

logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO))
logger = logging.getLogger(__name__)

app = Flask(__name__)
registry = GameRegistry(stones_per_pit=STONES_PER_PIT, infer_player=INFER_PLAYER)


def status_to_json(snap: Iterable[Tuple[Pit, int]]) -> Dict[str, str]:
    # Wire format keeps pit numbers and counts as strings
    return {str(int(pit)): str(int(stones)) for pit, stones in snap}


def game_to_json(session: GameSession, snap: Iterable[Tuple[Pit, int]], turn: Player, phase: Phase) -> Dict[str, Any]:
    return {
        "id": str(session.game_id),
        "uri": session.uri,
        "status": status_to_json(snap),
        "turn": int(turn),
        "phase": phase.value,
    }


def _error(kind: str, message: str, code: int, **extra: Any) -> Any:
    body: Dict[str, Any] = {"ok": False, "error": kind, "message": message}
    body.update(extra)
    return jsonify(body), code


def _parse_positive(raw: str) -> Optional[int]:
    """Digits-only path parameter >= 1, else None."""
    if not (raw.isascii() and raw.isdigit()):
        return None
    value = int(raw)
    return value if value >= 1 else None


def _lookup(raw_id: str) -> Tuple[Optional[GameSession], Any]:
    game_id = _parse_positive(raw_id)
    if game_id is None:
        logger.info("rejected game id %r", raw_id)
        return None, _error("BadRequest", NON_NUMERIC_VALUE, 400)
    try:
        return registry.get(game_id), None
    except UnknownGame as e:
        return None, _error(e.kind, str(e), 404)


@app.post("/games")
def create_game() -> Any:
    session = registry.create(uri_prefix=request.base_url)
    resp = jsonify({"ok": True, "id": str(session.game_id), "uri": session.uri})
    resp.status_code = 201
    resp.headers["Location"] = session.uri
    return resp


@app.get("/games/<game_id>")
def get_game(game_id: str) -> Any:
    session, err = _lookup(game_id)
    if session is None:
        return err
    view = session.view()
    body = game_to_json(session, view.snapshot, view.current_player, view.phase)
    body["ok"] = True
    body["legalMoves"] = list(view.legal_moves)
    return jsonify(body)


@app.delete("/games/<game_id>")
def delete_game(game_id: str) -> Any:
    session, err = _lookup(game_id)
    if session is None:
        return err
    try:
        registry.discard(session.game_id)
    except UnknownGame as e:
        # Lost a race with another delete
        return _error(e.kind, str(e), 404)
    return jsonify({"ok": True})


@app.put("/games/<game_id>/pits/<pit_id>")
def make_move(game_id: str, pit_id: str) -> Any:
    session, err = _lookup(game_id)
    if session is None:
        return err
    pit = _parse_positive(pit_id)
    if pit is None or pit > session.pit_count:
        logger.info("rejected pit %r for game %s", pit_id, game_id)
        return _error("BadRequest", NON_NUMERIC_VALUE, 400)

    result = session.play(pit)
    if isinstance(result, Rejected):
        logger.info("game %s: %s on pit %s", session.game_id, result.reason.kind, pit)
        return _error(result.reason.kind, str(result.reason), 400)
    if isinstance(result, Finished):
        return _error(
            "GameOver",
            str(GameOver(result.score1, result.score2)),
            409,
            score=[result.score1, result.score2],
            id=str(session.game_id),
            uri=session.uri,
            status=status_to_json(result.snapshot),
        )
    body = game_to_json(session, result.snapshot, result.current_player, result.phase)
    body["ok"] = True
    body["extraTurn"] = result.extra_turn
    return jsonify(body)


@app.errorhandler(KalahError)
def handle_kalah_error(e: KalahError) -> Any:
    return _error(e.kind, str(e), 400)


# Entrypoint for "python app.py"
if __name__ == "__main__":
    debug = _env_flag("FLASK_DEBUG", os.getenv("DEBUG", "0"))
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
