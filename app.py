from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request

from game import (
    Board,
    Game,
    IllegalMove,
    CorruptSaveFile,
    SaveFileError,
    SUITS,
    STACKS,
    MAX_RANKS,
    apply_move,
    card_label,
    is_done,
    restore_game,
    save_game,
)
from saa_core.config import configure_logging, save_path, seed_from_env
from saa_core.keys import HELP_TEXT

app = Flask(__name__)
logger = logging.getLogger(__name__)

# The one game served by this process.
_GAME: Optional[Game] = None


def current_game() -> Game:
    global _GAME
    if _GAME is None:
        _GAME = Game.new(MAX_RANKS, save_path=save_path(), seed=seed_from_env())
        _GAME.new_deal()
    return _GAME


def reset_game(game: Optional[Game] = None) -> None:
    """Replaces the served game; None makes the next request deal a fresh one."""
    global _GAME
    _GAME = game


def board_to_json(board: Board) -> Dict[str, Any]:
    stacks = board.stacks()
    return {
        "ranks": int(board.rank_count),
        "foundations": list(board.foundations()),
        "stacks": [list(cards) for cards in stacks],
        "labels": {
            "foundations": [card_label(c) for c in board.foundations()],
            "stacks": [[card_label(c) for c in cards] for cards in stacks],
        },
        "done": is_done(board),
    }


def board_from_json(obj: Dict[str, Any]) -> Board:
    """Builds a board from board_to_json output. Raises ValueError if it does not hold a full deck."""
    ranks = int(obj["ranks"])
    foundations = [int(c) for c in obj["foundations"]]
    stacks = [[int(c) for c in cards] for cards in obj["stacks"]]
    if len(foundations) != SUITS or len(stacks) != STACKS:
        raise ValueError("need 4 foundations and 8 stacks")
    if sum(len(cards) for cards in stacks) > ranks * SUITS:
        raise ValueError("too many cards")
    board = Board(ranks)
    board.load(ranks, foundations, stacks)
    if not board.is_consistent():
        raise ValueError("cards do not match the deck")
    return board


def _state_response(game: Game, **extra: Any) -> Any:
    body = {"ok": True, "board": board_to_json(game.board)}
    body.update(extra)
    return jsonify(body)


@app.get("/api/state")
def api_state() -> Any:
    return _state_response(current_game())


@app.get("/api/help")
def api_help() -> Any:
    return jsonify({"ok": True, "help": HELP_TEXT})


@app.post("/api/new")
def api_new() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    game = current_game()
    try:
        ranks = int(body.get("ranks", game.rank_count))
        seed = body.get("seed", None)
        if seed is not None:
            game = Game.new(ranks, save_path=game.save_path, seed=int(seed))
            reset_game(game)
        game.new_deal(ranks)
    except (TypeError, ValueError) as e:
        return jsonify({"ok": False, "error": str(e)}), 400
    return _state_response(game)


@app.post("/api/new_from")
def api_new_from() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    b_in = body.get("board")
    if not isinstance(b_in, dict):
        return jsonify({"ok": False, "error": "board required"}), 400
    try:
        board = board_from_json(b_in)
    except (KeyError, TypeError, ValueError) as e:
        return jsonify({"ok": False, "error": f"bad board: {e}"}), 400
    game = current_game()
    game.board.load(board.rank_count, board.foundations(), board.stacks())
    return _state_response(game)


@app.post("/api/move")
def api_move() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        src = int(body["from"]) - 1
        to = int(body["to"])
    except (KeyError, TypeError, ValueError):
        return jsonify({"ok": False, "error": "from (1-8) and to (0-8) required"}), 400
    if not 0 <= src < STACKS or not 0 <= to <= STACKS:
        return jsonify({"ok": False, "error": "from (1-8) and to (0-8) required"}), 400
    game = current_game()
    try:
        result = apply_move(game.board, src, None if to == 0 else to - 1)
    except IllegalMove as e:
        return jsonify({"ok": False, "error": str(e), "reason": e.result.reason}), 400
    return _state_response(game, status=result.describe(), won=is_done(game.board))


@app.post("/api/save")
def api_save() -> Any:
    game = current_game()
    try:
        save_game(game.board, game.save_path)
    except SaveFileError as e:
        logger.warning("save failed: %s", e)
        return jsonify({"ok": False, "error": f"Save error: {e}"}), 500
    return jsonify({"ok": True, "status": "Game saved."})


@app.post("/api/restore")
def api_restore() -> Any:
    game = current_game()
    try:
        restore_game(game.board, game.save_path)
    except CorruptSaveFile as e:
        return jsonify({"ok": False, "error": f"Restore error: {e}", "offerRedeal": True}), 400
    except SaveFileError as e:
        return jsonify({"ok": False, "error": f"Restore error: {e}", "offerRedeal": False}), 400
    return _state_response(game, status=f"Game restored from {game.save_path}.")


def main() -> None:
    configure_logging()
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    # One game per process, served from a single thread.
    app.run(host=os.getenv("HOST", "127.0.0.1"), port=int(os.getenv("PORT", "5000")), debug=debug, threaded=False)


if __name__ == "__main__":
    main()
