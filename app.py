from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional, Tuple

from flask import Flask, jsonify, request

from ballsort_core.containers import GameConfig
from ballsort_core.deal import deal_puzzle
from ballsort_core.errors import ConfigError, IllegalMoveError
from ballsort_core.logs import setup_logging
from ballsort_core.moves import apply_pour, legal_transitions
from ballsort_core.parse import parse_game_input, puzzle_to_json
from ballsort_core.report import aborted_to_json, solution_to_json, transition_to_json
from ballsort_core.settings import deal_limits, env_flag, env_int, log_level, max_steps_default
from ballsort_core.solver import solve_bounded
from ballsort_core.state import GameState

logger = logging.getLogger(__name__)

app = Flask(__name__)


def _body() -> Dict[str, Any]:
    data = request.get_json(force=True, silent=True)
    return data if isinstance(data, dict) else {}


def _puzzle_from_body(body: Dict[str, Any]) -> Tuple[GameConfig, GameState]:
    puzzle = body.get("puzzle")
    if puzzle is None:
        raise ConfigError("puzzle required")
    return parse_game_input(puzzle)


def _legal_json(cfg: GameConfig, state: GameState):
    return [transition_to_json(t, cfg) for t in legal_transitions(state, cfg)]


def _optional_int(value: Any, name: str) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{name} must be an integer")
    return value


def _slot_from_wire(move: Any, name: str) -> int:
    """Reads a 1-based slot number from a move object and returns the 0-based index."""
    value = move.get(name) if isinstance(move, dict) else None
    if isinstance(value, bool) or not isinstance(value, int):
        raise IllegalMoveError(f"move must be {{\"from\": int, \"to\": int}}, got {name}={value!r}")
    return value - 1


@app.errorhandler(ConfigError)
def _bad_puzzle(e: ConfigError) -> Any:
    return jsonify({"ok": False, "error": f"bad puzzle: {e}"}), 400


@app.get("/api/health")
def api_health() -> Any:
    return jsonify({"ok": True})


@app.post("/api/new")
def api_new() -> Any:
    body = _body()
    num_colors = _optional_int(body.get("colors"), "colors")
    capacity = _optional_int(body.get("capacity"), "capacity")
    num_empty = _optional_int(body.get("empty"), "empty")
    seed = _optional_int(body.get("seed"), "seed")
    num_colors = 4 if num_colors is None else num_colors
    capacity = 4 if capacity is None else capacity
    num_empty = 2 if num_empty is None else num_empty
    max_colors, max_capacity, max_empty = deal_limits()
    for name, value, limit in (("colors", num_colors, max_colors),
                               ("capacity", capacity, max_capacity),
                               ("empty", num_empty, max_empty)):
        if value > limit:
            raise ConfigError(f"{name} must be at most {limit}, got {value}")
    cfg, state = deal_puzzle(num_colors, capacity, num_empty, seed=seed)
    return jsonify({
        "ok": True,
        "puzzle": puzzle_to_json(cfg, state),
        "legalMoves": _legal_json(cfg, state),
        "solved": state.is_terminal(cfg),
    })


@app.post("/api/legal")
def api_legal() -> Any:
    cfg, state = _puzzle_from_body(_body())
    return jsonify({"ok": True, "legalMoves": _legal_json(cfg, state)})


@app.post("/api/move")
def api_move() -> Any:
    body = _body()
    cfg, state = _puzzle_from_body(body)
    move = body.get("move")
    try:
        src = _slot_from_wire(move, "from")
        dst = _slot_from_wire(move, "to")
        t = apply_pour(state, cfg, src, dst)
    except IllegalMoveError as e:
        msg = str(e)
        return jsonify({"ok": False, "error": f"Illegal move: {msg}", "legalMoves": _legal_json(cfg, state)}), 400
    nxt = t.to_state
    return jsonify({
        "ok": True,
        "move": transition_to_json(t, cfg),
        "puzzle": puzzle_to_json(cfg, nxt),
        "legalMoves": _legal_json(cfg, nxt),
        "solved": nxt.is_terminal(cfg),
    })


@app.post("/api/solve")
def api_solve() -> Any:
    body = _body()
    cfg, state = _puzzle_from_body(body)
    max_steps = _optional_int(body.get("maxSteps"), "maxSteps")
    if max_steps is None:
        max_steps = max_steps_default()
    elif max_steps <= 0:
        max_steps = None
    result, stats = solve_bounded(cfg, state, max_steps)
    if result is None:
        return jsonify({"ok": True, **aborted_to_json(stats, max_steps)})
    return jsonify({"ok": True, "aborted": False, **solution_to_json(result, cfg)})


# Entrypoint for "python app.py"
if __name__ == "__main__":
    setup_logging(log_level())
    debug = env_flag("FLASK_DEBUG", os.getenv("DEBUG", "0"))
    port = env_int("PORT", 5000)
    logger.info("serving on port %d (debug=%s)", port, debug)
    app.run(host="0.0.0.0", port=port, debug=debug)
