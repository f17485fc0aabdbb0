from __future__ import annotations

import os
from typing import Any, Dict, List, Optional, Tuple

from flask import Flask, jsonify, request

# Prefer the relative import when loaded as part of a package, then the top-level facade.
try:
    from .game import (  # type: ignore
        BoardState,
        FigureKind,
        GameStatus,
        Move,
        SaveConflict,
        DEFAULT_DIM,
        initial_layout,
        is_valid_move,
        apply_move,
        legal_moves,
        is_fox_win,
        is_hound_win,
        game_status,
        next_mover,
        format_position,
        save_game,
        load_state,
    )
except ImportError:
    from game import (  # type: ignore
        BoardState,
        FigureKind,
        GameStatus,
        Move,
        SaveConflict,
        DEFAULT_DIM,
        initial_layout,
        is_valid_move,
        apply_move,
        legal_moves,
        is_fox_win,
        is_hound_win,
        game_status,
        next_mover,
        format_position,
        save_game,
        load_state,
    )

DEFAULT_SAVE_DIR = "saves"

app = Flask(__name__)

_WINNERS = {
    GameStatus.FOX_WINS: FigureKind.FOX.value,
    GameStatus.HOUNDS_WIN: FigureKind.HOUND.value,
}


def _save_dir() -> str:
    return os.path.abspath(os.getenv("FOXHOUND_SAVE_DIR", DEFAULT_SAVE_DIR))


def _save_path(name: Any) -> Optional[str]:
    """Resolves a client-supplied save name under the save directory. Directory parts are dropped."""
    if not isinstance(name, str):
        return None
    base = os.path.basename(name.replace("\\", "/").strip())
    if base in ("", ".", ".."):
        return None
    return os.path.join(_save_dir(), base)


def state_to_json(s: BoardState) -> Dict[str, Any]:
    return {
        "dimension": int(s.dimension),
        "hounds": [format_position(x, y) for (x, y) in s.hounds],
        "fox": format_position(*s.fox),
    }


def json_to_state(obj: Dict[str, Any]) -> BoardState:
    """Builds and checks a BoardState from JSON. Raises KeyError/TypeError/ValueError on bad input."""
    hounds = obj["hounds"]
    if not isinstance(hounds, list):
        raise TypeError("hounds must be a list")
    state = BoardState.from_positions(dimension_from_json(obj["dimension"]), [*hounds, obj["fox"]])
    state.check_invariants()
    return state


def dimension_from_json(value: Any) -> int:
    # bool is an int subclass; floats and strings are not coerced.
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"dimension must be an integer, got {value!r}")
    return value


def figure_from_json(token: Any) -> FigureKind:
    try:
        return FigureKind(token)
    except ValueError:
        raise ValueError(f"figure must be 'F' or 'H', got {token!r}") from None


def _moves_to_json(moves: List[Move]) -> List[List[str]]:
    return [[m.origin, m.destination] for m in moves]


def _bad_request(msg: str, status: int = 400, **extra: Any) -> Tuple[Any, int]:
    return jsonify({"ok": False, "error": msg, **extra}), status


def _body() -> Dict[str, Any]:
    body = request.get_json(force=True, silent=True)
    return body if isinstance(body, dict) else {}


# ---------- Game API ----------

@app.post("/api/new")
def api_new() -> Any:
    body = _body()
    try:
        state = initial_layout(dimension_from_json(body.get("dimension", DEFAULT_DIM)))
    except (TypeError, ValueError) as e:
        return _bad_request(f"bad dimension: {e}")
    turn = FigureKind.FOX
    return jsonify({
        "ok": True,
        "state": state_to_json(state),
        "turn": turn.value,
        "status": game_status(state).value,
        "legalMoves": _moves_to_json(legal_moves(state, turn)),
    })


@app.post("/api/legal")
def api_legal() -> Any:
    body = _body()
    try:
        state = json_to_state(body["state"])
        figure = figure_from_json(body.get("figure"))
    except (KeyError, TypeError, ValueError) as e:
        return _bad_request(f"bad state: {e}")
    return jsonify({"ok": True, "legalMoves": _moves_to_json(legal_moves(state, figure))})


@app.post("/api/move")
def api_move() -> Any:
    body = _body()
    try:
        state = json_to_state(body["state"])
        figure = figure_from_json(body.get("figure"))
        origin = body["origin"]
        dest = body["dest"]
        valid = is_valid_move(state, figure, origin, dest)
    except (KeyError, TypeError, ValueError) as e:
        return _bad_request(f"bad move: {e}")
    if not valid:
        return _bad_request("Illegal move", legalMoves=_moves_to_json(legal_moves(state, figure)))

    apply_move(state, Move(figure, origin, dest))
    status = game_status(state)
    return jsonify({
        "ok": True,
        "state": state_to_json(state),
        "turn": next_mover(figure).value,
        "status": status.value,
        "winner": _WINNERS.get(status),
    })


@app.post("/api/status")
def api_status() -> Any:
    body = _body()
    try:
        state = json_to_state(body["state"])
    except (KeyError, TypeError, ValueError) as e:
        return _bad_request(f"bad state: {e}")
    return jsonify({
        "ok": True,
        "status": game_status(state).value,
        "foxWin": is_fox_win(format_position(*state.fox)),
        "houndWin": is_hound_win(state),
    })


# ---------- Persistence API ----------

@app.post("/api/save")
def api_save() -> Any:
    body = _body()
    path = _save_path(body.get("name"))
    if path is None:
        return _bad_request("name required")
    try:
        state = json_to_state(body["state"])
        turn = figure_from_json(body.get("turn"))
    except (KeyError, TypeError, ValueError) as e:
        return _bad_request(f"bad state: {e}")

    try:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        saved = save_game(state, turn, path)
    except SaveConflict:
        return _bad_request("save file already exists", 409)
    except ValueError as e:
        return _bad_request(str(e))
    except OSError:
        saved = False
    if not saved:
        return _bad_request("saving file failed", 500)
    return jsonify({"ok": True, "name": os.path.basename(path)})


@app.post("/api/load")
def api_load() -> Any:
    body = _body()
    path = _save_path(body.get("name"))
    if path is None:
        return _bad_request("name required")
    if not os.path.isfile(path):
        return _bad_request("save file not found", 404)
    loaded = load_state(path)
    if loaded is None:
        return _bad_request("save file is invalid", 422)
    turn, state = loaded
    return jsonify({"ok": True, "state": state_to_json(state), "turn": turn.value})


# Entrypoint for "python app.py"
if __name__ == "__main__":
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
