from __future__ import annotations

import os
import sys
from typing import Any, Dict, List, Optional, Sequence

from flask import Flask, jsonify, request

# Ensure package imports work when executed directly from repo root
if __package__ in (None, ""):
    sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

from game import (  # noqa: E402
    GameSettings,
    GameTimeline,
    Grid,
    GridError,
    PatternMask,
    Size,
    VictoryResult,
    default_settings,
    iter_victories,
    max_editable_size,
)

app = Flask(__name__)


class BadPayload(Exception):
    """Request body is missing keys or carries values of the wrong type."""


# ---------- JSON conversion ----------

def size_to_json(s: Size) -> Dict[str, Any]:
    return {"width": int(s.width), "height": int(s.height)}


def size_from_json(obj: Dict[str, Any]) -> Size:
    return Size(int(obj["width"]), int(obj["height"]))


def grid_to_json(g: Grid) -> Dict[str, Any]:
    return {"width": g.width, "height": g.height, "cells": list(g.cells)}


def grid_from_json(obj: Dict[str, Any]) -> Grid:
    cells = tuple(None if c is None else str(c) for c in obj["cells"])
    return Grid(Size(int(obj["width"]), int(obj["height"])), cells)


def mask_to_json(m: PatternMask) -> Dict[str, Any]:
    return {"rows": m.to_rows()}


def mask_from_json(obj: Dict[str, Any]) -> PatternMask:
    rows = obj["rows"]
    if not isinstance(rows, list):
        raise TypeError("rows must be a list of strings")
    return PatternMask.from_rows([str(r) for r in rows])


def settings_to_json(s: GameSettings) -> Dict[str, Any]:
    return {
        "size": size_to_json(s.board_size),
        "patterns": [mask_to_json(m) for m in s.win_masks],
        "marks": list(s.marks),
    }


def settings_from_json(obj: Dict[str, Any]) -> GameSettings:
    base = default_settings()
    size = size_from_json(obj["size"]) if "size" in obj else base.board_size
    masks = tuple(mask_from_json(m) for m in obj["patterns"]) if "patterns" in obj else base.win_masks
    marks = tuple(obj.get("marks", base.marks))
    return GameSettings(board_size=size, win_masks=masks, marks=marks)  # type: ignore[arg-type]


def victory_to_json(v: Optional[VictoryResult], pattern_index: Optional[int] = None) -> Optional[Dict[str, Any]]:
    if v is None:
        return None
    return {
        "winner": v.winner,
        "origin": {"x": v.origin.x, "y": v.origin.y},
        "mask": mask_to_json(v.mask),
        "patternIndex": pattern_index,
    }


def _first_match(board: Grid, masks: Sequence[PatternMask]) -> Optional[Dict[str, Any]]:
    match = next(iter_victories(board, masks), None)
    if match is None:
        return None
    position, result = match
    return victory_to_json(result, position)


def timeline_to_json(t: GameTimeline) -> Dict[str, Any]:
    return {
        "settings": settings_to_json(t.settings),
        "history": [grid_to_json(g) for g in t.history],
        "cursor": t.cursor,
        "status": t.current_status.value,
        "statusText": t.status_text(),
        "nextMark": t.next_mark,
        "victory": _first_match(t.current, t.masks),
        "highlight": list(t.highlight()),
        "moves": t.moves(),
    }


def timeline_from_json(obj: Dict[str, Any]) -> GameTimeline:
    settings = settings_from_json(obj["settings"])
    history = tuple(grid_from_json(g) for g in obj["history"])
    return GameTimeline(settings=settings, history=history, cursor=int(obj.get("cursor", len(history) - 1)))


def _parse(fn, obj: Any) -> Any:
    """Runs a JSON converter, turning malformed input into BadPayload; core errors pass through."""
    try:
        return fn(obj)
    except GridError:
        raise
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise BadPayload(f"{fn.__name__}: {e!r}")


def _body() -> Dict[str, Any]:
    body = request.get_json(force=True, silent=True)
    if not isinstance(body, dict):
        raise BadPayload("JSON object body required")
    return body


def _require(body: Dict[str, Any], key: str) -> Any:
    if key not in body:
        raise BadPayload(f"{key} required")
    return body[key]


def _check_editable(size: Size) -> None:
    limit = max_editable_size()
    if size.width > limit or size.height > limit:
        raise BadPayload(f"size {size.width}x{size.height} exceeds editing limit {limit}")


def _check_settings_editable(settings: GameSettings) -> None:
    _check_editable(settings.board_size)
    for mask in settings.win_masks:
        _check_editable(mask.size)


# ---------- Error handlers ----------

@app.errorhandler(GridError)
def handle_grid_error(e: GridError) -> Any:
    app.logger.warning("rejected request: %s (%s)", e, e.code)
    return jsonify({"ok": False, "error": str(e), "kind": type(e).__name__}), 400


@app.errorhandler(BadPayload)
def handle_bad_payload(e: BadPayload) -> Any:
    app.logger.warning("bad payload: %s", e)
    return jsonify({"ok": False, "error": f"bad payload: {e}"}), 400


# ---------- Game API ----------

@app.get("/api/health")
def api_health() -> Any:
    return jsonify({"ok": True})


@app.get("/api/defaults")
def api_defaults() -> Any:
    return jsonify({"ok": True, "settings": settings_to_json(default_settings()), "maxSize": max_editable_size()})


@app.post("/api/new")
def api_new() -> Any:
    body = request.get_json(force=True, silent=True)
    s_in = body.get("settings") if isinstance(body, dict) else None
    if isinstance(s_in, dict):
        settings = _parse(settings_from_json, s_in)
        _check_settings_editable(settings)
    else:
        settings = default_settings()
    timeline = GameTimeline.start(settings)
    app.logger.info(
        "new game %dx%d with %d patterns",
        settings.board_size.width, settings.board_size.height, len(settings.win_masks),
    )
    return jsonify({"ok": True, "timeline": timeline_to_json(timeline)})


@app.post("/api/settings")
def api_settings() -> Any:
    body = _body()
    settings = _parse(settings_from_json, _require(body, "settings"))
    _check_settings_editable(settings)
    app.logger.info("settings changed; timeline reset")
    return jsonify({
        "ok": True,
        "settings": settings_to_json(settings),
        "timeline": timeline_to_json(GameTimeline.start(settings)),
    })


@app.post("/api/move")
def api_move() -> Any:
    body = _body()
    timeline = _parse(timeline_from_json, _require(body, "timeline"))
    index = _parse(int, _require(body, "index"))
    after = timeline.apply_move(index)
    applied = after is not timeline
    app.logger.debug("move %d at step %d applied=%s", index, timeline.cursor, applied)
    return jsonify({"ok": True, "applied": applied, "timeline": timeline_to_json(after)})


@app.post("/api/jump")
def api_jump() -> Any:
    body = _body()
    timeline = _parse(timeline_from_json, _require(body, "timeline"))
    step = _parse(int, _require(body, "step"))
    app.logger.debug("jump to step %d", step)
    return jsonify({"ok": True, "timeline": timeline_to_json(timeline.jump_to(step))})


@app.post("/api/victory")
def api_victory() -> Any:
    body = _body()
    board = _parse(grid_from_json, _require(body, "grid"))
    patterns_in = body.get("patterns")
    if patterns_in is None:
        masks: List[PatternMask] = list(default_settings().win_masks)
    else:
        if not isinstance(patterns_in, list):
            raise BadPayload("patterns must be a list")
        masks = [_parse(mask_from_json, m) for m in patterns_in]
    match = next(iter_victories(board, masks), None)
    if match is None:
        return jsonify({"ok": True, "victory": None, "highlight": [False] * board.size.area()})
    position, result = match
    return jsonify({
        "ok": True,
        "victory": victory_to_json(result, position),
        "highlight": list(result.highlight_mask(board.size)),
    })


@app.post("/api/pattern/toggle")
def api_pattern_toggle() -> Any:
    body = _body()
    mask = _parse(mask_from_json, _require(body, "mask"))
    index = _parse(int, _require(body, "index"))
    return jsonify({"ok": True, "mask": mask_to_json(mask.toggle(index))})


@app.post("/api/pattern/resize")
def api_pattern_resize() -> Any:
    body = _body()
    mask = _parse(mask_from_json, _require(body, "mask"))
    size = _parse(size_from_json, _require(body, "size"))
    _check_editable(size)
    return jsonify({"ok": True, "mask": mask_to_json(mask.resize(size))})


# Entrypoint for "python app.py"
if __name__ == "__main__":
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    host = os.getenv("GRIDWIN_HOST", "127.0.0.1")
    port = int(os.getenv("GRIDWIN_PORT", "5000"))
    app.run(host=host, port=port, debug=debug)
