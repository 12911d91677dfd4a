"""
main.py — Algorithm Visualizer Flask App
=========================================
Thin JSON front end over the core.  The browser owns pacing and drawing:
it asks for a recorded trace and replays it at the chosen speed.

Routes:
  GET  /api/algorithms          – registry (optionally ?kind=pathfinding|sorting, ?tag=...)
  GET  /api/grid                – current board
  POST /api/grid/tool           – apply a tool (wall / start / end) at row, col
  POST /api/grid/clear_walls    – remove every wall
  POST /api/grid/clear_trace    – wipe visited / path marks
  POST /api/grid/reset          – default board
  POST /api/grid/import         – replace the board from text (S . # E)
  GET  /api/array               – current bars
  POST /api/array/input         – adopt a typed vector "45, 23, 67"
  POST /api/array/random        – random bars
  POST /api/run                 – record a full run, return events + metrics

State management:
  One in-process Workspace (grid + array).  There are no sessions and
  nothing is persisted.
"""

import logging

from flask import Flask, jsonify, request

from algorithms import PATHFINDING, SORTING, algorithms_by_tag, get_algorithm, list_algorithms
from engine import Recorder, SPEED_PRESETS, DEFAULT_DELAY_MS
from engine.stepper import clamp_delay
from models import ArrayModel, ConcurrentRunRejected, Grid, VisualizerError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Workspace
# ---------------------------------------------------------------------------
class Workspace:
    def __init__(self):
        self.grid  = Grid()
        self.array = ArrayModel()


TOOLS = {
    "wall":  Grid.toggle_wall,
    "start": Grid.set_start,
    "end":   Grid.set_end,
}


def create_app(workspace: Workspace = None) -> Flask:
    app = Flask(__name__)
    ws = workspace or Workspace()
    app.config["WORKSPACE"] = ws

    # -----------------------------------------------------------------------
    # Errors → JSON
    # -----------------------------------------------------------------------
    @app.errorhandler(VisualizerError)
    def handle_visualizer_error(err):
        status = 409 if isinstance(err, ConcurrentRunRejected) else 400
        logger.warning("Rejected %s %s: %s", request.method, request.path, err)
        return jsonify({"error": str(err), "kind": type(err).__name__}), status

    def body() -> dict:
        return request.get_json(silent=True) or {}

    # -----------------------------------------------------------------------
    # API: Registry
    # -----------------------------------------------------------------------
    @app.route("/api/algorithms")
    def api_algorithms():
        kind = request.args.get("kind")
        tag  = request.args.get("tag")
        algos = list_algorithms(kind)
        if tag is not None:
            algos = [a for a in algorithms_by_tag(tag) if kind in (None, a.kind)]
        return jsonify({
            "algorithms": [a.to_dict() for a in algos],
            "speeds":     SPEED_PRESETS,
        })

    # -----------------------------------------------------------------------
    # API: Grid
    # -----------------------------------------------------------------------
    @app.route("/api/grid")
    def api_grid():
        return jsonify(ws.grid.to_dict())

    @app.route("/api/grid/tool", methods=["POST"])
    def api_grid_tool():
        data = body()
        tool = TOOLS.get(data.get("tool", "wall"))
        if tool is None:
            return jsonify({"error": f"Unknown tool: {data.get('tool')}"}), 400
        try:
            row, col = int(data["row"]), int(data["col"])
        except (KeyError, TypeError, ValueError):
            return jsonify({"error": "row and col are required integers"}), 400
        applied = tool(ws.grid, row, col)
        return jsonify({"applied": applied, "grid": ws.grid.to_dict()})

    @app.route("/api/grid/clear_walls", methods=["POST"])
    def api_grid_clear_walls():
        ws.grid.clear_walls()
        return jsonify(ws.grid.to_dict())

    @app.route("/api/grid/clear_trace", methods=["POST"])
    def api_grid_clear_trace():
        ws.grid.clear_trace()
        return jsonify(ws.grid.to_dict())

    @app.route("/api/grid/reset", methods=["POST"])
    def api_grid_reset():
        ws.grid.reset()
        return jsonify(ws.grid.to_dict())

    @app.route("/api/grid/import", methods=["POST"])
    def api_grid_import():
        if ws.grid.locked:
            raise ConcurrentRunRejected("Grid cannot be replaced while a run is active")
        ws.grid = Grid.from_text(body().get("text", ""))
        return jsonify(ws.grid.to_dict())

    # -----------------------------------------------------------------------
    # API: Array
    # -----------------------------------------------------------------------
    @app.route("/api/array")
    def api_array():
        return jsonify(ws.array.to_dict())

    @app.route("/api/array/input", methods=["POST"])
    def api_array_input():
        ws.array.load(body().get("text", ""))
        return jsonify(ws.array.to_dict())

    @app.route("/api/array/random", methods=["POST"])
    def api_array_random():
        size = body().get("size")
        if size is None:
            ws.array.generate()
        else:
            try:
                size = int(size)
            except (TypeError, ValueError):
                return jsonify({"error": "size must be an integer"}), 400
            ws.array.randomize(size)
        return jsonify(ws.array.to_dict())

    # -----------------------------------------------------------------------
    # API: Run
    # -----------------------------------------------------------------------
    @app.route("/api/run", methods=["POST"])
    def api_run():
        data = body()
        algo_key = data.get("algorithm", "dijkstra")
        info = get_algorithm(algo_key)
        if info is None:
            return jsonify({"error": f"Unknown algorithm: {algo_key}"}), 400
        try:
            delay_ms = clamp_delay(float(data.get("delay_ms", DEFAULT_DELAY_MS)))
        except (TypeError, ValueError):
            return jsonify({"error": "delay_ms must be a number"}), 400

        if info.kind == PATHFINDING:
            subject = ws.grid.snapshot()
            ws.grid.clear_trace()
        else:
            subject = ws.array.snapshot()

        rec = Recorder()
        rec.start(algo_key, subject)
        rec.run_to_completion()

        if info.kind == PATHFINDING:
            for event in rec.events:
                ws.grid.apply(event)
            ws.grid.record_outcome(rec.result)
        elif info.kind == SORTING:
            ws.array.set_values(rec.result)

        payload = rec.export()
        payload["delay_ms"] = delay_ms
        return jsonify(payload)

    return app


app = create_app()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    app.run(debug=True, port=5000)
