"""
main.py — Algorithm Step Visualizer: Flask API & CLI
=====================================================
The web server (and terminal player) in front of the step engine.

Routes:
  GET  /api/algorithms         – registry cards (pseudocode, complexity, …)
  POST /api/run                – parse input, run algorithm, return step 0
  POST /api/step/next          – advance one step
  POST /api/step/prev          – rewind one step
  POST /api/step/goto          – jump to step N
  POST /api/reset              – back to step 0, same input
  GET  /api/state              – current session state

State management:
  Flask session holds only the *parsed inputs* (array, target, graph
  text, start/end, tree values, value) plus the current step index.
  Step generation is deterministic, so every request regenerates the
  trace from those inputs instead of storing it.

Errors:
  InputError / unknown algorithm  →  400 {"error": message}
  precondition fix (binary search on unsorted input)
                                  →  200 {"precondition_fixed": true, …}

Command line:
  python main.py                      serve on :5000
  python main.py serve --port 8000
  python main.py play bubble --array 5,2,9,1,6 --speed fast
  python main.py play binary --array 9,3,7 --target 7 --step-mode
"""

import argparse
import asyncio
import logging
import os
import secrets
import sys
from typing import Any, Dict, List, Optional

from flask import Flask, jsonify, request, session

from algorithms import (
    fix_precondition,
    generate_steps,
    list_algorithms,
    require_algorithm,
)
from algorithms.step import Step, StepKind
from engine import PlaybackController, PlaybackMode, PlaybackState, Recorder, SPEED_PRESETS
from parsing import (
    parse_array,
    parse_graph,
    parse_int,
    parse_node,
    parse_target,
    parse_tree_size,
    parse_tree_values,
)
from tree import build_bst, random_values, tree_to_dict, TreeNode


log = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = os.environ.get("VISUALIZER_SECRET_KEY") or secrets.token_hex(32)


# ---------------------------------------------------------------------------
# Input assembly
# ---------------------------------------------------------------------------
def collect_inputs(key: str, fields: Dict[str, Any]) -> Dict[str, Any]:
    """
    Raw form fields → the *stored* input bundle for algorithm `key`.
    Random defaults are materialised here so the bundle regenerates the
    same trace every time.  Raises InputError / ValueError.
    """
    info = require_algorithm(key)
    family = info.family

    def text(name: str) -> Optional[str]:
        value = fields.get(name)
        return None if value is None else str(value)

    stored: Dict[str, Any] = {}
    if family in (StepKind.SORT, StepKind.SEARCH):
        stored["array"] = parse_array(text("array"))
        if family is StepKind.SEARCH:
            stored["target"] = parse_target(text("target"), stored["array"])

    elif family is StepKind.GRAPH:
        graph_text = text("graph") or ""
        graph = parse_graph(graph_text)
        stored["graph"] = graph_text
        stored["start"] = parse_node(text("start"), graph, "start node")
        if "end" in info.inputs:
            ids = graph.node_ids()
            stored["end"] = parse_node(text("end"), graph, "end node", default=max(ids) if ids else None)

    elif family is StepKind.TREE:
        values = parse_tree_values(text("tree"))
        if not values:
            values = random_values(parse_tree_size(text("tree_size")))
        stored["tree"] = values
        if "value" in info.inputs:
            stored["value"] = parse_int(text("value") or "", "value")

    return stored


def algorithm_inputs(stored: Dict[str, Any]) -> Dict[str, Any]:
    """Stored bundle → keyword arguments for the algorithm generator."""
    inputs = dict(stored)
    if "graph" in inputs:
        inputs["graph"] = parse_graph(inputs["graph"])
    if "tree" in inputs:
        inputs["tree"] = build_bst(inputs["tree"])
    return inputs


def plain_result(result: Any) -> Any:
    if isinstance(result, TreeNode):
        return tree_to_dict(result)
    return result


# ---------------------------------------------------------------------------
# Session State Helpers
# ---------------------------------------------------------------------------
def get_state() -> Dict[str, Any]:
    """Return current app state as a dict."""
    return {
        "algorithm":    session.get("algorithm"),
        "inputs":       session.get("inputs"),
        "current_step": session.get("current_step", 0),
        "total_steps":  session.get("total_steps", 0),
    }


def set_state(**kwargs) -> None:
    for k, v in kwargs.items():
        session[k] = v


def load_steps() -> Optional[List[Step]]:
    """Regenerate the trace for the session's run (None if there is none)."""
    state = get_state()
    if not state["algorithm"] or state["inputs"] is None:
        return None
    return generate_steps(state["algorithm"], **algorithm_inputs(state["inputs"]))


def step_payload(steps: List[Step], idx: int) -> Dict[str, Any]:
    return {
        "step":         steps[idx].to_dict(),
        "current_step": idx,
        "total_steps":  len(steps),
    }


def no_run():
    return jsonify({"error": "No algorithm has been run yet"}), 400


# ---------------------------------------------------------------------------
# API: Registry
# ---------------------------------------------------------------------------
@app.route("/api/algorithms", methods=["GET"])
def api_algorithms():
    return jsonify({
        "algorithms":    [info.to_dict() for info in list_algorithms()],
        "speed_presets": SPEED_PRESETS,
    })


# ---------------------------------------------------------------------------
# API: Run Algorithm
# ---------------------------------------------------------------------------
@app.route("/api/run", methods=["POST"])
def api_run():
    body = request.get_json(silent=True) or {}
    key  = body.get("algorithm", "")

    try:
        stored = collect_inputs(key, body)
        fixed, note = fix_precondition(key, stored)
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400

    if note:
        # input corrected; the client starts again with it
        set_state(algorithm=key, inputs=fixed, current_step=0, total_steps=0)
        log.info("precondition fixed for %s", key)
        return jsonify({
            "precondition_fixed": True,
            "message":            note,
            "inputs":             fixed,
        })

    rec = Recorder()
    metrics = rec.record(key, **algorithm_inputs(stored))
    set_state(algorithm=key, inputs=stored, current_step=0, total_steps=len(rec.steps))

    payload = step_payload(rec.steps, 0)
    payload.update({
        "algorithm": key,
        "inputs":    stored,
        "result":    plain_result(metrics.result),
        "metrics":   rec.export()["metrics"],
    })
    return jsonify(payload)


# ---------------------------------------------------------------------------
# API: Step Navigation
# ---------------------------------------------------------------------------
@app.route("/api/step/next", methods=["POST"])
def api_step_next():
    steps = load_steps()
    if steps is None:
        return no_run()

    idx = get_state()["current_step"]
    if idx >= len(steps) - 1:
        return jsonify({"error": "Already at last step"}), 400

    set_state(current_step=idx + 1)
    return jsonify(step_payload(steps, idx + 1))


@app.route("/api/step/prev", methods=["POST"])
def api_step_prev():
    steps = load_steps()
    if steps is None:
        return no_run()

    idx = get_state()["current_step"]
    if idx <= 0:
        return jsonify({"error": "Already at first step"}), 400

    set_state(current_step=idx - 1)
    return jsonify(step_payload(steps, idx - 1))


@app.route("/api/step/goto", methods=["POST"])
def api_step_goto():
    steps = load_steps()
    if steps is None:
        return no_run()

    body = request.get_json(silent=True) or {}
    idx  = body.get("index", 0)
    if not isinstance(idx, int) or not (0 <= idx < len(steps)):
        return jsonify({"error": "Invalid step index"}), 400

    set_state(current_step=idx)
    return jsonify(step_payload(steps, idx))


@app.route("/api/reset", methods=["POST"])
def api_reset():
    steps = load_steps()
    if steps is None:
        return no_run()
    set_state(current_step=0)
    return jsonify(step_payload(steps, 0))


@app.route("/api/state", methods=["GET"])
def api_state():
    return jsonify(get_state())


# ---------------------------------------------------------------------------
# CLI: terminal playback
# ---------------------------------------------------------------------------
async def play(key: str, inputs: Dict[str, Any], speed: str, step_mode: bool, interactive: bool) -> Any:
    """Drive a PlaybackController in the terminal; returns the run result."""

    def show(step: Step) -> None:
        print(f"[{controller.current_index + 1:>3}/{controller.total_steps}] {step.description}")

    controller = PlaybackController(
        on_step=show,
        speed=speed,
        mode=PlaybackMode.INTERACTIVE if interactive else PlaybackMode.REPLAY,
        step_mode=step_mode,
    )
    controller.load(key, **inputs)

    if not controller.start():
        print(controller.message)
        controller.start()

    loop = asyncio.get_running_loop()
    while controller.state is not PlaybackState.COMPLETED:
        if controller.waiting_for_advance:
            await loop.run_in_executor(None, input, "  (enter = next step) ")
            controller.next_step()
        else:
            await asyncio.sleep(0.01)

    result = await controller.wait()
    stats = controller.snapshot()
    print(f"Done: {stats['comparisons']} comparisons, {stats['swaps']} swaps/writes.")
    return result


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Algorithm step visualizer")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command")

    serve = sub.add_parser("serve", help="run the JSON API (default)")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=5000)
    serve.add_argument("--debug", action="store_true")

    p = sub.add_parser("play", help="play an algorithm in the terminal")
    p.add_argument("algorithm", choices=[info.key for info in list_algorithms()])
    p.add_argument("--array", help="comma-separated numbers (random if omitted)")
    p.add_argument("--target", help="search target (random member if omitted)")
    p.add_argument("--graph", help="adjacency list, e.g. '0:1,2;1:0,3;2:0,4;3:1;4:2'")
    p.add_argument("--start", help="start node")
    p.add_argument("--end", help="end node (Dijkstra)")
    p.add_argument("--tree", help="BST values inserted in order (random if omitted)")
    p.add_argument("--tree-size", help="node count for a random tree")
    p.add_argument("--value", help="value to insert / delete / search")
    p.add_argument("--speed", default="fast", help=f"number or one of {', '.join(SPEED_PRESETS)}")
    p.add_argument("--step-mode", action="store_true", help="wait for enter after every step")
    p.add_argument("--interactive", action="store_true", help="run through the live hook executor")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )

    if args.command == "play":
        fields = {
            "array": args.array, "target": args.target, "graph": args.graph,
            "start": args.start, "end": args.end, "tree": args.tree,
            "tree_size": args.tree_size, "value": args.value,
        }
        try:
            inputs = algorithm_inputs(collect_inputs(args.algorithm, fields))
            result = asyncio.run(play(args.algorithm, inputs, args.speed, args.step_mode, args.interactive))
        except ValueError as exc:
            # InputError, unknown speed preset, …
            parser.error(str(exc))
        print(f"Result: {plain_result(result)}")
        return 0

    host = getattr(args, "host", "0.0.0.0")
    port = getattr(args, "port", 5000)
    print("=" * 60)
    print("  Algorithm Step Visualizer")
    print("  Starting Flask server...")
    print(f"  API at http://localhost:{port}/api/algorithms")
    print("=" * 60)
    app.run(debug=getattr(args, "debug", False), host=host, port=port)
    return 0


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    sys.exit(main())
