"""
main.py — Graph Playground Flask App
=====================================
The JSON API the browser canvas talks to.  Rendering, hit-testing and
keyboard shortcuts live in the front end; every structural and playback
decision is made here.

Routes:
  GET  /api/graph                    – current graph (exchange format)
  POST /api/graph/vertex             – add vertex {x, y}
  POST /api/graph/vertex/remove      – remove vertex {id} (cascades edges)
  POST /api/graph/vertex/move        – drag {id, x, y} (not undoable)
  POST /api/graph/edge               – add edge {from, to}
  POST /api/graph/edge/remove        – remove edge {from, to}
  POST /api/graph/toggle_directed    – flip directed / undirected
  POST /api/graph/clear              – remove everything, keep directedness
  POST /api/graph/undo               – undo last structural change
  POST /api/graph/redo               – redo
  POST /api/graph/import             – exchange JSON body, or {"text": "..."}
  GET  /api/graph/export             – exchange JSON
  POST /api/graph/generate           – random graph {vertices, edges, directed, seed}
  GET  /api/graph/representation     – adjacency matrix / list + stats
  GET  /api/algorithms               – algorithm registry (?implemented=1 hides stubs)
  POST /api/config/start_vertex      – set traversal start {id}
  POST /api/config/speed             – {speed: ms | "slow" | "medium" | …}
  POST /api/playback/<action>        – start | pause | resume | next | prev | reset
  GET  /api/state                    – advance due timers, then full state (polling)
  GET  /api/trace/export             – the current trace + metrics

State management:
  One EditingSession per browser session, kept in memory inside the app in
  a SessionRegistry (the Flask session cookie only carries the session id;
  idle and least-recently-used sessions are evicted).  Every handler runs
  under its session's lock, so concurrent requests from one browser are
  applied one at a time.  Auto-advance runs on a TickScheduler that is
  polled by GET /api/state, so a client polling slower than the animation
  speed still sees every step applied.
"""

import functools
import logging
import math
from typing import Any, Callable, Dict, Optional

from flask import Flask, jsonify, request, session
from werkzeug.exceptions import BadRequest

from config import Settings, settings as default_settings
from graph import Graph, GraphError
from algorithms import list_algorithms
from engine import EditingSession, SessionRegistry, TickScheduler

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    clock: Optional[Callable[[], float]] = None,
) -> Flask:
    settings = settings or default_settings
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = Flask(__name__)
    app.secret_key = settings.secret_key
    sessions = SessionRegistry(
        lambda: EditingSession.from_settings(settings, scheduler=TickScheduler(clock)),
        max_sessions=settings.max_sessions,
        idle_timeout=settings.session_idle_seconds,
        clock=clock,
    )
    app.extensions["graph_sessions"] = sessions

    # -----------------------------------------------------------------------
    # Session State Helpers
    # -----------------------------------------------------------------------
    def get_session() -> EditingSession:
        sid, sess = sessions.get_or_create(session.get("sid"))
        session["sid"] = sid
        return sess

    def with_session(view):
        """Pass the caller's EditingSession in and hold its lock for the whole request."""
        @functools.wraps(view)
        def wrapper(*args, **kwargs):
            sess = get_session()
            with sess.lock:
                return view(sess, *args, **kwargs)
        return wrapper

    def body() -> Dict[str, Any]:
        data = request.get_json(silent=True)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise BadRequest("Request body must be a JSON object")
        return data

    def require(data: Dict[str, Any], *keys: str):
        missing = [k for k in keys if k not in data]
        if missing:
            raise BadRequest(f"Missing field(s): {', '.join(missing)}")
        return [data[k] for k in keys]

    def number(value: Any, name: str) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            raise BadRequest(f"'{name}' must be a finite number")
        return float(value)

    def vertex_id(value: Any, name: str) -> str:
        if not isinstance(value, str):
            raise BadRequest(f"'{name}' must be a vertex id string")
        return value

    def respond(sess: EditingSession, **extra):
        payload = sess.state()
        payload.update(extra)
        return jsonify(payload)

    # -----------------------------------------------------------------------
    # Errors
    # -----------------------------------------------------------------------
    @app.errorhandler(GraphError)
    def handle_graph_error(exc: GraphError):
        return jsonify({"error": str(exc), "type": type(exc).__name__}), 400

    @app.errorhandler(BadRequest)
    def handle_bad_request(exc: BadRequest):
        return jsonify({"error": exc.description, "type": "BadRequest"}), 400

    # -----------------------------------------------------------------------
    # API: Graph mutations
    # -----------------------------------------------------------------------
    @app.route("/api/graph")
    @with_session
    def api_graph(sess: EditingSession):
        return jsonify(sess.store.export_graph())

    @app.route("/api/graph/vertex", methods=["POST"])
    @with_session
    def api_add_vertex(sess: EditingSession):
        x, y = require(body(), "x", "y")
        vid = sess.store.add_vertex(number(x, "x"), number(y, "y"))
        return respond(sess, vertexId=vid)

    @app.route("/api/graph/vertex/remove", methods=["POST"])
    @with_session
    def api_remove_vertex(sess: EditingSession):
        (vid,) = require(body(), "id")
        sess.store.remove_vertex(vertex_id(vid, "id"))
        return respond(sess)

    @app.route("/api/graph/vertex/move", methods=["POST"])
    @with_session
    def api_move_vertex(sess: EditingSession):
        vid, x, y = require(body(), "id", "x", "y")
        sess.store.update_vertex_position(vertex_id(vid, "id"), number(x, "x"), number(y, "y"))
        return respond(sess)

    @app.route("/api/graph/edge", methods=["POST"])
    @with_session
    def api_add_edge(sess: EditingSession):
        src, tgt = require(body(), "from", "to")
        sess.store.add_edge(vertex_id(src, "from"), vertex_id(tgt, "to"))
        return respond(sess)

    @app.route("/api/graph/edge/remove", methods=["POST"])
    @with_session
    def api_remove_edge(sess: EditingSession):
        src, tgt = require(body(), "from", "to")
        sess.store.remove_edge(vertex_id(src, "from"), vertex_id(tgt, "to"))
        return respond(sess)

    @app.route("/api/graph/toggle_directed", methods=["POST"])
    @with_session
    def api_toggle_directed(sess: EditingSession):
        sess.store.toggle_directed()
        return respond(sess)

    @app.route("/api/graph/clear", methods=["POST"])
    @with_session
    def api_clear(sess: EditingSession):
        sess.store.clear_graph()
        return respond(sess)

    @app.route("/api/graph/undo", methods=["POST"])
    @with_session
    def api_undo(sess: EditingSession):
        sess.store.undo()
        return respond(sess)

    @app.route("/api/graph/redo", methods=["POST"])
    @with_session
    def api_redo(sess: EditingSession):
        sess.store.redo()
        return respond(sess)

    # -----------------------------------------------------------------------
    # API: Import / Export / Generate
    # -----------------------------------------------------------------------
    @app.route("/api/graph/import", methods=["POST"])
    @with_session
    def api_import(sess: EditingSession):
        data = request.get_json(silent=True)
        if isinstance(data, dict) and isinstance(data.get("text"), str):
            sess.store.import_json(data["text"])
        elif data is None:
            sess.store.import_json(request.get_data(as_text=True))
        else:
            sess.store.import_graph(data)
        return respond(sess)

    @app.route("/api/graph/export")
    @with_session
    def api_export(sess: EditingSession):
        resp = app.response_class(sess.store.export_json(), mimetype="application/json")
        resp.headers["Content-Disposition"] = "attachment; filename=graph.json"
        return resp

    @app.route("/api/graph/generate", methods=["POST"])
    @with_session
    def api_generate(sess: EditingSession):
        data = body()
        try:
            num_vertices = int(data.get("vertices", 6))
            num_edges    = int(data.get("edges", 7))
        except (TypeError, ValueError):
            raise BadRequest("'vertices' and 'edges' must be integers")
        if num_vertices < 0 or num_edges < 0:
            raise BadRequest("'vertices' and 'edges' must be non-negative")
        directed = data.get("directed", sess.store.graph.is_directed)
        if not isinstance(directed, bool):
            raise BadRequest("'directed' must be a boolean")
        seed = data.get("seed")
        if seed is not None and (isinstance(seed, bool) or not isinstance(seed, (int, str))):
            raise BadRequest("'seed' must be an integer or a string")
        g = Graph.generate_random(
            num_vertices=num_vertices,
            num_edges=num_edges,
            is_directed=directed,
            seed=seed,
            canvas_w=settings.canvas_width,
            canvas_h=settings.canvas_height,
        )
        sess.store.import_graph(g.to_dict())
        return respond(sess)

    @app.route("/api/graph/representation")
    @with_session
    def api_representation(sess: EditingSession):
        g = sess.store.graph
        return jsonify({
            "labels":        [v.label for v in g.vertices.values()],
            "matrix":        g.adjacency_matrix(),
            "adjacencyList": g.adjacency_list(),
            "degrees":       {v.label: g.degree(v.id) for v in g.vertices.values()},
            "vertexCount":   g.vertex_count,
            "edgeCount":     g.edge_count,
            "isDirected":    g.is_directed,
            "isConnected":   g.is_connected(),
            "hasCycle":      g.has_cycle(),
        })

    @app.route("/api/algorithms")
    def api_algorithms():
        implemented_only = request.args.get("implemented") in ("1", "true")
        return jsonify([a.to_dict() for a in list_algorithms(implemented_only)])

    # -----------------------------------------------------------------------
    # API: Config Changes
    # -----------------------------------------------------------------------
    @app.route("/api/config/start_vertex", methods=["POST"])
    @with_session
    def api_config_start_vertex(sess: EditingSession):
        (vid,) = require(body(), "id")
        sess.set_start_vertex(vertex_id(vid, "id"))
        return respond(sess)

    @app.route("/api/config/speed", methods=["POST"])
    @with_session
    def api_config_speed(sess: EditingSession):
        (speed,) = require(body(), "speed")
        if isinstance(speed, str):
            try:
                sess.controller.set_speed_preset(speed)
            except ValueError as exc:
                raise BadRequest(str(exc))
        else:
            sess.controller.set_speed(number(speed, "speed"))
        return respond(sess)

    # -----------------------------------------------------------------------
    # API: Playback
    # -----------------------------------------------------------------------
    @app.route("/api/playback/<action>", methods=["POST"])
    @with_session
    def api_playback(sess: EditingSession, action: str):
        sess.scheduler.tick()
        ctl = sess.controller
        if action == "start":
            if sess.start_vertex is None:
                sess.run()
            else:
                ctl.start()
        elif action == "pause":
            ctl.pause()
        elif action == "resume":
            ctl.resume()
        elif action == "next":
            ctl.next_step()
        elif action == "prev":
            ctl.previous_step()
        elif action == "reset":
            ctl.reset()
        else:
            return jsonify({"error": f"Unknown playback action: {action}"}), 404
        return respond(sess)

    @app.route("/api/state")
    @with_session
    def api_state(sess: EditingSession):
        sess.scheduler.tick()
        return respond(sess)

    @app.route("/api/trace/export")
    @with_session
    def api_trace_export(sess: EditingSession):
        return jsonify(sess.recorder.export())

    return app


app = create_app()


if __name__ == "__main__":
    app.run(debug=True, port=5000)
