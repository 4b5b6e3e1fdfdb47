"""HTTP API server exposing the engine to rendering and input collaborators."""

from __future__ import annotations

import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any

from .engine import RubikEngine
from .moves import FACE_ORDER
from .scramble import DEFAULT_SCRAMBLE_COUNT
from .sequences import DEFAULT_TRIAL_LENGTH, DEFAULT_TRIALS
from .state_codec import StateValidationError


class RubikHTTPServer:
    def __init__(
        self,
        engine: RubikEngine,
        host: str = "127.0.0.1",
        port: int = 8000,
    ):
        self.engine = engine
        self._lock = threading.RLock()

        handler_cls = self._build_handler()
        self.httpd = ThreadingHTTPServer((host, port), handler_cls)
        self.host, self.port = self.httpd.server_address

    def _build_handler(self):
        parent = self

        class Handler(BaseHTTPRequestHandler):
            server_version = "RubikPlayer/1.0"

            def log_message(self, fmt: str, *args):
                return

            def _send_json(self, code: int, payload: dict[str, Any]):
                body = json.dumps(payload).encode("utf-8")
                self.send_response(code)
                self.send_header("Content-Type", "application/json")
                self.send_header("Content-Length", str(len(body)))
                self.end_headers()
                self.wfile.write(body)

            def _read_json(self) -> dict[str, Any]:
                try:
                    length = int(self.headers.get("Content-Length", "0"))
                except ValueError as exc:
                    raise StateValidationError("Content-Length must be an integer") from exc
                if length < 0:
                    raise StateValidationError("Content-Length must not be negative")
                if length == 0:
                    return {}
                data = self.rfile.read(length)
                try:
                    obj = json.loads(data.decode("utf-8"))
                except (UnicodeDecodeError, json.JSONDecodeError) as exc:
                    raise StateValidationError(f"Invalid JSON body: {exc}") from exc
                if not isinstance(obj, dict):
                    raise StateValidationError("JSON body must be an object")
                return obj

            def do_GET(self):
                engine = parent.engine
                try:
                    with parent._lock:
                        if self.path == "/health":
                            self._send_json(200, {"ready": True, "busy": engine.busy})
                            return

                        if self.path == "/state":
                            self._send_json(200, engine.state_payload())
                            return

                        if self.path == "/solved":
                            self._send_json(200, {"solved": engine.is_solved()})
                            return

                        if self.path.startswith("/faces/"):
                            face = self.path[len("/faces/"):]
                            self._send_json(
                                200,
                                {
                                    "face": face,
                                    "colors": engine.get_face_colors(face),
                                    "color_ids": engine.get_face(face),
                                },
                            )
                            return

                        if self.path == "/faces":
                            self._send_json(200, {face: engine.get_face_colors(face) for face in FACE_ORDER})
                            return
                except StateValidationError as exc:
                    self._send_json(400, {"error": str(exc)})
                    return

                self._send_json(404, {"error": "Not Found"})

            def do_POST(self):
                engine = parent.engine
                try:
                    body = self._read_json()
                    with parent._lock:
                        if self.path == "/reset":
                            if "state" in body:
                                engine.set_state(body["state"])
                            else:
                                engine.reset()
                            self._send_json(200, engine.state_payload())
                            return

                        if self.path == "/move":
                            if "move" not in body:
                                raise StateValidationError("Missing required field: move")
                            move = body["move"]
                            applied = engine.apply_move_animated(move)
                            self._send_json(
                                200,
                                {
                                    "move": move,
                                    "applied": applied,
                                    "solved": engine.is_solved(),
                                    "step_count": engine.step_count,
                                },
                            )
                            return

                        if self.path == "/undo":
                            undone = engine.undo_last_move()
                            self._send_json(200, {"undone": undone, "solved": engine.is_solved()})
                            return

                        if self.path == "/scramble":
                            count = body.get("count", DEFAULT_SCRAMBLE_COUNT)
                            seed = body.get("seed")
                            if seed is not None and not isinstance(seed, int):
                                raise StateValidationError("seed must be an integer or null")
                            moves = engine.scramble(count=count, seed=seed)
                            self._send_json(200, {"moves": moves, "solved": engine.is_solved()})
                            return

                        if self.path == "/solve":
                            self._send_json(200, engine.solve().as_dict())
                            return

                        if self.path == "/demo":
                            name = body.get("name")
                            if name is not None and not isinstance(name, str):
                                raise StateValidationError("name must be a string or null")
                            moves = engine.demonstrate(name)
                            self._send_json(200, {"moves": moves, "solved": engine.is_solved()})
                            return

                        if self.path == "/test-solver":
                            seed = body.get("seed")
                            if seed is not None and not isinstance(seed, int):
                                raise StateValidationError("seed must be an integer or null")
                            report = engine.test_solver(
                                trials=body.get("trials", DEFAULT_TRIALS),
                                length=body.get("length", DEFAULT_TRIAL_LENGTH),
                                seed=seed,
                            )
                            self._send_json(200, report.as_dict())
                            return

                        if self.path == "/history/clear":
                            self._send_json(200, {"cleared": engine.clear_history()})
                            return

                except StateValidationError as exc:
                    self._send_json(400, {"error": str(exc)})
                    return

                self._send_json(404, {"error": "Not Found"})

        return Handler

    def serve_forever(self):
        self.httpd.serve_forever()

    def shutdown(self):
        self.httpd.shutdown()
        self.httpd.server_close()
