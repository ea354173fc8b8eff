from __future__ import annotations

"""
TCP REPL server for MiniLisp.

Protocol: JSON per line over TCP.
- Request: {"cmd": "eval", "code": "(define x 1) (+ x 1)"}
- Response: {"ok": true, "results": ["#<void>", "2"]}
  or {"ok": false, "error": <message>, "results": [<outcomes before the error>]}
- Request: {"cmd": "reset"} clears user definitions -> {"ok": true, "results": []}

One Interpreter is kept alive so that definitions persist across requests; client
threads take turns on it through a lock.
"""

import json
import logging
import socket
import threading
from typing import Any, Dict, Tuple

from minilisp.config import configure_logging, get_repl_host, get_repl_port
from minilisp.interpreter import Interpreter
from minilisp.types.errors import MiniLispError

log = logging.getLogger(__name__)


class ReplServer:
    def __init__(self, host: str | None = None, port: int | None = None, interp: Interpreter | None = None):
        self.host = host or get_repl_host()
        self.port = port if port is not None else get_repl_port()
        # Keep a single interpreter to maintain session state
        self.interp = interp if interp is not None else Interpreter()
        self._lock = threading.Lock()

    def handle_request(self, req: Any) -> Dict[str, Any]:
        """Answer one decoded request."""
        if not isinstance(req, dict):
            return {"ok": False, "error": "Invalid request: expected a JSON object"}
        cmd = req.get("cmd")
        log.debug("request %s", cmd)
        if cmd == "eval":
            code = req.get("code", "")
            if not isinstance(code, str):
                return {"ok": False, "error": "Invalid request: code must be a string"}
            with self._lock:
                outcomes = self.interp.eval_each(code)
            results = []
            for outcome in outcomes:
                if isinstance(outcome, MiniLispError):
                    return {"ok": False, "error": str(outcome), "results": results}
                results.append(str(outcome))
            return {"ok": True, "results": results}
        if cmd == "reset":
            with self._lock:
                self.interp.reset()
            return {"ok": True, "results": []}
        return {"ok": False, "error": f"Unknown cmd: {cmd}"}

    def handle_line(self, line: bytes) -> Dict[str, Any]:
        try:
            req = json.loads(line.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as ex:
            return {"ok": False, "error": f"Invalid request: {ex}"}
        try:
            return self.handle_request(req)
        except Exception as ex:
            # Keep the connection alive; the client gets an error reply
            log.exception("request failed")
            return {"ok": False, "error": f"Internal error: {type(ex).__name__}: {ex}"}

    def serve_forever(self):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            s.bind((self.host, self.port))
            s.listen(5)
            log.info("REPL server listening on %s:%d", self.host, self.port)
            while True:
                conn, addr = s.accept()
                threading.Thread(target=self._handle_client, args=(conn, addr), daemon=True).start()

    def _handle_client(self, conn: socket.socket, addr: Tuple[str, int]):
        log.debug("client connected: %s:%d", *addr)
        with conn:
            buf = b""
            while True:
                data = conn.recv(4096)
                if not data:
                    break
                buf += data
                while b"\n" in buf:
                    line, buf = buf.split(b"\n", 1)
                    line = line.strip()
                    if not line:
                        continue
                    resp = self.handle_line(line)
                    conn.sendall((json.dumps(resp) + "\n").encode("utf-8"))
        log.debug("client disconnected: %s:%d", *addr)


def main() -> None:
    configure_logging()
    ReplServer().serve_forever()


if __name__ == "__main__":
    main()
