from __future__ import annotations

"""
HTTP evaluation endpoint for Modu.

Routes:
- GET  /      -> liveness text
- POST /eval  -> the plain-text body is run as a program; the response body
                 is whatever it printed, or the error report
- OPTIONS /eval -> CORS preflight
Anything else is a 404.

Every request is evaluated in server mode against a fresh environment and
its own output buffer, so requests share no state.
"""

import io
import logging
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

from modu.builtin.env_builtin import register
from modu.config import EvalConfig, DEFAULT_SERVER_HOST, get_server_port
from modu.errors import ModuError
from modu.interpreter import format_error, run_program
from modu.types.environment import Environment

logger = logging.getLogger(__name__)

LIVENESS_TEXT = "Modu interpreter server is running"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def evaluate_request(code: str) -> str:
    """Run one submitted program in server mode and return its output."""
    with io.StringIO() as out:
        config = EvalConfig(server_mode=True, stdout=out)
        env = Environment()
        register(env, config)
        try:
            run_program(code, env, config)
        except ModuError as err:
            out.write("\n" + format_error(err, "<stdin>") + "\n")
        return out.getvalue()


class EvalRequestHandler(BaseHTTPRequestHandler):
    server_version = "ModuServer"

    def _send(self, status: HTTPStatus, body: str = "", content_type: str | None = "text/plain") -> None:
        data = body.encode("utf-8")
        self.send_response(status)
        if content_type:
            self.send_header("Content-Type", f"{content_type}; charset=utf-8")
        for name, value in CORS_HEADERS.items():
            self.send_header(name, value)
        self.send_header("Content-Length", str(len(data)))
        self.end_headers()
        if data:
            self.wfile.write(data)

    def do_GET(self):
        if self.path == "/":
            self._send(HTTPStatus.OK, LIVENESS_TEXT)
        else:
            self._send(HTTPStatus.NOT_FOUND, "Not Found")

    def do_POST(self):
        if self.path != "/eval":
            self._send(HTTPStatus.NOT_FOUND, "Not Found")
            return
        length = int(self.headers.get("Content-Length") or 0)
        code = self.rfile.read(length).decode("utf-8", errors="replace")
        logger.info("POST /eval | %s | %s", self.client_address[0], self.headers.get("User-Agent", "unknown"))
        self._send(HTTPStatus.OK, evaluate_request(code))

    def do_OPTIONS(self):
        if self.path == "/eval":
            self._send(HTTPStatus.OK, content_type=None)
        else:
            self._send(HTTPStatus.NOT_FOUND, "Not Found")

    def log_message(self, format, *args):
        logger.debug("%s - %s", self.address_string(), format % args)


class EvalServer:
    def __init__(self, host: str = DEFAULT_SERVER_HOST, port: int | None = None):
        self.host = host
        self.port = get_server_port() if port is None else port
        self.httpd = ThreadingHTTPServer((self.host, self.port), EvalRequestHandler)
        self.port = self.httpd.server_address[1]

    def serve_forever(self):
        logger.info("Modu server listening on %s:%d", self.host, self.port)
        try:
            self.httpd.serve_forever()
        finally:
            self.httpd.server_close()

    def shutdown(self):
        self.httpd.shutdown()


if __name__ == "__main__":
    EvalServer().serve_forever()
