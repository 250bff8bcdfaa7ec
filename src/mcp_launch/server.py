"""Single-route health check server."""

import http.server
import json
from datetime import datetime, timezone
from typing import Any

from mcp_launch import log

PING_BODY = {"message": "Hello from simple server!", "status": "ok"}


class PingHandler(http.server.BaseHTTPRequestHandler):
    """Answers GET /ping with a JSON status, everything else with 404."""

    def log_message(self, format: str, *args: Any) -> None:
        """Silence the default stderr access log."""

    def do_GET(self) -> None:
        now = datetime.now(timezone.utc).isoformat()
        log.info(f"{self.command} {self.path} at {now}")
        if self.path == "/ping":
            self._send(200, "application/json", json.dumps(PING_BODY))
        else:
            self._send(404, "text/plain", "Not Found")
            log.step(f"404 {self.path}")

    def _send(self, status: int, content_type: str, body: str) -> None:
        payload = body.encode()
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)


def make_server(port: int, host: str = "0.0.0.0") -> http.server.HTTPServer:
    return http.server.HTTPServer((host, port), PingHandler)


def serve(port: int, host: str = "0.0.0.0") -> None:
    """Serve until interrupted."""
    server = make_server(port, host)
    log.info(f"Ping server listening on {host}:{server.server_port}")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        log.info("Ping server stopped")
    finally:
        server.server_close()
