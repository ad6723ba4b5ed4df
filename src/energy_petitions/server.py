"""
JSON API for petition generation.

Run:
    energy-petition-api --port 10000

Endpoints:
- GET  /health                : liveness acknowledgement
- POST /api/generate-petition : intake form (JSON) -> {"text": ...} or {"error": ..., "details": ...}
"""

from __future__ import annotations

import argparse
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any

import orjson
import structlog

from .config import Settings
from .errors import ConfigurationError
from .generator import PetitionService
from .logs import configure_logging

logger = structlog.get_logger()

GENERATE_PATH = "/api/generate-petition"
HEALTH_PATH = "/health"


def make_handler(service: PetitionService):
    class Handler(BaseHTTPRequestHandler):
        def _send_json(self, status: int, body: Any) -> None:
            data = orjson.dumps(body)
            self.send_response(status)
            self.send_header("Content-Type", "application/json; charset=utf-8")
            self.send_header("Content-Length", str(len(data)))
            self.send_header("Access-Control-Allow-Origin", "*")
            self.send_header("Access-Control-Allow-Headers", "Content-Type")
            self.send_header("Access-Control-Allow-Methods", "POST, OPTIONS, GET")
            self.end_headers()
            self.wfile.write(data)

        def log_message(self, format: str, *args: Any) -> None:
            logger.debug("http.access", client=self.address_string(), line=format % args)

        def do_OPTIONS(self):
            self.send_response(204)
            self.send_header("Access-Control-Allow-Origin", "*")
            self.send_header("Access-Control-Allow-Headers", "Content-Type")
            self.send_header("Access-Control-Allow-Methods", "POST, OPTIONS, GET")
            self.end_headers()

        def do_GET(self):
            if self.path == HEALTH_PATH:
                self._send_json(200, {"status": "ok"})
            else:
                self._send_json(404, {"error": "not found"})

        def do_POST(self):
            if self.path != GENERATE_PATH:
                self._send_json(404, {"error": "not found"})
                return
            try:
                length = int(self.headers.get("Content-Length") or 0)
            except ValueError:
                length = -1
            if length < 0:
                self._send_json(400, {"error": "Content-Length inválido.", "code": "invalid_input"})
                return
            body = self.rfile.read(length) if length else b""
            try:
                payload = orjson.loads(body) if body.strip() else None
            except orjson.JSONDecodeError:
                self._send_json(400, {"error": "Corpo da requisição não é um JSON válido.", "code": "invalid_input"})
                return

            logger.info("petition.requested", keys=len(payload) if isinstance(payload, dict) else 0)
            result = service.generate(payload)
            self._send_json(result.status, result.to_payload())

    return Handler


def build_server(service: PetitionService, host: str = "0.0.0.0", port: int = 10000) -> ThreadingHTTPServer:
    return ThreadingHTTPServer((host, port), make_handler(service))


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Energy utility petition API")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=None)
    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env()
    except ConfigurationError as exc:
        parser.error(exc.message)
    configure_logging(settings.log_level)

    service = PetitionService.from_settings(settings)
    port = args.port or settings.port
    server = build_server(service, host=args.host, port=port)
    logger.info("server.started", host=args.host, port=port, model=settings.model)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("server.stopped")
    finally:
        server.server_close()


if __name__ == "__main__":
    main()
