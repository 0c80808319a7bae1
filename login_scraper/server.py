"""
POST-only HTTP endpoint.

Each POST runs one ScrapePipeline and answers with its JSON; every other
method gets the "Only POST requests are allowed." error.  All answers use
HTTP 200 with ``Content-Type: application/json``.
"""

import http.server
from typing import Any

from .logging_setup import log
from .pipeline import ScrapePipeline, ScrapeResult


class ScrapeHandler(http.server.BaseHTTPRequestHandler):
    """Request handler; ``pipeline`` is set by ``build_server`` before serving."""

    pipeline: ScrapePipeline
    server_version = "login-scraper"

    def log_message(self, fmt: str, *args: Any) -> None:  # noqa: D401
        """Route default HTTP request logging through the package logger."""
        log.debug("[SERVER] " + fmt, *args)

    def _respond(self, result: ScrapeResult, with_body: bool = True) -> None:
        payload = result.body.encode("utf-8")
        self.send_response(result.status)
        self.send_header("Content-Type", result.content_type)
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        if with_body:
            self.wfile.write(payload)

    def _drain_body(self) -> None:
        length = int(self.headers.get("Content-Length") or 0)
        if length > 0:
            self.rfile.read(length)

    def do_POST(self) -> None:  # noqa: N802
        self._drain_body()
        log.info("[SERVER] POST %s from %s", self.path, self.client_address[0])
        self._respond(self.pipeline.handle("POST"))

    def _reject(self) -> None:
        self._drain_body()
        self._respond(self.pipeline.handle(self.command))

    def __getattr__(self, name: str) -> Any:
        # any other verb (GET, TRACE, PROPFIND, "post", ...) gets the JSON error
        if name.startswith("do_"):
            return self._reject
        raise AttributeError(name)

    def do_HEAD(self) -> None:  # noqa: N802
        self._respond(self.pipeline.handle(self.command), with_body=False)


def build_server(
    pipeline: ScrapePipeline, listen: str, port: int,
) -> http.server.HTTPServer:
    """Bind an HTTPServer whose handler runs *pipeline*."""
    handler = type("BoundScrapeHandler", (ScrapeHandler,), {"pipeline": pipeline})
    return http.server.HTTPServer((listen, port), handler)


def serve(pipeline: ScrapePipeline, listen: str, port: int) -> None:
    """Serve until interrupted with Ctrl+C."""
    server = build_server(pipeline, listen, port)
    host, bound_port = server.server_address[:2]
    log.info("[SERVER] Listening on http://%s:%d/ – press Ctrl+C to stop", host, bound_port)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        log.info("Shutting down...")
    finally:
        server.server_close()
