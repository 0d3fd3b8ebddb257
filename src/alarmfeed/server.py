"""HTTP server hosting the podcast endpoint.

Every path answers with the podcast listing, for GET and POST alike,
so the server can sit behind any route a deployment maps to it.
"""

from __future__ import annotations

import http.server
import logging
from urllib.parse import parse_qs, urlsplit

from alarmfeed.core.config import Config
from alarmfeed.core.handler import FeedResponse, handle_request

logger = logging.getLogger(__name__)


class PodcastRequestHandler(http.server.BaseHTTPRequestHandler):
    """Routes every request to ``handle_request``."""

    server: PodcastHTTPServer
    server_version = "alarmfeed"

    def _respond(self, include_body: bool = True) -> None:
        params = parse_qs(urlsplit(self.path).query, keep_blank_values=True)
        response = handle_request(params, self.server.config)
        self._send(response, include_body=include_body)

    def _send(self, response: FeedResponse, include_body: bool = True) -> None:
        body = response.body.encode("utf-8")
        self.send_response(response.status)
        self.send_header("Content-Type", response.content_type)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        if include_body:
            self.wfile.write(body)

    def do_GET(self) -> None:
        self._respond()

    def do_POST(self) -> None:
        try:
            length = int(self.headers.get("Content-Length") or 0)
        except ValueError:
            length = 0
        if length:
            self.rfile.read(length)
        self._respond()

    def do_HEAD(self) -> None:
        self._respond(include_body=False)

    def log_message(self, format: str, *args: object) -> None:
        logger.info("%s - %s", self.address_string(), format % args)


class PodcastHTTPServer(http.server.ThreadingHTTPServer):
    """Threading HTTP server carrying the application configuration."""

    daemon_threads = True

    def __init__(self, address: tuple[str, int], config: Config) -> None:
        self.config = config
        super().__init__(address, PodcastRequestHandler)

    @property
    def url(self) -> str:
        host, port = self.server_address[:2]
        return f"http://{host}:{port}"


def create_server(
    config: Config,
    host: str | None = None,
    port: int | None = None,
) -> PodcastHTTPServer:
    """Create (but do not start) the podcast HTTP server.

    Args:
        config: Application configuration.
        host: Interface to bind; defaults to ``config.server.host``.
        port: Port to bind; defaults to ``config.server.port``. 0 picks a free port.
    """
    address = (
        host if host is not None else config.server.host,
        port if port is not None else config.server.port,
    )
    return PodcastHTTPServer(address, config)


def serve(config: Config, host: str | None = None, port: int | None = None) -> None:
    """Run the podcast HTTP server until interrupted."""
    server = create_server(config, host=host, port=port)
    logger.info("Serving podcasts from %s on %s", config.feed.url, server.url)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down")
    finally:
        server.server_close()
