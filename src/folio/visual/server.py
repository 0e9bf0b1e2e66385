"""Serve a built site directory over HTTP for the duration of a run."""

from __future__ import annotations

import functools
import logging
import threading
from contextlib import contextmanager
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Iterator

from folio.core.config import ConfigError

_logger = logging.getLogger(__name__)


class _QuietHandler(SimpleHTTPRequestHandler):
    def log_message(self, format: str, *args) -> None:  # noqa: A002
        _logger.debug("%s - %s", self.address_string(), format % args)


@contextmanager
def serve_site(site_dir: Path, host: str = "127.0.0.1", port: int = 0) -> Iterator[str]:
    """Yield the base URL of a background server rooted at *site_dir*.

    ``port=0`` picks a free port.  A port that cannot be bound raises
    ``ConfigError``.
    """
    handler = functools.partial(_QuietHandler, directory=str(site_dir))
    try:
        server = ThreadingHTTPServer((host, port), handler)
    except OSError as e:
        raise ConfigError(f"cannot serve {site_dir} on {host}:{port}: {e}") from e
    thread = threading.Thread(target=server.serve_forever, name="folio-serve", daemon=True)
    thread.start()
    base_url = f"http://{host}:{server.server_address[1]}"
    _logger.info("Serving %s at %s", site_dir, base_url)
    try:
        yield base_url
    finally:
        server.shutdown()
        server.server_close()
        thread.join(timeout=5)
