"""Runs the automation app on a dedicated background thread.

The server binds its own socket before starting uvicorn so that a port
conflict is reported as a logged bind failure on the server object instead
of terminating the process. The host application keeps running either way.
"""

from __future__ import annotations

import logging
import socket
import threading
import time

import uvicorn

from webview_automation.config.settings import ServerConfig, Settings
from webview_automation.host.base import AutomationHost
from webview_automation.server.app import create_app
from webview_automation.server.buffer import CommandOutcomes, ScreenshotBuffer

logger = logging.getLogger(__name__)


class AutomationServer:
    """Serves the automation API from a daemon thread.

    Usage::

        server = AutomationServer(host, config)
        server.start()
        if not server.wait_until_started(timeout=5.0):
            print(server.bind_error)
    """

    def __init__(
        self,
        host: AutomationHost,
        config: ServerConfig | None = None,
        buffer: ScreenshotBuffer | None = None,
        outcomes: CommandOutcomes | None = None,
    ) -> None:
        self._host = host
        self._config = config or ServerConfig()
        self.buffer = buffer if buffer is not None else ScreenshotBuffer()
        self.outcomes = outcomes if outcomes is not None else CommandOutcomes()
        self.bind_error: OSError | None = None
        self._port: int | None = None
        self._server: uvicorn.Server | None = None
        self._thread: threading.Thread | None = None
        self._done = threading.Event()

    @property
    def port(self) -> int | None:
        """Port actually bound, None until the socket is bound."""
        return self._port

    @property
    def is_running(self) -> bool:
        return self._server is not None and self._server.started and not self._done.is_set()

    def start(self) -> None:
        if self._thread is not None:
            raise RuntimeError("Automation server already started")
        self._thread = threading.Thread(
            target=self._serve, name="automation-http", daemon=True
        )
        self._thread.start()

    def wait_until_started(self, timeout: float = 5.0) -> bool:
        """Block until the server accepts requests. False on failure or timeout."""
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            if self._server is not None and self._server.started:
                return True
            if self._done.is_set():
                return False
            time.sleep(0.01)
        return False

    def stop(self, timeout: float = 5.0) -> None:
        if self._server is not None:
            self._server.should_exit = True
        if self._thread is not None:
            self._thread.join(timeout)

    def _bind(self) -> socket.socket | None:
        addr = (self._config.host, self._config.port)
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind(addr)
        except OSError as e:
            sock.close()
            self.bind_error = e
            logger.error("Failed to start server on %s:%d: %s", addr[0], addr[1], e)
            return None
        self._port = sock.getsockname()[1]
        return sock

    def _serve(self) -> None:
        try:
            sock = self._bind()
            if sock is None:
                return

            app = create_app(
                self._host,
                self._config,
                buffer=self.buffer,
                outcomes=self.outcomes,
                port=self._port,
            )
            self._server = uvicorn.Server(
                uvicorn.Config(app, log_config=None, access_log=False, lifespan="off")
            )
            logger.info(
                "HTTP server listening on http://%s:%d", self._config.host, self._port
            )
            self._server.run(sockets=[sock])
        except Exception:
            logger.exception("Automation server stopped unexpectedly")
        finally:
            self._done.set()


def start_automation(
    host: AutomationHost,
    settings: Settings | None = None,
    buffer: ScreenshotBuffer | None = None,
    outcomes: CommandOutcomes | None = None,
) -> AutomationServer:
    """Create and start an AutomationServer for ``host``.

    Pass the same ``buffer`` and ``outcomes`` the host delivers page
    callbacks into.
    """
    settings = settings or Settings()
    server = AutomationServer(host, settings.server, buffer=buffer, outcomes=outcomes)
    server.start()
    logger.info("Automation initialized - HTTP server starting on port %d", settings.server.port)
    return server
