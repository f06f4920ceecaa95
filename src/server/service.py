from __future__ import annotations

import asyncio
import contextlib
import logging
import threading
from pathlib import Path
from typing import Any, Optional
from urllib.parse import urlsplit

import websockets
from websockets.asyncio.server import ServerConnection
from websockets.datastructures import Headers
from websockets.http11 import Request, Response

from contracts.ui_protocol import EVENT_HELLO, EVENT_STATE_UPDATE, STATE_IDLE

from .config import HEALTHZ_PATH, INDEX_PATH, ROOT_PATH, UIServerConfig
from .events import StickyEventStore, make_event

_HTML = "text/html; charset=utf-8"
_TEXT = "text/plain; charset=utf-8"


class _StaticRoutes:
    """Plain HTTP answers for every path that is not the websocket endpoint."""

    def __init__(self, index_html: bytes):
        self._pages: dict[str, tuple[bytes, str]] = {
            ROOT_PATH: (index_html, _HTML),
            INDEX_PATH: (index_html, _HTML),
            HEALTHZ_PATH: (b"ok\n", _TEXT),
        }

    def respond(self, path: str) -> Response:
        page = self._pages.get(path)
        if page is None:
            return _response(404, "Not Found", b"not found\n", _TEXT)
        body, content_type = page
        return _response(200, "OK", body, content_type)


def _response(status_code: int, reason: str, body: bytes, content_type: str) -> Response:
    headers = Headers()
    headers["Content-Type"] = content_type
    headers["Content-Length"] = str(len(body))
    headers["Cache-Control"] = "no-store"
    return Response(status_code, reason, headers, body)


class _ConnectedClients:
    """Browsers currently attached to the websocket, owned by the server loop."""

    def __init__(self, logger: logging.Logger):
        self._clients: set[ServerConnection] = set()
        self._logger = logger

    def add(self, client: ServerConnection) -> None:
        self._clients.add(client)

    def discard(self, client: ServerConnection) -> None:
        self._clients.discard(client)

    async def broadcast(self, message: str) -> None:
        clients = tuple(self._clients)
        if not clients:
            return

        results = await asyncio.gather(
            *(client.send(message) for client in clients),
            return_exceptions=True,
        )
        for client, result in zip(clients, results):
            if isinstance(result, Exception):
                self._logger.warning("Dropping UI client after send failure: %s", result)
                self._clients.discard(client)

    async def close_all(self) -> None:
        clients = tuple(self._clients)
        self._clients.clear()
        if clients:
            await asyncio.gather(
                *(client.close(code=1001, reason="Server shutting down") for client in clients),
                return_exceptions=True,
            )


class UIServer:
    """Serves the timer page and pushes timer, task and alert events to it.

    The asyncio loop lives on its own daemon thread; `publish` may be called
    from any thread and never blocks on the network.
    """

    def __init__(
        self,
        config: UIServerConfig,
        logger: Optional[logging.Logger] = None,
    ):
        self._config = config
        self._logger = logger or logging.getLogger("ui_server")
        self._routes = _StaticRoutes(Path(config.index_file).read_bytes())
        self._clients = _ConnectedClients(self._logger)
        self._sticky_events = StickyEventStore()
        self._thread: Optional[threading.Thread] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._shutdown: Optional[asyncio.Event] = None
        self._ready = threading.Event()
        self._failure: Optional[Exception] = None

    @property
    def host(self) -> str:
        return self._config.host

    @property
    def port(self) -> int:
        return self._config.port

    @property
    def websocket_path(self) -> str:
        return self._config.websocket_path

    @property
    def is_running(self) -> bool:
        thread = self._thread
        return thread is not None and thread.is_alive() and self._failure is None

    def start(self, timeout_seconds: float = 5.0) -> None:
        if self.is_running:
            self._logger.warning("UI server is already running")
            return

        self._failure = None
        self._ready.clear()
        self._thread = threading.Thread(target=self._thread_main, daemon=True, name="ui-server")
        self._thread.start()

        if not self._ready.wait(timeout_seconds):
            raise RuntimeError(f"UI server did not start within {timeout_seconds:.1f}s")
        if self._failure is not None:
            raise RuntimeError(f"UI server startup failed: {self._failure}")

    def stop(self, timeout_seconds: float = 5.0) -> None:
        thread = self._thread
        if thread is None:
            return

        loop, shutdown = self._loop, self._shutdown
        if loop is not None and shutdown is not None:
            with contextlib.suppress(RuntimeError):
                loop.call_soon_threadsafe(shutdown.set)

        thread.join(timeout=timeout_seconds)
        if thread.is_alive():
            self._logger.error("UI server thread did not stop within %.1fs", timeout_seconds)

        self._thread = None
        self._loop = None
        self._shutdown = None

    def latest_event(self, event_type: str) -> Optional[dict[str, Any]]:
        """Decoded payload of the last cached event of this type, if any."""
        return self._sticky_events.latest(event_type)

    def publish_state(self, state: str, *, message: Optional[str] = None, **payload) -> None:
        if message:
            payload["message"] = message
        self.publish(EVENT_STATE_UPDATE, state=state, **payload)

    def publish(self, event_type: str, **payload) -> None:
        message = make_event(event_type, **payload)
        self._sticky_events.remember(event_type, message)

        loop = self._loop
        if loop is None or not self.is_running:
            return

        try:
            future = asyncio.run_coroutine_threadsafe(self._clients.broadcast(message), loop)
        except RuntimeError:
            self._logger.debug("UI loop closed; dropped %s event", event_type)
            return
        future.add_done_callback(self._log_broadcast_failure)

    def _log_broadcast_failure(self, future) -> None:
        if future.cancelled():
            return
        error = future.exception()
        if error is not None:
            self._logger.warning("UI broadcast failed: %s", error)

    def _thread_main(self) -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        self._loop = loop
        self._shutdown = asyncio.Event()

        try:
            loop.run_until_complete(self._serve())
        except Exception as error:  # pragma: no cover - bind failures are environment specific
            self._failure = error
            self._logger.error("UI server failed: %s", error, exc_info=True)
            self._ready.set()
        finally:
            pending = asyncio.all_tasks(loop)
            for task in pending:
                task.cancel()
            with contextlib.suppress(Exception):
                loop.run_until_complete(asyncio.gather(*pending, return_exceptions=True))
            loop.close()

    async def _serve(self) -> None:
        async with websockets.serve(
            self._handle_client,
            host=self._config.host,
            port=self._config.port,
            process_request=self._route_http,
            logger=self._logger,
        ):
            self._logger.info(
                "UI server running at http://%s:%d (websocket: %s)",
                self._config.host,
                self._config.port,
                self._config.websocket_path,
            )
            self._ready.set()
            await self._shutdown.wait()
            await self._clients.close_all()

    async def _route_http(
        self,
        connection: ServerConnection,
        request: Request,
    ) -> Response | None:
        del connection
        path = urlsplit(request.path).path
        if path == self._config.websocket_path:
            return None
        return self._routes.respond(path)

    async def _handle_client(self, websocket: ServerConnection) -> None:
        self._clients.add(websocket)
        self._logger.info("UI client connected: %s", websocket.remote_address)
        try:
            await websocket.send(
                make_event(EVENT_HELLO, state=STATE_IDLE, message="UI websocket connected")
            )
            for message in self._sticky_events.snapshot():
                await websocket.send(message)
            async for message in websocket:
                self._logger.debug("Ignoring inbound UI message: %s", message)
        except websockets.exceptions.ConnectionClosed:
            self._logger.info("UI client disconnected: %s", websocket.remote_address)
        finally:
            self._clients.discard(websocket)
