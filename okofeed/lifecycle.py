from __future__ import annotations

import asyncio
import logging
import socket

import uvicorn

from .app import create_app
from .config import Settings, get_settings
from .errors import ListenerBindError

logger = logging.getLogger(__name__)


class FeedLifecycle:
    """Serve a finished feed payload until the countdown runs out.

    Two tasks run side by side once :meth:`run` is awaited: a uvicorn server
    bound to ``port`` and a countdown of ``lifetime`` seconds. They share one
    stop event. When the countdown fires the server stops accepting
    connections and drains in-flight requests for at most
    ``settings.shutdown_grace_period`` seconds; if the server ends first the
    countdown is abandoned.
    """

    def __init__(
        self,
        payload: str,
        port: int,
        lifetime: float,
        settings: Settings | None = None,
    ) -> None:
        self.payload = payload
        self.port = port
        self.lifetime = lifetime
        self.settings = settings or get_settings()
        self.server: uvicorn.Server | None = None
        self._socket: socket.socket | None = None
        self._stop = asyncio.Event()

    @property
    def bound_port(self) -> int | None:
        if self._socket is None:
            return None
        return self._socket.getsockname()[1]

    def bind(self) -> socket.socket:
        host = self.settings.server_host
        try:
            family, socktype, proto, _, address = socket.getaddrinfo(
                host, self.port, type=socket.SOCK_STREAM, flags=socket.AI_PASSIVE
            )[0]
            sock = socket.socket(family, socktype, proto)
        except OSError as exc:
            raise ListenerBindError(f"cannot listen on {host}:{self.port}: {exc}") from exc
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            if family == socket.AF_INET6:
                # "::" also accepts IPv4 clients.
                sock.setsockopt(socket.IPPROTO_IPV6, socket.IPV6_V6ONLY, 0)
            sock.bind(address)
        except OSError as exc:
            sock.close()
            raise ListenerBindError(f"cannot listen on {host}:{self.port}: {exc}") from exc
        self._socket = sock
        return sock

    def stop(self) -> None:
        self._stop.set()

    async def run(self) -> None:
        sock = self._socket or self.bind()
        config = uvicorn.Config(
            create_app(self.payload),
            lifespan="off",
            log_config=None,
            timeout_graceful_shutdown=self.settings.shutdown_grace_period,
        )
        self.server = uvicorn.Server(config)

        logger.info("Starting HTTP server on port %s", self.bound_port)
        serving = asyncio.create_task(self.server.serve(sockets=[sock]), name="feed-server")
        countdown = asyncio.create_task(self._countdown(), name="countdown")
        try:
            done, _ = await asyncio.wait(
                {serving, countdown}, return_when=asyncio.FIRST_COMPLETED
            )
            if serving in done:
                self._stop.set()
                await countdown
            else:
                await self._shutdown(serving)
            await serving
        finally:
            for task in (serving, countdown):
                if not task.done():
                    task.cancel()
            sock.close()
            self._socket = None
        logger.info("Exiting")

    async def _countdown(self) -> None:
        logger.info("Counting %s seconds to exit", self.lifetime)
        try:
            await asyncio.wait_for(self._stop.wait(), timeout=self.lifetime)
        except asyncio.TimeoutError:
            logger.info("Countdown elapsed, shutting down HTTP server")
            self._stop.set()

    async def _shutdown(self, serving: asyncio.Task) -> None:
        # uvicorn skips its shutdown sequence if asked to exit during startup.
        while not self.server.started and not serving.done():
            await asyncio.sleep(0.05)
        self.server.should_exit = True
