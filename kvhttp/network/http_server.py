"""
HTTP Server Module

This module serves the dispatcher over HTTP.

Every server owns its own FastAPI application, bound to one Dispatcher
and one KVStore, so several servers can live in one process. Requests
are dispatched on uvicorn's worker thread pool, which means the store
sees truly parallel access.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from ..cache.store import KVStore
from ..config.settings import settings
from ..protocol.commands import STATUS_SERVER_ERROR
from ..protocol.dispatcher import Dispatcher

logger = logging.getLogger(__name__)


def create_app(dispatcher: Dispatcher) -> FastAPI:
    """
    Build the FastAPI application for a dispatcher.

    The application exposes a single endpoint at ``/``. Any of the common
    methods may carry the JSON body; other paths answer 404. The HTTP
    status always matches the ``status`` field of the response payload.
    """
    app = FastAPI(
        title="kvhttp",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    @app.api_route("/", methods=["GET", "POST", "PUT", "PATCH", "DELETE"])
    async def handle_operation(request: Request) -> JSONResponse:
        body = await request.body()
        try:
            status, payload = await run_in_threadpool(dispatcher.handle_request, body)
        except Exception as exc:  # Log unexpected errors but keep serving
            logger.exception(f"Error handling request from {request.client}: {exc}")
            status = STATUS_SERVER_ERROR
            payload = {"status": status, "error": "internal server error"}
        return JSONResponse(payload, status_code=status)

    return app


class KVServer:
    """
    HTTP server for the kvhttp service.

    Usage:
        server = KVServer(host='127.0.0.1', port=8080)
        await server.start()  # Runs until stop() or a signal

    Attributes:
        host: Server bind address
        port: Server port number
        store: The KVStore shared by all requests
        dispatcher: The Dispatcher bound to ``store``
        app: The FastAPI application served by this instance
    """

    def __init__(
            self,
            host: str = None,
            port: int = None,
            store: KVStore = None,
            dispatcher: Dispatcher = None,
            missing_key_status: int = None,
    ):
        """
        Initialize the server.

        Args:
            host: Bind address (default from settings)
            port: Port number (default from settings)
            store: KVStore instance (creates new one if not provided)
            dispatcher: Dispatcher instance (creates one over ``store`` if
                not provided; when given, its store is used)
            missing_key_status: Status for GET on an absent key
                (default from settings)
        """
        self.host = host if host is not None else settings.HOST
        self.port = port if port is not None else settings.PORT

        if dispatcher is not None:
            self.dispatcher = dispatcher
            self.store = dispatcher.store
        else:
            self.store = store if store is not None else KVStore()
            self.dispatcher = Dispatcher(self.store, missing_key_status=missing_key_status)

        self.app = create_app(self.dispatcher)

        # Server state
        self._server: Optional[uvicorn.Server] = None
        self._running = False

    async def start(self) -> None:
        """
        Start the server and serve requests until stopped.

        Example:
            server = KVServer(port=8080)
            asyncio.run(server.start())
        """
        if self._running:
            return

        config = uvicorn.Config(
            self.app,
            host=self.host,
            port=self.port,
            log_config=None,
            access_log=settings.ACCESS_LOG,
            lifespan="off",
        )
        self._server = uvicorn.Server(config)
        self._running = True

        logger.info(f"Serving on http://{self.host}:{self.port}")

        try:
            await self._server.serve()
        except asyncio.CancelledError:
            # Expected during shutdown/fixture cleanup
            logger.debug("Server start cancelled")
        finally:
            self._running = False

    async def stop(self) -> None:
        """
        Stop the server gracefully.

        Asks uvicorn to exit and waits until serving has finished.
        """
        if self._server is None:
            return

        self._server.should_exit = True
        try:
            while self._running:
                await asyncio.sleep(0.05)
        finally:
            self._server = None

    def is_running(self) -> bool:
        """Check if the server is accepting requests."""
        return self._running and self._server is not None and self._server.started

    def get_stats(self) -> Dict[str, Any]:
        """
        Get server statistics.

        Returns:
            Dictionary with the bind address, running state and store stats.
        """
        return {
            "running": self.is_running(),
            "host": self.host,
            "port": self.port,
            "store_stats": self.store.get_stats(),
        }
