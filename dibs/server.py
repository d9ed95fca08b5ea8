"""
Process lifecycle: connect the store, listen, and shut both down in order.
"""

from fastapi import FastAPI
from typing import Optional
import asyncio
import logging
import uvicorn

from dibs.database import Database

logger = logging.getLogger(__name__)


class Server:
    """
    Owns the HTTP listener and the store connection for one application.

    ``run`` connects the database and then starts listening. ``close``
    disconnects the database and only then stops the listener.
    """

    def __init__(self, app: FastAPI, database: Database, host: str = "0.0.0.0", port: int = 8080):
        self.app = app
        self.database = database
        self.host = host
        self.port = port
        self._server: Optional[uvicorn.Server] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def started(self) -> bool:
        return self._server is not None and self._server.started

    async def run(self) -> None:
        """
        Connect to the database, then start serving in the background.

        Raises:
            RuntimeError: If the listener could not be started
        """
        await self.database.connect()

        # Lifespan is off: this object, not uvicorn, manages the database
        config = uvicorn.Config(
            self.app,
            host=self.host,
            port=self.port,
            lifespan="off",
            log_config=None,
        )
        self._server = uvicorn.Server(config)
        self._task = asyncio.create_task(self._serve())

        while not self._server.started:
            if self._task.done():
                await self.database.disconnect()
                error = None if self._task.cancelled() else self._task.exception()
                self._server = None
                self._task = None
                raise RuntimeError(f"Failed to listen on {self.host}:{self.port}") from error
            await asyncio.sleep(0.05)

        logger.info(f"Your app is listening on port {self.port}")

    async def _serve(self) -> None:
        try:
            await self._server.serve()
        except SystemExit as exc:
            # uvicorn calls sys.exit() when it cannot bind
            raise RuntimeError("HTTP listener exited") from exc

    async def close(self) -> None:
        """Disconnect from the database, then stop the listener."""
        await self.database.disconnect()

        if self._server is None or self._task is None:
            return

        logger.info("Closing server")
        self._server.should_exit = True
        await self._task
        self._server = None
        self._task = None

    async def wait(self) -> None:
        """Block until the listener stops on its own (e.g. on SIGINT)."""
        if self._task is not None:
            await self._task


async def serve_forever(app: FastAPI, database: Database, host: str, port: int) -> None:
    """Run a Server until the listener exits, then close it."""
    server = Server(app, database, host=host, port=port)
    await server.run()
    try:
        await server.wait()
    finally:
        await server.close()
