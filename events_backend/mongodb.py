"""
Process-wide cached MongoDB connection.

The cache lives at module level and is reused when the module is reloaded, so
dev auto-reload does not pile up clients. Callers share whatever connection
attempt is already in flight.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import PyMongoError

from events_backend.config import get_settings
from events_backend.errors import ConfigurationError, DatabaseConnectionError

logger = logging.getLogger(__name__)

Connector = Callable[[str], Awaitable[AsyncIOMotorClient]]


async def connect_mongo(
    uri: str, *, server_selection_timeout_ms: int = 5000
) -> AsyncIOMotorClient:
    """
    Open a client and ping the server.

    Motor connects lazily, so the ping makes an unreachable server fail here
    instead of on the first query.
    """
    client: Optional[AsyncIOMotorClient] = None
    try:
        client = AsyncIOMotorClient(
            uri, serverSelectionTimeoutMS=server_selection_timeout_ms
        )
        await client.admin.command("ping")
    except PyMongoError as exc:
        if client is not None:
            client.close()
        raise DatabaseConnectionError(
            "Failed to connect to MongoDB", error=str(exc)
        ) from exc
    logger.info("MongoDB connection established")
    return client


def _default_connector(uri: str) -> Awaitable[AsyncIOMotorClient]:
    settings = get_settings()
    return connect_mongo(
        uri,
        server_selection_timeout_ms=settings.mongodb_server_selection_timeout_ms,
    )


class ConnectionCache:
    """Memoizes one database handle and the attempt that produces it."""

    def __init__(self, connector: Connector = _default_connector):
        self.handle: Optional[AsyncIOMotorClient] = None
        self.pending: Optional[asyncio.Future] = None
        self._connector = connector

    async def acquire(self, uri: Optional[str]) -> AsyncIOMotorClient:
        if self.handle is not None:
            return self.handle

        if self.pending is None:
            if not uri:
                raise ConfigurationError(
                    "Please define the MONGODB_URI environment variable inside .env"
                )
            self.pending = asyncio.ensure_future(self._connector(uri))
            self.pending.add_done_callback(self._forget_failed)

        pending = self.pending
        try:
            # A cancelled caller must not cancel the attempt other callers share.
            self.handle = await asyncio.shield(pending)
        except BaseException:
            if pending.done() and self.pending is pending:
                self.pending = None
            raise

        return self.handle

    def _forget_failed(self, future: asyncio.Future) -> None:
        if future.cancelled() or future.exception() is not None:
            if self.pending is future:
                self.pending = None

    def reset(self) -> None:
        """Forget the cached handle (useful in tests)."""
        self.handle = None
        self.pending = None


_cache: ConnectionCache = globals().get("_cache") or ConnectionCache()


def get_connection_cache() -> ConnectionCache:
    return _cache

