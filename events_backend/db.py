"""
Event persistence for MongoDB and an in-memory test implementation.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Optional, Protocol

from bson import ObjectId
from fastapi.encoders import jsonable_encoder
from motor.motor_asyncio import AsyncIOMotorCollection

from events_backend.mongodb import ConnectionCache

EVENTS_COLLECTION = "events"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def serialize_event(doc: dict) -> dict:
    """Render a stored document as JSON-safe data."""
    return jsonable_encoder(doc, custom_encoder={ObjectId: str})


class EventStore(Protocol):
    """Interface for event persistence."""

    async def connect(self) -> None:
        ...

    async def create_event(self, attributes: dict[str, Any]) -> dict:
        ...

    async def list_events(self) -> list[dict]:
        ...


class InMemoryEventStore:
    """Simple in-memory event store for development and tests."""

    def __init__(self, clock: Callable[[], datetime] = _utcnow):
        self.events: list[dict] = []
        self._clock = clock

    async def connect(self) -> None:
        return None

    async def create_event(self, attributes: dict[str, Any]) -> dict:
        now = self._clock()
        doc = {**attributes, "_id": ObjectId(), "createdAt": now, "updatedAt": now}
        self.events.append(doc)
        return serialize_event(doc)

    async def list_events(self) -> list[dict]:
        ordered = sorted(self.events, key=lambda doc: doc["createdAt"], reverse=True)
        return [serialize_event(doc) for doc in ordered]

    def reset(self) -> None:
        """Clear all stored data (useful in tests)."""
        self.events.clear()


class MongoEventStore:
    """
    Motor-backed implementation. The client comes from the shared
    ``ConnectionCache`` so every request reuses one connection.
    """

    def __init__(
        self,
        cache: ConnectionCache,
        uri: Optional[str],
        db_name: str,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._cache = cache
        self._uri = uri
        self._db_name = db_name
        self._clock = clock

    async def connect(self) -> None:
        await self._cache.acquire(self._uri)

    async def _collection(self) -> AsyncIOMotorCollection:
        client = await self._cache.acquire(self._uri)
        return client[self._db_name][EVENTS_COLLECTION]

    async def create_event(self, attributes: dict[str, Any]) -> dict:
        collection = await self._collection()
        now = self._clock()
        doc = {**attributes, "createdAt": now, "updatedAt": now}
        result = await collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return serialize_event(doc)

    async def list_events(self) -> list[dict]:
        collection = await self._collection()
        cursor = collection.find().sort("createdAt", -1)
        docs = await cursor.to_list(length=None)
        return [serialize_event(doc) for doc in docs]
