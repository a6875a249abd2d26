"""
Dependency wiring for the FastAPI app.
"""

from __future__ import annotations

from events_backend.config import get_settings
from events_backend.db import EventStore, InMemoryEventStore, MongoEventStore
from events_backend.media import CloudinaryMediaClient, InMemoryMediaClient, MediaClient
from events_backend.mongodb import get_connection_cache

_event_store: EventStore | None = None
_media_client: MediaClient | None = None


def get_event_store() -> EventStore:
    """
    Return a singleton event store. The Mongo store does not connect here;
    routes call ``connect()`` so connection failures surface in the response.
    """
    global _event_store
    if _event_store:
        return _event_store

    settings = get_settings()
    if settings.use_in_memory_backends:
        _event_store = InMemoryEventStore()
    else:
        _event_store = MongoEventStore(
            get_connection_cache(),
            uri=settings.mongodb_uri,
            db_name=settings.mongodb_db_name,
        )
    return _event_store


def get_media_client() -> MediaClient:
    global _media_client
    if _media_client:
        return _media_client

    settings = get_settings()
    if settings.use_in_memory_backends:
        _media_client = InMemoryMediaClient()
    else:
        _media_client = CloudinaryMediaClient(
            cloud_name=settings.cloudinary_cloud_name,
            api_key=settings.cloudinary_api_key,
            api_secret=settings.cloudinary_api_secret,
        )
    return _media_client
