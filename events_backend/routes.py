"""
HTTP routes for the events API.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request

from events_backend.config import Settings, get_settings
from events_backend.db import EventStore
from events_backend.dependencies import get_event_store, get_media_client
from events_backend.errors import ClientInputError, EventsBackendError, UpstreamError
from events_backend.media import MediaClient
from events_backend.schemas import (
    ErrorResponse,
    EventCreatedResponse,
    EventListResponse,
    HealthResponse,
    MessageResponse,
    parse_event_form,
)

logger = logging.getLogger(__name__)

router = APIRouter()

CREATE_FAILED = "Event Creation Failed"
FETCH_FAILED = "Event fetching failed"


def _as_upstream(message: str, exc: Exception) -> UpstreamError:
    detail = exc.error if isinstance(exc, EventsBackendError) and exc.error else str(exc)
    return UpstreamError(message, error=detail or "Unknown")


@router.get("/health", response_model=HealthResponse)
def health():
    return HealthResponse(status="ok")


@router.post(
    "/events",
    response_model=EventCreatedResponse,
    status_code=201,
    responses={400: {"model": MessageResponse}, 500: {"model": ErrorResponse}},
)
async def create_event(
    request: Request,
    store: EventStore = Depends(get_event_store),
    media: MediaClient = Depends(get_media_client),
    settings: Settings = Depends(get_settings),
):
    """
    Create an event from a multipart submission and host its image.

    The image is uploaded before the insert; if the insert fails the uploaded
    image is left in place.
    """
    try:
        await store.connect()

        form = await request.form()
        parsed = parse_event_form(form)
        if not parsed.ok:
            raise ClientInputError(parsed.error)
        submission = parsed.submission

        data = await submission.image.read()
        upload = await media.upload_image(data, folder=settings.media_folder)

        attributes = dict(submission.attributes)
        attributes["image"] = upload.secure_url
        event = await store.create_event(attributes)
    except ClientInputError:
        raise
    except Exception as exc:
        logger.exception("Event creation failed")
        raise _as_upstream(CREATE_FAILED, exc) from exc

    return EventCreatedResponse(message="Event created successfully", event=event)


@router.get(
    "/events",
    response_model=EventListResponse,
    responses={500: {"model": ErrorResponse}},
)
async def list_events(store: EventStore = Depends(get_event_store)):
    """Return every event, newest first."""
    try:
        await store.connect()
        events = await store.list_events()
    except Exception as exc:
        logger.exception("Event fetching failed")
        raise _as_upstream(FETCH_FAILED, exc) from exc

    return EventListResponse(message="Events fetched successfully", events=events)
