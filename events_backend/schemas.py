"""
Pydantic schemas and form parsing for the events API.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from pydantic import BaseModel, TypeAdapter, ValidationError
from starlette.datastructures import FormData, UploadFile

IMAGE_REQUIRED = "Image file is required"
INVALID_JSON = "Invalid JSON data format"

_tags_adapter = TypeAdapter(list[str])
_agenda_adapter = TypeAdapter(list[Any])


@dataclass
class EventSubmission:
    attributes: dict[str, Any]
    image: UploadFile


@dataclass
class ParsedSubmission:
    """Either a submission or the client-facing reason it was rejected."""

    submission: Optional[EventSubmission] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.submission is not None


def _parse_json_list(adapter: TypeAdapter, raw: Any) -> Optional[list]:
    if not isinstance(raw, str):
        return None
    try:
        return adapter.validate_json(raw)
    except ValidationError:
        return None


def parse_event_form(form: FormData) -> ParsedSubmission:
    """
    Split a multipart submission into event attributes, the image upload and
    the JSON-encoded ``tags``/``agenda`` lists.

    Scalar fields become attributes (last value wins for repeated keys). The
    image is checked before the JSON fields.
    """
    attributes: dict[str, Any] = {}
    for key, value in form.multi_items():
        if isinstance(value, str):
            attributes[key] = value

    image = form.get("image")
    if not isinstance(image, UploadFile):
        return ParsedSubmission(error=IMAGE_REQUIRED)

    tags = _parse_json_list(_tags_adapter, form.get("tags"))
    agenda = _parse_json_list(_agenda_adapter, form.get("agenda"))
    if tags is None or agenda is None:
        return ParsedSubmission(error=INVALID_JSON)

    # The stored image is always the hosted URL and ids are assigned on insert.
    attributes.pop("image", None)
    attributes.pop("_id", None)
    attributes["tags"] = tags
    attributes["agenda"] = agenda
    return ParsedSubmission(
        submission=EventSubmission(attributes=attributes, image=image)
    )


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    message: str
    error: Optional[str] = None


class EventCreatedResponse(BaseModel):
    message: str
    event: dict


class EventListResponse(BaseModel):
    message: str
    events: list[dict]


class HealthResponse(BaseModel):
    status: str
