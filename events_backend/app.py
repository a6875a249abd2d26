"""
FastAPI application entry point for the events backend.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from events_backend.config import get_settings
from events_backend.errors import EventsBackendError
from events_backend.routes import router


async def _events_error_handler(request: Request, exc: EventsBackendError):
    return JSONResponse(status_code=exc.status_code, content=exc.as_dict())


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())
    app = FastAPI(title="DevEvent Backend (FastAPI)", version="0.1.0")
    app.add_exception_handler(EventsBackendError, _events_error_handler)
    app.include_router(router, prefix=settings.api_prefix)
    return app


app = create_app()
