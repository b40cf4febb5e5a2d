"""Skill event endpoint the voice platform posts request envelopes to."""

from __future__ import annotations

import asyncio
import json
from contextvars import copy_context
from typing import Annotated, Any

from ask_sdk_core.exceptions import SerializationException
from ask_sdk_webservice_support.verifier import VerificationException
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from sticky_notes_engine.core.exceptions import (
    InvalidEnvelopeError,
    RequestVerificationError,
    StaleRequestError,
)
from sticky_notes_engine.core.logging import get_logger
from sticky_notes_engine.services import ServiceContainer
from sticky_notes_engine.services.skill_service import serve_skill_request

from ..dependencies import get_service_container

router = APIRouter()
logger = get_logger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post("/skill")
async def handle_skill_event(
    request: Request,
    services: Annotated[ServiceContainer, Depends(get_service_container)],
) -> JSONResponse:
    """Verify the envelope and return the skill's reply."""
    try:
        # The signature covers the exact text, so keep it alongside the parse.
        body = (await request.body()).decode("utf-8")
        payload = json.loads(body)
    except ValueError:
        # UnicodeDecodeError is a ValueError too.
        logger.error("Invalid JSON received", exc_info=True)
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid JSON")

    ctx = copy_context()

    def _serve_sync() -> dict[str, Any]:
        return ctx.run(serve_skill_request, services, payload, body, request.headers)

    try:
        response = await asyncio.get_running_loop().run_in_executor(None, _serve_sync)
    except (InvalidEnvelopeError, SerializationException) as exc:
        logger.warning("rejecting malformed envelope: %s", exc)
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid request envelope")
    except StaleRequestError as exc:
        logger.warning("rejecting stale request: %s", exc)
        return _error(status.HTTP_400_BAD_REQUEST, "Request timestamp outside tolerance")
    except RequestVerificationError as exc:
        logger.warning("rejecting request for another skill: %s", exc)
        return _error(status.HTTP_401_UNAUTHORIZED, "Invalid application id")
    except VerificationException as exc:
        logger.warning("rejecting unsigned or mis-signed request: %s", exc)
        return _error(status.HTTP_400_BAD_REQUEST, "Request signature verification failed")
    return JSONResponse(response)


__all__ = ["router"]
