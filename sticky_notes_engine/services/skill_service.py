"""Serve one skill event end to end: shape check, verify, dispatch, time.

Each event runs in its own ``contextvars`` copy so the log bindings made by
the skill's interceptors never outlive it.
"""

from __future__ import annotations

import time
from contextvars import copy_context
from typing import Any, Mapping, Optional

from sticky_notes_engine.core.exceptions import InvalidEnvelopeError
from sticky_notes_engine.core.logging import bind_correlation_id, get_logger

from . import ServiceContainer
from .request_router import SkillRouter

logger = get_logger(__name__)


def request_type_of(payload: Any) -> str:
    """Return the declared request type of a decoded envelope.

    Raises:
        InvalidEnvelopeError: if ``payload`` has no ``request.type``.
    """
    request = payload.get("request") if isinstance(payload, dict) else None
    request_type = request.get("type") if isinstance(request, dict) else None
    if not isinstance(request_type, str) or not request_type:
        raise InvalidEnvelopeError("Envelope carries no request type")
    return request_type


def serve_skill_request(
    services: ServiceContainer,
    payload: Any,
    body: str,
    headers: Mapping[str, Any],
) -> dict[str, Any]:
    """Verify and dispatch an HTTPS request; return the response envelope JSON.

    ``body`` must be the raw request text since the signature covers it
    byte for byte. Verification failures raise ``VerificationException``
    subclasses before any handler runs.
    """
    request_type = request_type_of(payload)
    handler = services.webservice_handler
    if handler is None:
        raise RuntimeError("Webservice skill handler has not been configured.")

    start_time = time.perf_counter()
    try:
        return handler.verify_request_and_dispatch(
            http_request_headers=headers, http_request_body=body
        )
    finally:
        logger.info(
            "%s served in %.2f ms", request_type, (time.perf_counter() - start_time) * 1000.0
        )


def _serve_lambda_event(
    router: SkillRouter, event: dict[str, Any], context: Any
) -> dict[str, Any]:
    request_type = request_type_of(event)
    request_id: Optional[str] = getattr(context, "aws_request_id", None)
    if request_id:
        bind_correlation_id(request_id)
    start_time = time.perf_counter()
    try:
        return router.lambda_handler()(event, context)
    finally:
        logger.info(
            "%s served in %.2f ms", request_type, (time.perf_counter() - start_time) * 1000.0
        )


def serve_lambda_event(
    router: SkillRouter, event: dict[str, Any], context: Any = None
) -> dict[str, Any]:
    """Dispatch a directly invoked event through the SDK's lambda entry point."""
    return copy_context().run(_serve_lambda_event, router, event, context)


__all__ = ["request_type_of", "serve_lambda_event", "serve_skill_request"]
