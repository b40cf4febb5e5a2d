"""Serverless entry point: the platform invokes ``handler`` with the raw event."""

from __future__ import annotations

from typing import Any, Optional

from sticky_notes_engine.bootstrap import build_default_service_container
from sticky_notes_engine.core.logging import get_logger
from sticky_notes_engine.services import ServiceContainer
from sticky_notes_engine.services.skill_service import serve_lambda_event

logger = get_logger(__name__)

_services: Optional[ServiceContainer] = None


def _get_services() -> ServiceContainer:
    """Build the container once per warm function instance."""
    global _services  # pylint: disable=global-statement
    if _services is None:
        _services = build_default_service_container()
        logger.info("skill container built for function instance")
    return _services


def handler(event: dict[str, Any], context: Any = None) -> dict[str, Any]:
    """Return the response envelope for ``event`` as a plain dict.

    Malformed envelopes and foreign application ids raise, which the platform
    reports as a failed invocation.
    """
    router = _get_services().skill_router
    if router is None:
        raise RuntimeError("Skill router has not been configured.")
    return serve_lambda_event(router, event, context)


__all__ = ["handler"]
