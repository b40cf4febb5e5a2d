"""Application service layer: skill wiring shared by every entry point."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from sticky_notes_engine.core.config import config

if TYPE_CHECKING:  # pragma: no cover - type narrowing only
    from ask_sdk_webservice_support.webservice_handler import WebserviceSkillHandler

    from .request_router import SkillRouter


@dataclass(slots=True)
class ServiceContainer:
    """Aggregate of application-level services available to entry points."""

    skill_router: Optional["SkillRouter"] = None
    webservice_handler: Optional["WebserviceSkillHandler"] = None


def build_skill_router(*, skill_id: Optional[str] = None) -> "SkillRouter":
    """Return a router populated with the default handler table."""

    # pylint: disable=import-outside-toplevel
    from .handlers import (
        CatchAllErrorHandler,
        default_request_handlers,
        default_request_interceptors,
    )
    from .request_router import SkillRouter

    router = SkillRouter(skill_id=skill_id)
    for interceptor in default_request_interceptors():
        router.add_interceptor(interceptor)
    for handler in default_request_handlers():
        router.register(handler)
    router.add_error_handler(CatchAllErrorHandler())
    return router


def build_webservice_handler(router: "SkillRouter") -> "WebserviceSkillHandler":
    """Wrap the router's skill with request verification for HTTPS hosting."""

    # pylint: disable=import-outside-toplevel
    from ask_sdk_webservice_support.webservice_handler import WebserviceSkillHandler

    from .verification import build_request_verifiers

    return WebserviceSkillHandler(
        skill=router.skill,
        verify_signature=config.VERIFY_REQUEST_SIGNATURE,
        verify_timestamp=False,
        verifiers=build_request_verifiers(),
    )


def build_default_services(*, skill_router: Optional["SkillRouter"] = None) -> ServiceContainer:
    """Return a service container with the default skill wiring."""

    router = skill_router or build_skill_router(skill_id=config.SKILL_APPLICATION_ID or None)
    return ServiceContainer(skill_router=router, webservice_handler=build_webservice_handler(router))


__all__ = [
    "ServiceContainer",
    "build_default_services",
    "build_skill_router",
    "build_webservice_handler",
]
