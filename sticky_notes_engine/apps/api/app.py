"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from sticky_notes_engine.apps.api.middleware import CorrelationIdMiddleware
from sticky_notes_engine.core.logging import get_logger
from sticky_notes_engine.services import ServiceContainer, runtime

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Register the app's service container for the lifetime of the process."""
    logger.info("Initializing sticky notes skill engine...")
    services = getattr(app.state, "services", None)
    if isinstance(services, ServiceContainer):
        runtime.set_services(services)
        router = services.skill_router
        logger.info(
            "skill router ready with %d handlers.",
            len(router.handlers()) if router is not None else 0,
        )
    try:
        yield
    finally:
        logger.info("sticky notes skill engine shutting down.")


def create_app(services: ServiceContainer | None = None) -> FastAPI:
    """Build the FastAPI application with configured routers."""
    if services is None:
        raise RuntimeError("Service container must be provided when creating the app.")
    app = FastAPI(lifespan=lifespan)
    app.state.services = services
    runtime.set_services(services)
    app.add_middleware(CorrelationIdMiddleware)

    # Import lazily to avoid potential circular imports when routers grow.
    from .routes import health, skill  # pylint: disable=import-outside-toplevel

    app.include_router(health.router)
    app.include_router(skill.router)
    return app


__all__ = ["create_app", "lifespan"]
