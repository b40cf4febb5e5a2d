"""Application bootstrap helpers for assembling the service container."""

from __future__ import annotations

from sticky_notes_engine.services import ServiceContainer, build_default_services, build_skill_router


def build_default_service_container() -> ServiceContainer:
    """Return the default service container wired to the production handler table."""

    return build_default_services(skill_router=build_skill_router())


__all__ = ["build_default_service_container"]
