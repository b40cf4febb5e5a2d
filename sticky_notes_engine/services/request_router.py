"""Request router: the skill's handler table compiled by the ASK SDK.

Handlers, interceptors and exception handlers are registered on an
``ask_sdk_core`` ``SkillBuilder``. The SDK scans request handlers in
registration order and the first whose ``can_handle`` accepts the event
serves it. Interceptors run before the handler. Any exception raised along
the way, including the SDK's ``DispatchException`` when no handler matches,
goes to the first exception handler that accepts it; without one the
exception propagates to the caller.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Sequence

from ask_sdk_core.dispatch_components import (
    AbstractExceptionHandler,
    AbstractRequestHandler,
    AbstractRequestInterceptor,
)
from ask_sdk_core.skill import CustomSkill
from ask_sdk_core.skill_builder import SkillBuilder
from ask_sdk_model import RequestEnvelope, ResponseEnvelope


class SkillRouter:
    """Ordered handler table plus the skill compiled from it."""

    def __init__(self, *, skill_id: Optional[str] = None) -> None:
        self._builder = SkillBuilder()
        self._builder.skill_id = skill_id
        self._handlers: list[AbstractRequestHandler] = []
        self._interceptors: list[AbstractRequestInterceptor] = []
        self._error_handlers: list[AbstractExceptionHandler] = []
        self._skill: Optional[CustomSkill] = None

    def register(self, handler: AbstractRequestHandler) -> None:
        """Append ``handler`` to the end of the scan order."""

        self._builder.add_request_handler(handler)
        self._handlers.append(handler)
        self._skill = None

    def add_interceptor(self, interceptor: AbstractRequestInterceptor) -> None:
        self._builder.add_global_request_interceptor(interceptor)
        self._interceptors.append(interceptor)
        self._skill = None

    def add_error_handler(self, handler: AbstractExceptionHandler) -> None:
        self._builder.add_exception_handler(handler)
        self._error_handlers.append(handler)
        self._skill = None

    @property
    def skill_id(self) -> Optional[str]:
        return self._builder.skill_id

    @property
    def skill(self) -> CustomSkill:
        """The compiled skill; rebuilt after any registration."""

        if self._skill is None:
            self._skill = self._builder.create()
        return self._skill

    def dispatch(self, envelope: RequestEnvelope, context: Any = None) -> ResponseEnvelope:
        """Run interceptors and the matching handler for a deserialized envelope."""

        return self.skill.invoke(request_envelope=envelope, context=context)

    def lambda_handler(self) -> Callable[[dict[str, Any], Any], dict[str, Any]]:
        """Return the SDK's ``(event, context)`` entry point for direct invocation."""

        return self._builder.lambda_handler()

    def handlers(self) -> Sequence[AbstractRequestHandler]:
        """Return a shallow copy of the registered handlers in scan order."""

        return list(self._handlers)

    def interceptors(self) -> Sequence[AbstractRequestInterceptor]:
        return list(self._interceptors)

    def error_handlers(self) -> Sequence[AbstractExceptionHandler]:
        return list(self._error_handlers)


__all__ = ["SkillRouter"]
