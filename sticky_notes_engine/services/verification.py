"""Verifiers run on each HTTPS request before the skill sees it.

They plug into ``ask_sdk_webservice_support``'s ``WebserviceSkillHandler``
next to the SDK's own certificate-chain ``RequestVerifier``. Settings are read
on every call so a running app follows configuration changes.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from ask_sdk_model import RequestEnvelope
from ask_sdk_webservice_support.verifier import (
    AbstractVerifier,
    TimestampVerifier,
    VerificationException,
)

from sticky_notes_engine.core.config import config
from sticky_notes_engine.core.exceptions import RequestVerificationError, StaleRequestError


def get_application_id(envelope: RequestEnvelope) -> Optional[str]:
    """Resolve the skill application id from the context or the session block."""
    system = envelope.context.system if envelope.context else None
    if system and system.application:
        return system.application.application_id
    if envelope.session and envelope.session.application:
        return envelope.session.application.application_id
    return None


class ApplicationIdVerifier(AbstractVerifier):
    """Reject envelopes addressed to another skill; no-op when unconfigured."""

    def verify(
        self,
        headers: Mapping[str, Any],
        serialized_request_env: str,
        deserialized_request_env: RequestEnvelope,
    ) -> None:
        expected = config.SKILL_APPLICATION_ID
        if not expected:
            return
        actual = get_application_id(deserialized_request_env)
        if actual != expected:
            raise RequestVerificationError(f"Request application id {actual!r} does not match")


class RequestTimestampVerifier(AbstractVerifier):
    """Apply the SDK's ``TimestampVerifier`` with the configured tolerance.

    An envelope without a timestamp is treated as stale.
    """

    def verify(
        self,
        headers: Mapping[str, Any],
        serialized_request_env: str,
        deserialized_request_env: RequestEnvelope,
    ) -> None:
        if not config.VERIFY_REQUEST_TIMESTAMP:
            return
        request = deserialized_request_env.request
        if request is None or request.timestamp is None:
            raise StaleRequestError("Request carries no timestamp")
        checker = TimestampVerifier(
            tolerance_in_millis=config.REQUEST_TIMESTAMP_TOLERANCE_SECONDS * 1000
        )
        try:
            checker.verify(
                headers=headers,
                serialized_request_env=serialized_request_env,
                deserialized_request_env=deserialized_request_env,
            )
        except VerificationException as exc:
            raise StaleRequestError(str(exc)) from exc


def build_request_verifiers() -> list[AbstractVerifier]:
    """Verifiers applied ahead of the signature check, in order."""
    return [ApplicationIdVerifier(), RequestTimestampVerifier()]


__all__ = [
    "ApplicationIdVerifier",
    "RequestTimestampVerifier",
    "build_request_verifiers",
    "get_application_id",
]
