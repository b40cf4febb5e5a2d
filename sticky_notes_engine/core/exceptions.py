"""Core exception types shared across layers."""

from ask_sdk_webservice_support.verifier import VerificationException


class SkillEngineError(Exception):
    """Base class for errors raised while serving skill requests."""


class InvalidEnvelopeError(SkillEngineError):
    """Raised when a payload is not shaped like a request envelope."""


class RequestVerificationError(SkillEngineError, VerificationException):
    """Raised when an inbound request does not belong to this skill."""


class StaleRequestError(RequestVerificationError):
    """Raised when a request timestamp falls outside the accepted tolerance."""


__all__ = [
    "SkillEngineError",
    "InvalidEnvelopeError",
    "RequestVerificationError",
    "StaleRequestError",
]
