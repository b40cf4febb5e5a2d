"""Pseudonyms for the platform account and device ids that reach the logs."""

from __future__ import annotations

import base64
import hashlib
import hmac
from functools import lru_cache
from typing import Optional

PSEUDONYM_LENGTH = 16
MISSING_ID = "-"


@lru_cache(maxsize=4096)
def _pseudonym(platform_id: str, secret: str) -> str:
    digest = hmac.new(secret.encode("utf-8"), platform_id.encode("utf-8"), hashlib.sha256).digest()
    return base64.urlsafe_b64encode(digest).decode("ascii").rstrip("=")[:PSEUDONYM_LENGTH]


def log_safe_id(platform_id: Optional[str], *, secret: str) -> str:
    """Return a stable, non-reversible stand-in for ``platform_id``.

    Account ids (``amzn1.ask.account...``) and device ids
    (``amzn1.ask.device...``) are opaque but still point at a person or a
    household device, so they are never logged as-is. The same id always maps
    to the same pseudonym under one secret, which keeps a user's events
    traceable across log lines.
    """
    if not platform_id:
        return MISSING_ID
    if not secret:
        raise ValueError("LOG_PSEUDONYM_SECRET must be set to pseudonymize ids.")
    return _pseudonym(platform_id, secret)


def clear_pseudonym_cache() -> None:
    """Drop cached pseudonyms, e.g. after rotating the secret."""
    _pseudonym.cache_clear()


__all__ = ["MISSING_ID", "PSEUDONYM_LENGTH", "clear_pseudonym_cache", "log_safe_id"]
