"""Utility helpers shared by the API and service layers."""

from .identifiers import clear_pseudonym_cache, log_safe_id

__all__ = ["clear_pseudonym_cache", "log_safe_id"]
