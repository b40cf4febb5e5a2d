"""Pytest configuration: ensure env vars and import path are set early.

This runs before any tests, so modules can import without local path hacks.
Also load .env before setting defaults so real values are used when present.
"""
from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

from dotenv import load_dotenv

# Ensure repository root is on sys.path for local package imports
sys.path.append(str(Path(__file__).resolve().parents[1]))

load_dotenv(override=False)

# Keep test runs hermetic: no application id pinning or signature checks,
# logs in a scratch dir.
os.environ["SKILL_APPLICATION_ID"] = ""
os.environ["VERIFY_REQUEST_SIGNATURE"] = "false"
os.environ.setdefault("LOG_PSEUDONYM_SECRET", "test-secret")
os.environ.setdefault("STICKY_NOTES_LOG_DIR", tempfile.mkdtemp(prefix="sticky-notes-logs-"))
os.environ.setdefault("HEALTHCHECK_API_TOKEN", "health-token")
