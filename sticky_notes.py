"""Top-level ASGI entrypoint (``uvicorn sticky_notes:app``)."""

from sticky_notes_engine.api_factory import create_app

app = create_app()

__all__ = ["app"]
