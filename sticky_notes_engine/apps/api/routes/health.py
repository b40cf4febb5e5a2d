"""Health and readiness routes."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..dependencies import require_healthcheck_token

router = APIRouter()


@router.get("/")
def read_root() -> dict[str, str]:
    """Health/info endpoint with a short usage message."""
    return {"message": "Sticky Notes skill endpoint. POST skill events to /skill."}


@router.get("/alive")
async def alive_check(_: None = Depends(require_healthcheck_token)) -> JSONResponse:
    """Authenticated health check endpoint for load balancers and uptime monitors."""
    return JSONResponse({"status": "ok", "message": "Sticky Notes skill is alive and healthy."})


__all__ = ["router"]
