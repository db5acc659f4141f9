# This project was developed with assistance from AI tools.
"""Health check endpoint."""

from fastapi import APIRouter

from ..core.config import settings

router = APIRouter()


@router.get("/")
async def health() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "ok", "service": settings.APP_NAME}
