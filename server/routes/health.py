"""
Health check endpoint.
"""

from fastapi import APIRouter

from core.templates.models import utc_now_iso

from ..app import API_VERSION


router = APIRouter()


@router.get("/api/health")
async def health() -> dict:
    """Health check endpoint."""
    return {"status": "ok", "timestamp": utc_now_iso(), "version": API_VERSION}
