"""
Health check endpoint.
"""

from typing import Any, Dict

from fastapi import APIRouter

from mcpgen import __version__
from mcpgen.config import get_settings

router = APIRouter()


@router.get("/health")
async def health_check() -> Dict[str, Any]:
    """Report service status and whether remote analysis is configured."""
    settings = get_settings()
    return {
        "status": "healthy",
        "service": "mcp-server-generator",
        "version": __version__,
        "environment": settings.environment,
        "remote_analysis": settings.remote_analysis_enabled,
    }
