"""
Health API Routes
"""
from fastapi import APIRouter

from app.config import settings

router = APIRouter()


@router.get("/health")
async def health_check() -> dict:
    """Application health and processor configuration"""
    return {
        "status": "healthy" if settings.vendor_configured else "degraded",
        "environment": settings.app_env,
        "authorize_net_env": settings.authorize_net_env,
        "vendor_configured": settings.vendor_configured,
    }
