"""
System health API routes
"""

from fastapi import APIRouter
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)

def create_system_routes(config):
    """Create system monitoring routes"""
    router = APIRouter(prefix="/api", tags=["system"])

    @router.get("/system/health")
    async def system_health():
        """System health check"""
        return {
            "status": "healthy",
            "discovery_timeout_seconds": config.get('discovery', {}).get('timeout_seconds'),
            "timestamp": datetime.now(timezone.utc).isoformat()
        }

    return router
