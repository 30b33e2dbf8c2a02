"""
Device discovery API routes
"""

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
import logging

from sony_discovery import DeviceDiscovery, DiscoveryStartError

logger = logging.getLogger(__name__)

# Response models
class DeviceResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    display_name: str = Field(alias="displayName")
    product: str
    model: str
    hostname: str

class DiscoverResponse(BaseModel):
    devices: List[DeviceResponse]
    count: int
    duration_seconds: float

def create_discovery_routes(discovery: DeviceDiscovery):
    """Create device discovery routes"""
    router = APIRouter(prefix="/api/devices", tags=["discovery"])

    @router.get("/discover", response_model=DiscoverResponse)
    async def discover(timeout: Optional[int] = Query(None, ge=0, description="SSDP wait in seconds")):
        """Search the local network for ScalarWebAPI devices"""
        try:
            result = await discovery.discover(timeout)
        except DiscoveryStartError as e:
            logger.error(f"Discovery request failed: {e}")
            raise HTTPException(status_code=503, detail=str(e))

        return DiscoverResponse(
            devices=[DeviceResponse(**device.to_dict()) for device in result.devices],
            count=len(result.devices),
            duration_seconds=round(result.duration_seconds, 3)
        )

    return router
