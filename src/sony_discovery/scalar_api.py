"""
Sony ScalarWebAPI metadata lookup
Queries the system service of a discovered host for its interface information
"""

import asyncio
import logging
from typing import List, Optional

import aiohttp
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

SCALAR_WEB_API_SERVICE = "urn:schemas-sony-com:service:ScalarWebAPI:1"
SYSTEM_SERVICE_PATH = "/sony/system"

INTERFACE_INFORMATION_METHOD = "getInterfaceInformation"
INTERFACE_INFORMATION_REQUEST_ID = 33
API_VERSION = "1.0"

INTERFACE_INFORMATION_REQUEST = {
    "method": INTERFACE_INFORMATION_METHOD,
    "id": INTERFACE_INFORMATION_REQUEST_ID,
    "params": [],
    "version": API_VERSION,
}

class InterfaceInformation(BaseModel):
    model_name: str = Field(alias="modelName")
    product_category: str = Field(alias="productCategory")
    product_name: str = Field(alias="productName")

class InterfaceInformationResponse(BaseModel):
    result: List[InterfaceInformation]

def system_service_url(host: str) -> str:
    """Build the system service URL; IPv6 hosts arrive already bracketed"""
    return f"http://{host}{SYSTEM_SERVICE_PATH}"

async def get_interface_information(session: aiohttp.ClientSession, host: str) -> Optional[InterfaceInformationResponse]:
    """
    POST getInterfaceInformation to a host.
    Returns None on any network error, timeout, non-200 status or schema mismatch.
    """
    url = system_service_url(host)
    try:
        async with session.post(url, json=INTERFACE_INFORMATION_REQUEST) as response:
            if response.status != 200:
                logger.debug(f"{url} returned HTTP {response.status}")
                return None
            text = await response.text()
    except (aiohttp.ClientError, asyncio.TimeoutError, UnicodeDecodeError) as e:
        logger.debug(f"Interface information request to {host} failed: {e!r}")
        return None

    try:
        return InterfaceInformationResponse.model_validate_json(text)
    except ValidationError as e:
        logger.debug(f"Unexpected interface information from {host}: {e.error_count()} validation errors")
        return None
