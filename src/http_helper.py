# HTTP Helper for device connections
# Session configuration for ScalarWebAPI requests to discovered hosts (always plain HTTP)

import aiohttp
import logging

logger = logging.getLogger(__name__)

DEVICE_REQUEST_TIMEOUT_SECONDS = 5
DEVICE_CONNECTIONS_PER_HOST = 10

def create_device_session(timeout_seconds: float = DEVICE_REQUEST_TIMEOUT_SECONDS,
                          limit_per_host: int = DEVICE_CONNECTIONS_PER_HOST) -> aiohttp.ClientSession:
    """
    Create an aiohttp session for one discovery run.
    Must be used as an async context manager so the connector is closed with it.
    """
    connector = aiohttp.TCPConnector(
        limit_per_host=limit_per_host,  # Pool cap per device IP
        ssl=False,                      # Devices speak HTTP only
        enable_cleanup_closed=True
    )

    return aiohttp.ClientSession(
        connector=connector,
        timeout=aiohttp.ClientTimeout(total=timeout_seconds)
    )
