"""
Discovery coordinator: SSDP search followed by one ScalarWebAPI lookup per advertising host
"""

import logging
import time
from typing import Dict, List, Optional
from urllib.parse import urlsplit

from http_helper import create_device_session, DEVICE_REQUEST_TIMEOUT_SECONDS

from .models import Device, DiscoveryResult, SsdpResponse
from .scalar_api import SCALAR_WEB_API_SERVICE, InterfaceInformationResponse, get_interface_information
from .ssdp import SSDP_MX, SsdpResponseError, search

logger = logging.getLogger(__name__)

DEFAULT_DISCOVERY_TIMEOUT = 5

def extract_host(location: str) -> Optional[str]:
    """Host portion of an advertisement LOCATION, or None if it is not a usable URL"""
    try:
        parts = urlsplit(location)
        parts.port  # raises ValueError on a malformed port
    except ValueError:
        return None
    host = parts.hostname
    if not parts.scheme or not host:
        return None
    if ':' in host:
        # IPv6 literal, kept in URL form
        return f"[{host}]"
    return host

def devices_from_interface_information(host: str, info: InterfaceInformationResponse) -> List[Device]:
    """One Device per result entry, in response order"""
    return [
        Device(
            id=f"{host}-{entry.model_name}",
            display_name=f"{entry.product_name} {entry.model_name}",
            product=entry.product_category,
            model=entry.model_name,
            hostname=host
        )
        for entry in info.result
    ]

class DeviceDiscovery:
    """Discovery service for Sony ScalarWebAPI devices"""

    def __init__(self, config: Optional[Dict] = None):
        config = config or {}
        self.discovery_timeout = config.get('timeout_seconds', DEFAULT_DISCOVERY_TIMEOUT)
        self.search_target = SCALAR_WEB_API_SERVICE

    async def discover_devices(self, timeout: Optional[int] = None) -> List[Device]:
        """
        Run one discovery pass and return the devices found.
        Raises DiscoveryStartError if the SSDP search cannot be started.
        """
        result = await self.discover(timeout)
        return result.devices

    async def discover(self, timeout: Optional[int] = None) -> DiscoveryResult:
        """Run one discovery pass and return the devices along with run statistics"""
        timeout = self._resolve_timeout(timeout)
        start_time = time.time()

        devices: List[Device] = []
        hosts_queried = 0
        success_count = 0

        async with create_device_session(DEVICE_REQUEST_TIMEOUT_SECONDS) as session:
            responses = await self.collect_advertisements(timeout)

            for response in responses:
                host = extract_host(response.location)
                if host is None:
                    logger.debug(f"Skipping advertisement with unusable location: {response.location!r}")
                    continue

                hosts_queried += 1
                info = await get_interface_information(session, host)
                if info is None:
                    continue

                success_count += 1
                host_devices = devices_from_interface_information(host, info)
                for device in host_devices:
                    logger.info(f"[OK] Resolved {device.display_name} ({device.hostname})")
                devices.extend(host_devices)

        duration = time.time() - start_time
        logger.info(f"SSDP discovery: {len(devices)} devices from {success_count}/{hosts_queried} hosts in {duration:.1f}s")
        return DiscoveryResult(devices, "ssdp", duration, hosts_queried, success_count)

    async def collect_advertisements(self, timeout: float) -> List[SsdpResponse]:
        """
        Gather advertisements in arrival order until the timeout.
        Collection stops at the first reply that cannot be parsed; later replies are dropped.
        """
        responses = []
        async with search(self.search_target, timeout, SSDP_MX) as stream:
            try:
                async for response in stream:
                    logger.info(f"Found device: {response.location}")
                    responses.append(response)
            except SsdpResponseError as e:
                logger.warning(f"Error in response, stopping collection after {len(responses)} advertisements: {e}")
        return responses

    def _resolve_timeout(self, timeout: Optional[int]) -> int:
        if timeout is None:
            return self.discovery_timeout
        if timeout < 0:
            raise ValueError(f"timeout must be non-negative, got {timeout}")
        return timeout

async def discover_devices(timeout: Optional[int] = None) -> List[Device]:
    """Discover ScalarWebAPI devices; `timeout` defaults to 5 seconds"""
    return await DeviceDiscovery().discover_devices(timeout)
