"""
Discovery module for Sony ScalarWebAPI devices
"""

from .manager import DeviceDiscovery, discover_devices
from .models import Device, DiscoveryResult, SsdpResponse
from .ssdp import DiscoveryStartError, SsdpError, SsdpResponseError

__all__ = [
    'DeviceDiscovery', 'discover_devices',
    'Device', 'DiscoveryResult', 'SsdpResponse',
    'DiscoveryStartError', 'SsdpError', 'SsdpResponseError'
]
