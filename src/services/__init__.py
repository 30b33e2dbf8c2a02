"""
Server orchestration for device discovery
"""

from .discovery_server import DiscoveryServer

__all__ = ['DiscoveryServer']
