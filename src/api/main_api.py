"""
Main FastAPI application setup
Local HTTP API exposing Sony ScalarWebAPI device discovery to host applications
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from typing import Dict, Optional
import logging

from sony_discovery import DeviceDiscovery

from .discovery_routes import create_discovery_routes
from .system_routes import create_system_routes

logger = logging.getLogger(__name__)

class DiscoveryAPI:
    """Local HTTP API for device discovery"""

    def __init__(self, config: Dict, discovery: Optional[DeviceDiscovery] = None):
        self.config = config
        self.discovery = discovery or DeviceDiscovery(config.get('discovery', {}))
        self.app = FastAPI(
            title="Sony Device Discovery Server",
            description="Local API for discovering Sony ScalarWebAPI devices via SSDP",
            version="1.0.0"
        )
        self._setup_middleware()
        self._setup_routes()

    def _setup_middleware(self):
        origins = self.config.get('api', {}).get('cors_origins', ['*'])
        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_methods=["*"],
            allow_headers=["*"]
        )

    def _setup_routes(self):
        """Setup FastAPI routes using modular approach"""
        self.app.include_router(create_discovery_routes(self.discovery))
        self.app.include_router(create_system_routes(self.config))
