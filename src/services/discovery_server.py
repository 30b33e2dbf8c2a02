"""
Discovery Server - wires configuration, logging and the HTTP API together
"""

import logging
import uvicorn

from config_loader import load_config, setup_logging
from sony_discovery import DeviceDiscovery
from api.main_api import DiscoveryAPI

logger = logging.getLogger(__name__)

class DiscoveryServer:
    """Serves device discovery over HTTP"""

    def __init__(self, config_path: str = "config/config.yaml"):
        self.config = load_config(config_path)
        setup_logging(self.config)

        self.discovery = DeviceDiscovery(self.config['discovery'])
        self.api = DiscoveryAPI(self.config, self.discovery)
        self.server = None

    async def start(self):
        """Start the API server and block until it exits"""
        logger.info("Starting Sony device discovery server...")
        try:
            await self._start_api_server()
        except Exception as e:
            logger.error(f"Server startup failed: {e}")
            raise

    async def stop(self):
        """Ask the API server to exit"""
        logger.info("Stopping server...")
        if self.server:
            self.server.should_exit = True

    async def _start_api_server(self):
        """Start the FastAPI server"""
        config = uvicorn.Config(
            self.api.app,
            host=self.config['api']['host'],
            port=self.config['api']['port'],
            log_level="info",
            access_log=False  # We handle our own logging
        )

        self.server = uvicorn.Server(config)

        logger.info(f"Starting API server on {self.config['api']['host']}:{self.config['api']['port']}")
        logger.info(f"API documentation: http://localhost:{self.config['api']['port']}/docs")
        logger.info(f"Default discovery timeout: {self.discovery.discovery_timeout}s")

        await self.server.serve()
