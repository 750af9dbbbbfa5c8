"""
Dependency injection setup for FastAPI.
Provides dependency providers for the backend client and the point service.
"""

from fastapi import Depends, Request
from typing import Optional
import logging
import asyncio

from historymap.config.settings import Settings, get_settings
from historymap.core.exceptions import ErrorCode, HistoryMapException
from historymap.schemas.views import MarkerIconSet
from historymap.services.backend_client import BackendClient
from historymap.services.map_icons import init_marker_icons
from historymap.services.point_service import PointService

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Owns the long-lived services: one backend HTTP client and the marker icon set.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self._backend_client: Optional[BackendClient] = None
        self._icons: Optional[MarkerIconSet] = None
        self._initialized = False
        self._initialization_lock = asyncio.Lock()

    async def initialize_services(self) -> None:
        async with self._initialization_lock:
            if self._initialized:
                return

            logger.info("Initializing service container")

            backend = self.settings.backend
            self._backend_client = BackendClient(
                base_url=backend.api_url,
                api_token=backend.api_token,
                timeout=backend.timeout_seconds,
            )

            map_settings = self.settings.map
            self._icons = init_marker_icons(
                icon_base_url=map_settings.icon_base_url,
                pin_icon_url=map_settings.pin_icon_url,
                pin_size=map_settings.pin_icon_size,
            )

            self._initialized = True
            logger.info("Service container initialized")

    async def cleanup_services(self) -> None:
        if self._backend_client is not None:
            await self._backend_client.aclose()
        self._backend_client = None
        self._initialized = False
        logger.info("Service container cleaned up")

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def get_backend_client(self) -> BackendClient:
        if self._backend_client is None:
            raise HistoryMapException(
                "Service container not initialized",
                ErrorCode.INTERNAL_SERVER_ERROR,
            )
        return self._backend_client

    def get_icons(self) -> MarkerIconSet:
        if self._icons is None:
            raise HistoryMapException(
                "Service container not initialized",
                ErrorCode.INTERNAL_SERVER_ERROR,
            )
        return self._icons


# Global service container instance
service_container = ServiceContainer()


def get_service_container(request: Request) -> ServiceContainer:
    return getattr(request.app.state, "service_container", service_container)


def get_backend_client(container: ServiceContainer = Depends(get_service_container)) -> BackendClient:
    return container.get_backend_client()


def get_point_service(
    backend: BackendClient = Depends(get_backend_client),
    container: ServiceContainer = Depends(get_service_container),
) -> PointService:
    return PointService(backend, container.settings.map, container.get_icons())
