# API endpoints and routers

from .auth_endpoints import router as auth_router
from .points_endpoints import router as points_router
from .files_endpoints import router as files_router
from .views_endpoints import router as views_router

__all__ = [
    "auth_router",
    "points_router",
    "files_router",
    "views_router",
]
