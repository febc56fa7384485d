from .auth import router as auth_router
from .catalog import router as catalog_router
from .availability import router as availability_router
from .reservations import router as reservations_router
from .blocks import router as blocks_router
from .admin import router as admin_router

__all__ = [
    "auth_router", "catalog_router", "availability_router",
    "reservations_router", "blocks_router", "admin_router",
]
