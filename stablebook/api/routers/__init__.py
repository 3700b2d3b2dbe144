"""API routers."""

from .auth import router as auth_router
from .chat import router as chat_router
from .health import router as health_router
from .horses import router as horses_router  # Package: router, validators, response mappers
from .insights import router as insights_router
from .migration import router as migration_router
from .pregnancies import router as pregnancies_router
from .uploads import router as uploads_router
from .vaccines import router as vaccines_router
from .visits import router as visits_router

__all__ = [
    "auth_router",
    "chat_router",
    "health_router",
    "horses_router",
    "insights_router",
    "migration_router",
    "pregnancies_router",
    "uploads_router",
    "vaccines_router",
    "visits_router",
]
