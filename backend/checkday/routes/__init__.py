# API Routes
from .auth import router as auth_router
from .template import router as template_router
from .today import router as today_router
from .recap import router as recap_router

__all__ = [
    "auth_router",
    "template_router",
    "today_router",
    "recap_router",
]
