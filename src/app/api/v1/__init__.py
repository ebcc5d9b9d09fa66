from .error_handlers import register_exception_handlers
from .health import router as health_router
from .users import router as users_router

__all__ = ["register_exception_handlers", "health_router", "users_router"]
