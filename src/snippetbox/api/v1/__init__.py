from .error_handlers import register_exception_handlers
from .routes import api_router

__all__ = ["api_router", "register_exception_handlers"]
