from .catchall import CatchAllExceptionMiddleware
from .handlers import error_body, register_error_handlers

__all__ = ["CatchAllExceptionMiddleware", "register_error_handlers", "error_body"]
