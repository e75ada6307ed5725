import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from site_cms.exceptions import SiteCmsError

logger = logging.getLogger(__name__)


class CatchAllExceptionMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            logger.error(
                "%s on %s (500): %s",
                type(exc).__name__,
                request.url.path,
                exc,
                exc_info=True,
                extra={"http_method": request.method, "path": request.url.path, "status_code": 500},
            )
            return JSONResponse(
                status_code=500,
                content={"success": False, "message": SiteCmsError.default_message},
            )
