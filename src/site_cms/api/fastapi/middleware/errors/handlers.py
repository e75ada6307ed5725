from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from site_cms.exceptions import SiteCmsError, ValidationFailure

logger = logging.getLogger(__name__)


def error_body(message: str) -> dict:
    return {"success": False, "message": message}


def _http_ctx(request: Request, status: int) -> dict:
    return {"http_method": request.method, "path": request.url.path, "status_code": status}


def _request_validation_messages(exc: RequestValidationError) -> list[str]:
    messages: list[str] = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        msg = f"{'.'.join(loc)}: {err.get('msg')}" if loc else str(err.get("msg"))
        if msg not in messages:
            messages.append(msg)
    return messages


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(SiteCmsError)
    async def handle_site_cms_error(request: Request, exc: SiteCmsError):
        if exc.status_code >= 500:
            logger.error(
                "%s on %s: %s", type(exc).__name__, request.url.path, exc.message,
                exc_info=exc, extra=_http_ctx(request, exc.status_code),
            )
        else:
            logger.info(
                "%s on %s: %s", type(exc).__name__, request.url.path, exc.message,
                extra=_http_ctx(request, exc.status_code),
            )
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.message))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        failure = ValidationFailure(_request_validation_messages(exc))
        logger.info("Invalid request on %s: %s", request.url.path, failure.message,
                    extra=_http_ctx(request, failure.status_code))
        return JSONResponse(status_code=failure.status_code, content=error_body(failure.message))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        message = exc.detail if isinstance(exc.detail, str) else SiteCmsError.default_message
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(message),
            headers=getattr(exc, "headers", None),
        )
