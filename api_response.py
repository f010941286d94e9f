"""
JSON envelope shared by every /api route.

    {"success": true,  "data": ..., "meta": ...}
    {"success": false, "error": "...", "meta": ...}
"""
import logging
from typing import Any, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


def success(data: Any, status_code: int = 200, meta: Optional[Any] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder({"success": True, "data": data, "meta": meta}),
    )


def error(message: str, status_code: int = 500, meta: Optional[Any] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder({"success": False, "error": message, "meta": meta}),
    )


class ApiError(HTTPException):
    """HTTPException that also carries envelope metadata."""

    def __init__(self, status_code: int, detail: str, meta: Optional[Any] = None):
        super().__init__(status_code=status_code, detail=detail)
        self.meta = meta


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error(str(exc.detail), exc.status_code, getattr(exc, "meta", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return error("Invalid input", 400, exc.errors())


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error("Internal server error", 500)


def install(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
