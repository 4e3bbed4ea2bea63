import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

# Client-facing messages
MISSING_TOKEN = "ไม่พบ token"
INVALID_TOKEN = "Token ไม่ถูกต้อง"
INVALID_INPUT = "ข้อมูลไม่ถูกต้อง"
NOT_FOUND = "ไม่พบข้อมูล"
USER_NOT_FOUND = "ไม่พบผู้ใช้"
INTERNAL_ERROR = "เกิดข้อผิดพลาด"


def _details(exc: RequestValidationError) -> list:
    details = []
    for error in exc.errors():
        # Drop the leading "body"/"query" marker so paths name the field itself
        loc = [part for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        details.append({"path": loc, "message": error.get("msg", "")})
    return details


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": INVALID_INPUT, "details": _details(exc)},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": INTERNAL_ERROR},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
