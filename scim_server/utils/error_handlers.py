"""Преобразование исключений в SCIM Error ответы"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

from ..resources.responses import scim_error_response
from .exceptions import SCIMServerError

logger = logging.getLogger(__name__)


async def scim_server_exception_handler(request: Request, exc: SCIMServerError):
    """Обработчик исключений SCIM Resource Server"""
    if exc.status_code >= 500 and exc.status_code != 501:
        logger.error(f"SCIM Server Error: {exc.message}")
    else:
        logger.info(f"SCIM request failed with {exc.status_code}: {exc.message}")

    return scim_error_response(exc.status_code, exc.message, exc.scim_type)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Обработчик ошибок валидации параметров и тела запроса"""
    logger.info(f"Invalid request: {exc.errors()}")

    details = "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}"
        for error in exc.errors()
    )
    # Ошибка в теле запроса - invalidSyntax (RFC 7644 §3.12)
    in_body = any(tuple(error.get("loc", ()))[:1] == ("body",) for error in exc.errors())
    return scim_error_response(400, details or "Invalid request", "invalidSyntax" if in_body else "invalidValue")


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Обработчик HTTP исключений"""
    logger.error(f"HTTP Error: {exc.detail}")

    return scim_error_response(exc.status_code, str(exc.detail))


async def general_exception_handler(request: Request, exc: Exception):
    """Обработчик неожиданных исключений"""
    logger.error(f"Unexpected error: {str(exc)}", exc_info=True)

    return scim_error_response(500, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    """Регистрирует обработчики исключений в приложении"""
    app.add_exception_handler(SCIMServerError, scim_server_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, general_exception_handler)
