from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError  # type: ignore[import-not-found]
from starlette import status

from roopsnap.commons.exceptions import (
    BaseCoreException,
    BaseServiceException,
    BaseServiceNotFoundException,
    BaseServiceUnauthorizedException,
    BaseServiceUnavailableException,
)
from roopsnap.commons.logging import logger


def _error_body(message: str, details: str | None = None) -> dict:
    body: dict = {"error": message}
    if details:
        body["message"] = details
    return body


def status_code_for(exc: BaseServiceException) -> int:
    if isinstance(exc, BaseServiceUnauthorizedException):
        return status.HTTP_401_UNAUTHORIZED
    if isinstance(exc, BaseServiceNotFoundException):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, BaseServiceUnavailableException):
        return status.HTTP_503_SERVICE_UNAVAILABLE
    # Validation, conflict and anything unclassified.
    return status.HTTP_400_BAD_REQUEST


def configure_global_exception_handlers(app: FastAPI) -> FastAPI:
    @app.exception_handler(BaseServiceException)
    async def service_exception_handler(
        request: Request, exc: BaseServiceException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status_code_for(exc),
            content=_error_body(exc.message, exc.details),
        )

    @app.exception_handler(BaseCoreException)
    async def core_exception_handler(
        request: Request, exc: BaseCoreException
    ) -> JSONResponse:
        logger.error("%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.details)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body(exc.message, exc.details),
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(
        request: Request, exc: SQLAlchemyError
    ) -> JSONResponse:
        logger.error("%s %s database error: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body(str(exc)),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_body("Invalid request body"),
        )

    return app
