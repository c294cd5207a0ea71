"""Domain errors and exception handlers with request_id in responses."""

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.catalog.core.logging import get_logger

logger = get_logger(__name__)


class CatalogError(Exception):
    """Base class for errors raised by the catalog services.

    Each subclass maps to one HTTP status; the message is sent as `detail`.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ProjectValidationError(CatalogError):
    """Request payload is missing required data (e.g. an empty name)."""

    status_code = status.HTTP_400_BAD_REQUEST


class ProjectNotFoundError(CatalogError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, project_id: object):
        super().__init__(f"Project with ID {project_id} not found")
        self.project_id = project_id


class ProjectConflictError(CatalogError):
    """The storage layer rejected a write because the name is already taken."""

    status_code = status.HTTP_409_CONFLICT

    def __init__(self, name: str):
        super().__init__(f"Project with name '{name}' already exists")
        self.name = name


class UserValidationError(CatalogError):
    status_code = status.HTTP_400_BAD_REQUEST


class UserNotFoundError(CatalogError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, user_id: object = None, *, email: str | None = None):
        if email is not None:
            super().__init__(f"User with email {email} not found")
        else:
            super().__init__(f"User with ID {user_id} not found")
        self.user_id = user_id
        self.email = email


class UserConflictError(CatalogError):
    """Another user already holds this email address."""

    status_code = status.HTTP_409_CONFLICT

    def __init__(self, email: str):
        super().__init__(f"User with email '{email}' already exists")
        self.email = email


def _error_response(status_code: int, detail: object) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": detail,
            "request_id": correlation_id.get(),
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that include request_id in responses."""

    @app.exception_handler(CatalogError)
    async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
        logger.info(
            "Request rejected",
            error=type(exc).__name__,
            detail=exc.message,
            path=request.url.path,
        )
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        # Malformed payloads (e.g. a missing or blank name) are client errors
        return _error_response(status.HTTP_400_BAD_REQUEST, jsonable_encoder(exc.errors()))

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return _error_response(exc.status_code, exc.detail)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return _error_response(exc.status_code, exc.detail)

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = correlation_id.get()
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=request_id,
            path=request.url.path,
        )
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
