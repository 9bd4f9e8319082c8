"""
Traduction des exceptions en reponses JSON enveloppees.

Les exceptions du domaine sont converties ici, a la frontiere HTTP ;
les services ne connaissent pas les codes de statut.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.core.exceptions import (
    ExternalMatchNotFoundError,
    MovieConflictError,
    MovieNotFoundError,
    MovieValidationError,
    ProviderConfigurationError,
    ProviderError,
    ProviderNotFoundError,
    UnsupportedSourceError,
)

from .schemas import envelope, movie_payload

VALIDATION_MESSAGE = "Validation error"
QUERY_VALIDATION_MESSAGE = "Invalid query parameters"


def error_response(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=envelope(message=message, success=False, **extra),
    )


def _format_validation_error(error: dict) -> str:
    location = ".".join(str(part) for part in error.get("loc", ())[1:])
    message = error.get("msg", "Invalid value")
    # Les messages des validateurs personnalises sont prefixes par pydantic
    message = message.removeprefix("Value error, ")
    return f"{location}: {message}" if location else message


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    in_query = bool(errors) and all(e.get("loc", ("",))[0] in ("query", "path") for e in errors)
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        QUERY_VALIDATION_MESSAGE if in_query else VALIDATION_MESSAGE,
        errors=[_format_validation_error(e) for e in errors],
    )


async def movie_validation_handler(request: Request, exc: MovieValidationError) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, VALIDATION_MESSAGE, errors=exc.errors)


async def not_found_handler(request: Request, exc: Exception) -> JSONResponse:
    return error_response(status.HTTP_404_NOT_FOUND, str(exc))


async def conflict_handler(request: Request, exc: MovieConflictError) -> JSONResponse:
    return error_response(
        status.HTTP_409_CONFLICT,
        str(exc),
        data=movie_payload(exc.existing),
    )


async def unsupported_source_handler(request: Request, exc: UnsupportedSourceError) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, str(exc))


async def provider_error_handler(request: Request, exc: ProviderError) -> JSONResponse:
    if isinstance(exc, ProviderConfigurationError):
        status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    elif isinstance(exc, ProviderNotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    else:
        status_code = status.HTTP_502_BAD_GATEWAY
    return error_response(status_code, str(exc))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        message = f"Route {request.url.path} not found"
    else:
        message = str(exc.detail)
    return error_response(exc.status_code, message)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Erreur non geree sur {request.method} {request.url.path}: {exc}")
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server Error")


def register_exception_handlers(app: FastAPI) -> None:
    """Branche les gestionnaires d'exceptions sur l'application."""
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(MovieValidationError, movie_validation_handler)
    app.add_exception_handler(MovieNotFoundError, not_found_handler)
    app.add_exception_handler(ExternalMatchNotFoundError, not_found_handler)
    app.add_exception_handler(MovieConflictError, conflict_handler)
    app.add_exception_handler(UnsupportedSourceError, unsupported_source_handler)
    app.add_exception_handler(ProviderError, provider_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
