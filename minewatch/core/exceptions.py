import logging
from typing import Dict, List, Type
from fastapi.exceptions import RequestValidationError
from fastapi import Request, status
from starlette.exceptions import HTTPException
from fastapi.responses import JSONResponse

from minewatch.domain.errors import (
    DomainError,
    DuplicateError,
    EquipmentNotOperatingError,
    InsufficientResourceError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from minewatch.schemas.envelope import ErrorResponse

logger = logging.getLogger(__name__)

DOMAIN_ERROR_STATUS: Dict[Type[DomainError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    InvalidTransitionError: status.HTTP_400_BAD_REQUEST,
    InsufficientResourceError: status.HTTP_400_BAD_REQUEST,
    EquipmentNotOperatingError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    DuplicateError: status.HTTP_409_CONFLICT,
}


def status_for(exc: DomainError) -> int:
    for cls in type(exc).__mro__:
        if cls in DOMAIN_ERROR_STATUS:
            return DOMAIN_ERROR_STATUS[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(message: str, status_code: int, errors: List[str] | None = None) -> JSONResponse:
    body = ErrorResponse(message=message, errors=errors or [])
    return JSONResponse(body.model_dump(mode="json"), status_code=status_code)


def _format_validation_errors(exc: RequestValidationError) -> List[str]:
    messages = []
    for err in exc.errors():
        # drop the leading "body"/"query" segment
        loc = ".".join(str(part) for part in err.get("loc", ())[1:])
        messages.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return messages


def register_exception_handlers(app):
    @app.exception_handler(DomainError)
    async def domain_exception_handler(request: Request, exc: DomainError):
        status_code = status_for(exc)
        logger.info("Domain error", extra={"status_code": status_code, "error": type(exc).__name__})
        return error_response(exc.message, status_code, exc.errors)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        logger.info("HTTP exception", extra={"status_code": exc.status_code})
        return error_response(str(exc.detail), exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.info("Validation error", extra={"errors": exc.errors()})
        return error_response("Invalid input data", status.HTTP_400_BAD_REQUEST, _format_validation_errors(exc))

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception")
        return error_response("Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR)
