"""Error taxonomy and the uniform JSON error envelope.

Every failure leaves the service as::

    {"error": {"code": "<CODE>", "message": "<human readable>"}}

Request-level problems are raised as :class:`ApiError`. Database problems
are classified once at the repository boundary into
:class:`NotFoundError`, :class:`ConstraintError` or :class:`DatabaseError`
and mapped to a status here.
"""

import logging
import uuid
from enum import Enum

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ErrorCode(str, Enum):
    """Closed set of error codes exposed over HTTP."""

    INVALID_JSON = "INVALID_JSON"
    INVALID_UUID = "INVALID_UUID"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_REQUEST = "INVALID_REQUEST"
    NOT_FOUND = "NOT_FOUND"
    CATEGORY_NOT_FOUND = "CATEGORY_NOT_FOUND"
    DATABASE_ERROR = "DATABASE_ERROR"
    CONSTRAINT_ERROR = "CONSTRAINT_ERROR"


ERROR_STATUS: dict[ErrorCode, int] = {
    ErrorCode.INVALID_JSON: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_UUID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorCode.CATEGORY_NOT_FOUND: status.HTTP_400_BAD_REQUEST,
    ErrorCode.CONSTRAINT_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.DATABASE_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

INVALID_JSON_MESSAGE = "Invalid JSON format"
INVALID_UUID_MESSAGE = "Invalid UUID format"
CATEGORY_NOT_FOUND_MESSAGE = "Specified category not found"
DATABASE_ERROR_MESSAGE = "Database error occurred"
CONSTRAINT_ERROR_MESSAGE = "Request violates a database constraint"


class ApiError(Exception):
    """A request failure carrying its error code and message."""

    def __init__(self, code: ErrorCode, message: str, status_code: int | None = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code or ERROR_STATUS[code]


class RepositoryError(Exception):
    """Base class for classified persistence failures."""

    code: ErrorCode = ErrorCode.DATABASE_ERROR

    def __init__(self, message: str = DATABASE_ERROR_MESSAGE):
        super().__init__(message)
        self.message = message


class NotFoundError(RepositoryError):
    """No row matched the requested id."""

    code = ErrorCode.NOT_FOUND


class ConstraintError(RepositoryError):
    """A unique, check or foreign-key constraint rejected the write."""

    code = ErrorCode.CONSTRAINT_ERROR

    def __init__(self, message: str = CONSTRAINT_ERROR_MESSAGE):
        super().__init__(message)


class DatabaseError(RepositoryError):
    """Any other driver or connection failure."""

    code = ErrorCode.DATABASE_ERROR


def error_response(status_code: int, code: ErrorCode | str, message: str) -> JSONResponse:
    """Build the uniform error envelope."""
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": ErrorCode(code).value, "message": message}},
    )


def _field_name(loc: tuple) -> str:
    return ".".join(str(part) for part in loc[1:]) or "body"


def classify_validation_errors(errors: list[dict]) -> tuple[ErrorCode, str]:
    """Pick the code and message reported for a failed request parse.

    Path problems win over body problems, and an unparseable body wins
    over field-level problems, matching the order a handler checks them.
    """
    for error in errors:
        if error["loc"] and error["loc"][0] == "path":
            return ErrorCode.INVALID_UUID, INVALID_UUID_MESSAGE

    for error in errors:
        if error["type"] == "json_invalid":
            return ErrorCode.INVALID_JSON, INVALID_JSON_MESSAGE
        if tuple(error["loc"]) == ("body",) and error["type"] == "missing":
            return ErrorCode.INVALID_JSON, INVALID_JSON_MESSAGE

    error = errors[0]
    if error["type"] in ErrorCode.__members__:
        # Raised by our own validators as PydanticCustomError(code, message)
        return ErrorCode(error["type"]), error["msg"]
    if tuple(error["loc"]) == ("body",):
        return ErrorCode.INVALID_REQUEST, "Request body must be a JSON object"
    return ErrorCode.INVALID_REQUEST, f"Invalid value for {_field_name(tuple(error['loc']))}"


def _has_malformed_id(request: Request) -> bool:
    """Every path parameter in this API is a UUID."""
    for value in request.path_params.values():
        try:
            uuid.UUID(str(value))
        except ValueError:
            return True
    return False


def register_error_handlers(app: FastAPI) -> None:
    """Install exception handlers that render the error envelope."""

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
        return error_response(exc.status_code, exc.code, exc.message)

    @app.exception_handler(RepositoryError)
    async def repository_error_handler(request: Request, exc: RepositoryError) -> JSONResponse:
        if isinstance(exc, DatabaseError):
            logger.error("Database error on %s %s: %s", request.method, request.url.path, exc)
        return error_response(ERROR_STATUS[exc.code], exc.code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        code, message = classify_validation_errors(list(exc.errors()))
        # FastAPI rejects unparseable JSON before it looks at the path
        if code is ErrorCode.INVALID_JSON and _has_malformed_id(request):
            code, message = ErrorCode.INVALID_UUID, INVALID_UUID_MESSAGE
        logger.debug("Rejected %s %s: %s %s", request.method, request.url.path, code.value, message)
        return error_response(ERROR_STATUS[code], code, message)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            code, message = ErrorCode.NOT_FOUND, "Resource not found"
        else:
            code, message = ErrorCode.INVALID_REQUEST, str(exc.detail)
        response = error_response(exc.status_code, code, message)
        if exc.headers:
            response.headers.update(exc.headers)
        return response
