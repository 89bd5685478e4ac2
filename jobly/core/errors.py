"""
Error types and FastAPI exception handlers.

Every client-facing error renders as:
    {"error": {"message": ..., "status": ...}}
"""

import logging
from typing import List, Optional, Union

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

Message = Union[str, List[str]]


class JoblyError(Exception):
    """Base error carrying a client-facing message and HTTP status."""

    status_code = 500
    default_message = "Internal Server Error"

    def __init__(self, message: Optional[Message] = None, status_code: Optional[int] = None):
        self.message = message if message is not None else self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class BadRequestError(JoblyError):
    status_code = 400
    default_message = "Bad Request"


class UnauthorizedError(JoblyError):
    status_code = 401
    default_message = "Unauthorized"


class NotFoundError(JoblyError):
    status_code = 404
    default_message = "Not Found"


def error_response(message: Message, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": {"message": message, "status": status_code}},
    )


def format_validation_errors(errors) -> List[str]:
    """Flatten pydantic error dicts into "<location>: <reason>" strings."""
    messages = []
    for err in errors:
        loc = ".".join(str(part) for part in err.get("loc", ()))
        messages.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return messages


async def jobly_error_handler(request: Request, exc: JoblyError):
    return error_response(exc.message, exc.status_code)


async def validation_error_handler(request: Request, exc: Union[RequestValidationError, ValidationError]):
    return error_response(format_validation_errors(exc.errors()), 400)


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.detail, exc.status_code)


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response("Internal Server Error", 500)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(JoblyError, jobly_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
