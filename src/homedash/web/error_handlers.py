import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from homedash.errors import AuthenticationError, NotFoundError, UpstreamError, ValidationError
from homedash.web.envelope import error_response

logger = logging.getLogger(__name__)


async def user_error_handler(_: Request, exc: Exception) -> Response:
    """Handle all UserError subclasses with appropriate status codes."""
    if isinstance(exc, AuthenticationError):
        status_code = 401
    elif isinstance(exc, NotFoundError):
        status_code = 404
    elif isinstance(exc, UpstreamError):
        status_code = 502
    elif isinstance(exc, ValidationError):
        status_code = 400
    else:
        # Default for any other UserError subclass
        status_code = 400

    return error_response(status_code, str(exc))


async def request_validation_error_handler(_: Request, exc: Exception) -> Response:
    """Report malformed request data (bad JSON, wrong body type) as a 400."""
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    if not errors:
        return error_response(400, "Invalid request")
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    return error_response(400, f"{location}: {message}" if location else message)


async def http_exception_handler(_: Request, exc: Exception) -> Response:
    """Wrap routing errors (404, 405) in the envelope."""
    if not isinstance(exc, StarletteHTTPException):
        return error_response(500, "Internal Server Error")
    return error_response(exc.status_code, str(exc.detail), headers=exc.headers)


async def general_exception_handler(_: Request, exc: Exception) -> Response:
    """Handle unexpected errors (500)."""
    logger.exception("Unexpected error: %s", exc)
    return error_response(500, "Internal Server Error")
