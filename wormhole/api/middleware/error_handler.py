"""Application errors and the middleware that turns exceptions into JSON."""

import logging
from typing import Any, Callable

from fastapi import HTTPException, Request, Response, status
from fastapi.responses import JSONResponse
from postgrest.exceptions import APIError as PostgrestAPIError
from supabase_auth.errors import AuthError

from wormhole.schemas.common import ErrorDetail, ErrorResponse

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base class for conditions the services detect themselves.

    Subclasses fix status_code and error_type; errors raised by Supabase
    are not wrapped and reach the middleware as their own types.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_type: str = "api_error"
    default_message: str = "Internal error"

    def __init__(self, message: str | None = None, details: list[dict[str, Any]] | None = None) -> None:
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class NotFoundError(APIError):
    status_code = status.HTTP_404_NOT_FOUND
    error_type = "not_found"
    default_message = "Resource not found"


class ValidationError(APIError):
    """Input rejected before any remote call was made."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    error_type = "validation_error"
    default_message = "Validation error"


class AuthenticationError(APIError):
    """No signed-in account, or the account could not be determined."""

    status_code = status.HTTP_401_UNAUTHORIZED
    error_type = "authentication_error"
    default_message = "Authentication required"


class AuthorizationError(APIError):
    """Row-level security hid or refused the row."""

    status_code = status.HTTP_403_FORBIDDEN
    error_type = "authorization_error"
    default_message = "Access denied"


def create_error_response(
    error_type: str,
    message: str,
    status_code: int,
    details: list[dict[str, Any]] | None = None,
    request_id: str | None = None,
) -> JSONResponse:
    """Build the JSON body shared by every error response."""
    body = ErrorResponse(
        error=error_type,
        message=message,
        details=[ErrorDetail.from_dict(d) for d in details] if details else None,
        request_id=request_id,
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", exclude_none=True),
    )


def _remote_details(exc: PostgrestAPIError) -> list[dict[str, Any]] | None:
    if not exc.details and not exc.hint:
        return None
    return [
        {"msg": str(text), "type": str(exc.code or "error")}
        for text in (exc.details, exc.hint)
        if text
    ]


async def error_handler_middleware(request: Request, call_next: Callable[[Request], Any]) -> Response:
    """Map exceptions escaping the routes to JSON error responses.

    - APIError: its own status and type.
    - PostgREST/RPC rejection (constraint, RLS, raise exception): 400 remote_error.
    - Supabase auth rejection: 401 authentication_error.
    - HTTPException: its status as http_error.
    - Anything else: logged with traceback, 500 internal_error.
    """
    request_id = request.headers.get("X-Request-ID")
    log_extra = {"request_id": request_id, "path": request.url.path}

    try:
        return await call_next(request)

    except APIError as e:
        logger.warning("%s: %s", e.error_type, e.message, extra=log_extra)
        return create_error_response(e.error_type, e.message, e.status_code, e.details, request_id)

    except PostgrestAPIError as e:
        logger.warning("Remote query rejected (%s): %s", e.code, e.message, extra=log_extra)
        return create_error_response(
            "remote_error",
            e.message or "Remote query failed",
            status.HTTP_400_BAD_REQUEST,
            _remote_details(e),
            request_id,
        )

    except AuthError as e:
        logger.warning("Auth rejected: %s", e.message, extra=log_extra)
        return create_error_response(
            "authentication_error", e.message, status.HTTP_401_UNAUTHORIZED, request_id=request_id
        )

    except HTTPException as e:
        logger.warning("HTTP %s: %s", e.status_code, e.detail, extra=log_extra)
        return create_error_response("http_error", str(e.detail), e.status_code, request_id=request_id)

    except Exception:
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path, extra=log_extra)
        return create_error_response(
            "internal_error",
            "An unexpected error occurred",
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            request_id=request_id,
        )
