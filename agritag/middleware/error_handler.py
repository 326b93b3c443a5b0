"""
Global error handling middleware.

Maps failures that escape the routers onto JSON error bodies:
- ExternalAPIError: status of the failing store/weather call
- pydantic ValidationError: 502, the store returned a malformed document
- ValueError: 400, the request was understood but cannot be applied
- anything else: 500
"""
import logging
from typing import Callable

from fastapi import Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.middleware.base import BaseHTTPMiddleware

from agritag.infrastructure.external_api_client import ExternalAPIError

logger = logging.getLogger(__name__)


def _error_response(status_code: int, error: str, detail: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "detail": detail},
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    Catches unhandled exceptions and returns consistent error responses.
    """

    async def dispatch(self, request: Request, call_next: Callable):
        """
        Process the request and translate any escaping exception.

        Args:
            request: The incoming request
            call_next: The next middleware or route handler

        Returns:
            Response object
        """
        context = {"path": request.url.path, "method": request.method}

        try:
            return await call_next(request)

        except ExternalAPIError as e:
            logger.error(
                f"External API error: {e.message}",
                extra={**context, "status_code": e.status_code},
            )
            return _error_response(e.status_code, "External API error", e.message)

        # ValidationError subclasses ValueError, so it must be caught first
        except ValidationError as e:
            logger.error(
                f"Malformed document from the store: {e.error_count()} error(s)",
                extra=context,
            )
            return _error_response(
                status.HTTP_502_BAD_GATEWAY,
                "Malformed stored data",
                "A stored document does not match the expected shape",
            )

        except ValueError as e:
            logger.warning(f"Rejected request: {e}", extra=context)
            return _error_response(status.HTTP_400_BAD_REQUEST, "Invalid request", str(e))

        except Exception as e:
            logger.exception(f"Unhandled exception: {e}", extra=context)
            return _error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "Internal server error",
                "An unexpected error occurred",
            )
