"""
Translation of store errors into HTTP errors for the routers.
"""
from fastapi import HTTPException, status

from agritag.infrastructure.external_api_client import ExternalAPIError


def raise_not_found(error: ExternalAPIError, detail: str) -> None:
    """
    Re-raise a store error, turning a 404 into an HTTPException.

    Other failures propagate to the error handling middleware.
    """
    if error.is_not_found:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail) from error
    raise error
