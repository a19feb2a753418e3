"""
Utilities for creating consistent API responses across all endpoints.
Errors are raised as HTTPException and rendered into the same envelope by the app's handlers.
"""
from typing import Any, Optional
from fastapi import HTTPException

from bin_tracker.api.models import ApiResponse


def success_response(data: Any = None, message: str = "OK") -> ApiResponse:
    """Create a successful API response."""
    return ApiResponse(success=True, message=message, data=data)


def error_body(message: str) -> dict:
    """JSON body of a failed request."""
    return ApiResponse(success=False, message=message).model_dump(exclude_none=True)


def error_response(message: str, status_code: int = 400) -> HTTPException:
    """Create an HTTPException carrying ``message`` as its detail."""
    return HTTPException(status_code=status_code, detail=message)


def not_found_error(message: str = "Resource not found") -> HTTPException:
    """Return a 404 Not Found error."""
    return error_response(message, status_code=404)


def bad_request_error(message: str) -> HTTPException:
    """Return a 400 Bad Request error."""
    return error_response(message, status_code=400)


def internal_server_error(message: str = "Internal server error", detail: Optional[str] = None) -> HTTPException:
    """Return a 500 Internal Server Error."""
    return error_response(f"{message}: {detail}" if detail else message, status_code=500)
