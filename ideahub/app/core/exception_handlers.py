"""Exception handlers for converting custom exceptions to HTTP responses."""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from ideahub.app.core.exceptions import (
    IdeaHubException,
    ValidationError,
    AuthError,
    NotFoundError,
    StoreError,
    GitHubServiceError,
)


async def ideahub_exception_handler(request: Request, exc: IdeaHubException) -> JSONResponse:
    """
    Handle all IdeaHub custom exceptions and convert to appropriate HTTP responses.

    Args:
        request: The incoming request
        exc: The exception that was raised

    Returns:
        JSONResponse with appropriate status code and error details
    """
    # Map exception types to HTTP status codes
    if isinstance(exc, NotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, ValidationError):
        status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    elif isinstance(exc, AuthError):
        status_code = status.HTTP_403_FORBIDDEN if exc.authenticated else status.HTTP_401_UNAUTHORIZED
    elif isinstance(exc, StoreError):
        status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    elif isinstance(exc, GitHubServiceError):
        status_code = status.HTTP_502_BAD_GATEWAY
    else:
        # Generic IdeaHubException
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    return JSONResponse(
        status_code=status_code,
        content={
            "detail": exc.message,
            "type": exc.__class__.__name__,
            **({"info": exc.details} if exc.details else {})
        }
    )


def register_exception_handlers(app):
    """
    Register all custom exception handlers with the FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(IdeaHubException, ideahub_exception_handler)
