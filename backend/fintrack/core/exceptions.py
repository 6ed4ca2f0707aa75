"""Custom exception classes for the application."""

from fastapi import HTTPException, status


class FinTrackError(Exception):
    """Base class for every recoverable FinTrack failure."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(FinTrackError):
    """Client-side form check failed before any network call."""

    status_code = 422


class RequestFailed(FinTrackError):
    """Non-2xx transport response or an envelope with success=false."""

    def __init__(self, message: str = "Request failed", status_code: int | None = None):
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code


class AuthExpired(RequestFailed):
    """A 401 that survived the token refresh."""

    def __init__(self, message: str = "Session expired"):
        super().__init__(message, status_code=status.HTTP_401_UNAUTHORIZED)


class EmptyResponse(FinTrackError):
    def __init__(self, message: str = "No data in response"):
        super().__init__(message)


class InvalidResponse(FinTrackError):
    def __init__(self, message: str = "Invalid API response"):
        super().__init__(message)


class NotFoundError(HTTPException):
    def __init__(self, resource: str = "Resource"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{resource} not found",
        )
