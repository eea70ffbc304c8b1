"""Custom exceptions for the application."""
from typing import Optional


class GalleryException(Exception):
    """Base exception for all gallery-related errors."""

    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class NotFoundException(GalleryException):
    """Raised when a resource is not found."""

    def __init__(self, resource: str, identifier: str):
        message = f"{resource} with identifier '{identifier}' not found"
        super().__init__(message, status_code=404)


class ValidationException(GalleryException):
    """Raised when validation fails."""

    def __init__(self, message: str):
        super().__init__(message, status_code=400)


class AuthenticationException(GalleryException):
    """Raised when the API rejects the credentials."""

    def __init__(self, message: str = "Authentication required", status_code: int = 401):
        super().__init__(message, status_code=status_code)


class ApiException(GalleryException):
    """Raised when the API answers with an unexpected error status."""

    def __init__(self, message: str, status_code: int = 500, endpoint: Optional[str] = None):
        self.endpoint = endpoint
        super().__init__(f"API error: {message}", status_code=status_code)


class ApiConnectionException(GalleryException):
    """Raised when the API cannot be reached."""

    def __init__(self, message: str):
        super().__init__(f"Connection error: {message}", status_code=503)


class UploadException(GalleryException):
    """Raised when a file is rejected before upload."""

    def __init__(self, filename: str, reason: str):
        self.filename = filename
        super().__init__(f"Cannot upload '{filename}': {reason}", status_code=400)
