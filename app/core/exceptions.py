"""Custom exception classes for the MU Papers Portal."""
from typing import Optional, Dict, Any


class PortalException(Exception):
    """Base exception for all application-specific exceptions."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class QueryError(PortalException):
    """Raised when a record store call is rejected. Never retried by the core."""
    pass


class UploadError(PortalException):
    """Raised when the blob store rejects a file upload."""
    pass


class ValidationError(PortalException):
    """Exception raised for validation errors."""
    pass


class AuthorizationError(PortalException):
    """Raised when an operation needs an admitted operator."""
    pass


class NotFoundError(PortalException):
    """Exception raised when a resource is not found."""
    pass


class ConfigurationError(PortalException):
    """Exception raised for configuration errors."""
    pass


def sanitize_error_message(error: Exception, include_details: bool = False) -> str:
    """
    Sanitize error messages to prevent leaking sensitive information.

    Args:
        error: The exception to sanitize
        include_details: Whether to include detailed error information (dev only)

    Returns:
        Sanitized error message
    """
    from app.core.config import settings

    if isinstance(error, PortalException):
        return error.message

    debug = bool(settings and settings.DEBUG)
    error_type = type(error).__name__
    error_str = str(error)

    sensitive_patterns = [
        'password',
        'secret',
        'key',
        'token',
        'credential',
        'connection',
        'database',
        'sql',
        'bucket',
    ]

    error_lower = error_str.lower()
    is_sensitive = any(pattern in error_lower for pattern in sensitive_patterns)

    if is_sensitive and not debug:
        if 'password' in error_lower or 'secret' in error_lower or 'credential' in error_lower:
            return "Admission failed. Please check your credentials."
        elif 'connection' in error_lower or 'database' in error_lower:
            return "Database connection error. Please try again later."
        return "An error occurred. Please try again."

    if debug or include_details:
        return f"{error_type}: {error_str}"
    return "An error occurred. Please try again."
