"""Custom exceptions for the application."""


class DevConnectError(Exception):
    """Base exception for application errors."""
    status_code = 500


class ValidationError(DevConnectError):
    """Exception raised when caller input is invalid."""
    status_code = 400


class AuthenticationError(DevConnectError):
    """Exception raised when the caller cannot be authenticated."""
    status_code = 401


class NotFoundError(DevConnectError):
    """Exception raised when a target record does not exist or is not eligible."""
    status_code = 404


class ConflictError(DevConnectError):
    """Exception raised when a write would duplicate an existing record."""
    status_code = 409


class DatabaseError(DevConnectError):
    """Exception raised for store operation errors."""
    pass


class DuplicateKeyError(DatabaseError):
    """Exception raised when an insert violates a unique index."""
    pass
