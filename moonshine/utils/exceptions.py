"""
Custom exception hierarchy for Moonshine.

Provides structured error types for tool-level failures.
All exceptions inherit from MoonshineError for easy catching; each one
carries the error kind reported back to the caller.
"""


class MoonshineError(Exception):
    """
    Base exception for all Moonshine errors.
    All custom exceptions should inherit from this class.
    """

    kind = "internal"

    def __init__(self, message: str, context: dict | None = None):
        """
        Initialize Moonshine error.
        Args:
            message: Error message
            context: Optional context dictionary with additional error details
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}


class StoreError(MoonshineError):
    """
    Storage errors.
    Raised when the database cannot be opened or a statement fails.
    """

    pass


class ValidationError(MoonshineError):
    """
    Validation errors.
    Raised when input validation fails or there is nothing to update.
    """

    kind = "validation"


class NotFoundError(MoonshineError):
    """
    Resource not found errors.
    Raised when a requested mash or edge doesn't exist.
    """

    kind = "not_found"


class ReadOnlyError(MoonshineError):
    """
    Permission errors.
    Raised when a mutating operation is attempted on a read-only database.
    """

    kind = "permission"


class ConfigurationError(MoonshineError):
    """
    Configuration errors.
    Raised when configuration or a stored setting is invalid or missing.
    """

    kind = "configuration"


class EmbeddingError(MoonshineError):
    """
    Embedding generation errors.
    Raised when a remote embedding provider fails.
    """

    kind = "upstream"
