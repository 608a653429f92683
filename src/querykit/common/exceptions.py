from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    """Standard error codes for querykit operations.

    This enum provides categorized error codes that can be used
    to identify error types without creating numerous exception classes.
    Each category has a specific number range for easy identification.

    Attributes:
        CONFIG_*: Configuration-related errors (1xxx)
        VALIDATION_*: Caller input validation errors (2xxx)
        DIALECT_*: Dialect dispatch errors (3xxx)
        RENDER_*: Statement rendering errors (4xxx)
    """
    # Configuration errors (1xxx)
    CONFIG_ERROR = "CONFIG_001"
    CONFIG_INVALID = "CONFIG_002"

    # Validation errors (2xxx)
    VALIDATION_ERROR = "VALIDATION_001"
    INVALID_ARGUMENT = "VALIDATION_002"
    MISSING_PARAMETER = "VALIDATION_003"

    # Dialect errors (3xxx)
    DIALECT_NOT_SUPPORTED = "DIALECT_001"
    DRIVER_NOT_DETECTED = "DIALECT_002"

    # Rendering errors (4xxx)
    RENDER_ERROR = "RENDER_001"


class QueryKitError(Exception):
    """Base exception for all querykit errors.

    Uses error codes for categorization instead of a deep hierarchy of
    exception classes.

    Attributes:
        message: Error message
        error_code: Error code from ErrorCode enum
        details: Additional error details
        cause: Optional underlying exception
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.RENDER_ERROR,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        """Initialize querykit error.

        Args:
            message: Error message
            error_code: Error code from ErrorCode enum
            details: Additional error details
            cause: Optional underlying exception
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.cause = cause

        # Lazy import to avoid circular dependency
        from querykit.logging import get_logger
        logger = get_logger(__name__)
        logger.error(
            message,
            extra={
                "error_code": error_code.value,
                "details": self.details,
            },
            exc_info=cause is not None,
        )

    def __str__(self) -> str:
        """String representation of the error."""
        msg = f"[{self.error_code.value}] {self.message}"
        if self.cause:
            msg = f"{msg} (caused by: {type(self.cause).__name__}: {str(self.cause)})"
        return msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code.value,
            "error_name": self.error_code.name,
            "details": self.details,
        }

    @classmethod
    def from_error_code(
        cls,
        error_code: ErrorCode,
        message: str,
        **kwargs
    ) -> "QueryKitError":
        """Create exception from error code.

        Args:
            error_code: Error code
            message: Error message
            **kwargs: Additional arguments for QueryKitError

        Returns:
            QueryKitError instance
        """
        return cls(message=message, error_code=error_code, **kwargs)


class InvalidArgumentError(QueryKitError, ValueError):
    """Raised when a caller violates a builder input contract.

    Subclasses ``ValueError`` so callers that only know the standard
    library contract can still catch it.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INVALID_ARGUMENT,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message, error_code=error_code, details=details, cause=cause)


# Helper functions for common error scenarios
def invalid_argument_error(
    message: str,
    argument: Optional[str] = None,
    value: Any = None,
    **kwargs
) -> InvalidArgumentError:
    """Create an invalid-argument error.

    Args:
        message: Error message
        argument: Name of the offending argument
        value: Offending value (stringified)
        **kwargs: Additional error details

    Returns:
        InvalidArgumentError with INVALID_ARGUMENT code
    """
    details = kwargs.get('details', {})
    if argument:
        details["argument"] = argument
    if value is not None:
        details["value"] = str(value)

    return InvalidArgumentError(
        message=message,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )


def unsupported_dialect_error(
    driver: str,
    operation: str,
    **kwargs
) -> InvalidArgumentError:
    """Create an error for a driver that cannot render an operation.

    Args:
        driver: Driver name as stored on the builder
        operation: Operation that has no rendering for the driver

    Returns:
        InvalidArgumentError with DIALECT_NOT_SUPPORTED code
    """
    details = kwargs.get('details', {})
    details["driver"] = driver
    details["operation"] = operation

    return InvalidArgumentError(
        message=f"Unsupported driver for {operation}: {driver}",
        error_code=ErrorCode.DIALECT_NOT_SUPPORTED,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )


def configuration_error(
    message: str,
    config_key: Optional[str] = None,
    **kwargs
) -> QueryKitError:
    """Create a configuration error.

    Args:
        message: Error message
        config_key: Configuration key that caused the error
        **kwargs: Additional error details

    Returns:
        QueryKitError with CONFIG_ERROR code
    """
    details = kwargs.get('details', {})
    if config_key:
        details["config_key"] = config_key

    return QueryKitError(
        message=message,
        error_code=ErrorCode.CONFIG_ERROR,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )
