"""Common exceptions for querykit.

Exception Design:
    The exception system uses error codes for categorization rather than
    numerous specific exception classes. All exceptions inherit from
    QueryKitError and include structured error information. Caller contract
    violations raise InvalidArgumentError, which is also a ValueError.
"""

from querykit.common.exceptions import (
    QueryKitError,
    InvalidArgumentError,
    ErrorCode,
    # Helper functions
    invalid_argument_error,
    unsupported_dialect_error,
    configuration_error,
)

__all__ = [
    # Base Exception and Error Codes
    "QueryKitError",
    "InvalidArgumentError",
    "ErrorCode",
    # Helper functions
    "invalid_argument_error",
    "unsupported_dialect_error",
    "configuration_error",
]
