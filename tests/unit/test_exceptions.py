"""Unit tests for querykit exceptions."""

import logging

from querykit.common.exceptions import (
    ErrorCode,
    InvalidArgumentError,
    QueryKitError,
    configuration_error,
    invalid_argument_error,
    unsupported_dialect_error,
)


class TestQueryKitError:
    """Test the base exception."""

    def test_str_includes_code(self):
        """Test the string form carries the error code."""
        error = QueryKitError("render failed")

        assert str(error) == "[RENDER_001] render failed"

    def test_str_includes_cause(self):
        """Test the cause is appended to the message."""
        error = QueryKitError("render failed", cause=KeyError("x"))

        assert "caused by: KeyError" in str(error)

    def test_to_dict(self):
        """Test serialization for structured output."""
        error = QueryKitError("bad", error_code=ErrorCode.CONFIG_INVALID, details={"key": "value"})

        assert error.to_dict() == {
            "type": "QueryKitError",
            "message": "bad",
            "error_code": "CONFIG_002",
            "error_name": "CONFIG_INVALID",
            "details": {"key": "value"},
        }

    def test_from_error_code(self):
        """Test construction from a code."""
        error = QueryKitError.from_error_code(ErrorCode.MISSING_PARAMETER, "missing")

        assert error.error_code == ErrorCode.MISSING_PARAMETER

    def test_construction_is_logged(self, caplog):
        """Test errors are logged with their code when created."""
        with caplog.at_level(logging.ERROR, logger="querykit.common.exceptions"):
            QueryKitError("logged failure", error_code=ErrorCode.RENDER_ERROR)

        assert any(
            record.getMessage() == "logged failure" and record.error_code == "RENDER_001"
            for record in caplog.records
        )


class TestHelpers:
    """Test error factory helpers."""

    def test_invalid_argument_error(self):
        """Test argument and value land in details."""
        error = invalid_argument_error("bad value", argument="limit", value=-1)

        assert isinstance(error, InvalidArgumentError)
        assert isinstance(error, ValueError)
        assert error.error_code == ErrorCode.INVALID_ARGUMENT
        assert error.details == {"argument": "limit", "value": "-1"}

    def test_unsupported_dialect_error(self):
        """Test the driver and operation are reported."""
        error = unsupported_dialect_error("oracle", "upsert")

        assert error.message == "Unsupported driver for upsert: oracle"
        assert error.error_code == ErrorCode.DIALECT_NOT_SUPPORTED

    def test_configuration_error(self):
        """Test configuration errors carry the key."""
        error = configuration_error("bad config", config_key="default_driver")

        assert error.error_code == ErrorCode.CONFIG_ERROR
        assert error.details == {"config_key": "default_driver"}
