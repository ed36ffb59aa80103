"""Tests for centralized error handling utilities."""

import pytest
from luma_clahe.utils.errors import (
    AppError,
    InvalidDimensionsError,
    InvalidParameterError,
    ProcessingError,
    ErrorCategory,
    wrap_errors,
    format_user_error,
)


class TestAppError:
    """Tests for AppError base class."""

    def test_basic_error(self):
        error = AppError("Test error")
        assert str(error) == "Test error"
        assert error.category == ErrorCategory.PROCESSING
        assert error.user_message == "Test error"

    def test_error_with_original(self):
        original = ValueError("Original error")
        error = AppError("Wrapped error", original_error=original)
        assert error.original_error is original
        assert "ValueError" in str(error)


class TestSpecificErrors:
    """Tests for specific error types."""

    def test_invalid_dimensions(self):
        error = InvalidDimensionsError("Empty image", width=0, height=4)
        assert error.category == ErrorCategory.USER_INPUT
        assert (error.width, error.height) == (0, 4)
        assert error.user_message != "Empty image"

    def test_invalid_parameter(self):
        error = InvalidParameterError("Bad clip", parameter="clip_limit", value=-1)
        assert error.category == ErrorCategory.USER_INPUT
        assert error.parameter == "clip_limit"
        assert error.value == -1
        assert error.user_message == "Bad clip"

    def test_processing_error(self):
        error = ProcessingError("Failed", step="reconstruction")
        assert error.category == ErrorCategory.PROCESSING
        assert error.step == "reconstruction"

    def test_hierarchy(self):
        for cls in (InvalidDimensionsError, InvalidParameterError, ProcessingError):
            assert issubclass(cls, AppError)


class TestWrapErrors:
    """Tests for the wrap_errors decorator."""

    def test_passes_results_through(self):
        @wrap_errors("step")
        def ok(v):
            return v + 1

        assert ok(1) == 2

    def test_wraps_unexpected_errors(self):
        @wrap_errors("histogram")
        def failing():
            raise ZeroDivisionError("boom")

        with pytest.raises(ProcessingError) as excinfo:
            failing()
        assert excinfo.value.step == "histogram"
        assert isinstance(excinfo.value.original_error, ZeroDivisionError)
        assert isinstance(excinfo.value.__cause__, ZeroDivisionError)

    def test_app_errors_keep_their_type(self):
        @wrap_errors("validation")
        def failing():
            raise InvalidParameterError("nope", parameter="clip_limit")

        with pytest.raises(InvalidParameterError):
            failing()

    def test_preserves_metadata(self):
        @wrap_errors("step")
        def documented():
            """Docstring."""

        assert documented.__name__ == "documented"
        assert documented.__doc__ == "Docstring."


class TestFormatUserError:
    """Tests for format_user_error."""

    def test_app_error_uses_user_message(self):
        error = InvalidParameterError("tech", user_message="Clip limit must be greater than zero.")
        assert format_user_error(error) == "Clip limit must be greater than zero."

    def test_memory_error(self):
        assert "memory" in format_user_error(MemoryError()).lower()

    def test_generic_with_context(self):
        assert format_user_error(ValueError("x"), "enhancing") == "Error enhancing: x"

    def test_generic_without_context(self):
        assert format_user_error("plain") == "An error occurred: plain"
