# Centralized error handling utilities
"""
Provides consistent error handling for the enhancement pipeline.

This module defines:
- Custom exception classes for the input and processing failure categories
- A decorator that tags unexpected failures with the pipeline step they came from
- A helper for turning errors into short caller-facing messages
"""

import functools
from typing import Any, Callable, Optional, TypeVar, Union
from enum import Enum

from .logger import get_logger

logger = get_logger(__name__)

# Type variable for generic function signatures
F = TypeVar('F', bound=Callable[..., Any])


class ErrorCategory(Enum):
    """Categories of errors for consistent handling."""
    USER_INPUT = "user_input"        # Invalid pixels or parameters from the caller
    PROCESSING = "processing"        # Unexpected failure inside a pipeline stage


class AppError(Exception):
    """Base exception for package-specific errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.PROCESSING,
        original_error: Optional[Exception] = None,
        user_message: Optional[str] = None,
    ):
        super().__init__(message)
        self.category = category
        self.original_error = original_error
        self.user_message = user_message or message

    def __str__(self) -> str:
        if self.original_error:
            return f"{self.args[0]} (caused by: {type(self.original_error).__name__})"
        return self.args[0]


class InvalidDimensionsError(AppError):
    """Image dimensions or buffer layout the transform cannot work on."""

    def __init__(
        self,
        message: str,
        width: Optional[int] = None,
        height: Optional[int] = None,
        **kwargs,
    ):
        kwargs.setdefault(
            "user_message",
            "The image has no pixels or an unsupported layout.",
        )
        super().__init__(message, category=ErrorCategory.USER_INPUT, **kwargs)
        self.width = width
        self.height = height


class InvalidParameterError(AppError):
    """A tuning parameter (or pixel dtype) outside the accepted domain."""

    def __init__(
        self,
        message: str,
        parameter: Optional[str] = None,
        value: Any = None,
        **kwargs,
    ):
        super().__init__(message, category=ErrorCategory.USER_INPUT, **kwargs)
        self.parameter = parameter
        self.value = value


class ProcessingError(AppError):
    """Unexpected failure inside one pipeline step."""

    def __init__(self, message: str, step: Optional[str] = None, **kwargs):
        super().__init__(message, category=ErrorCategory.PROCESSING, **kwargs)
        self.step = step


def wrap_errors(step: str) -> Callable[[F], F]:
    """
    Decorator that re-raises unexpected exceptions as ProcessingError.

    AppError subclasses pass through untouched so validation errors keep
    their type. Anything else is logged and re-raised with the step name
    attached and the original exception chained.

    Example:
        @wrap_errors("histogram")
        def clip_tile(...):
            ...
    """
    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except AppError:
                raise
            except Exception as e:
                logger.error(
                    "%s failed in %s.%s: %s",
                    step,
                    func.__module__,
                    func.__name__,
                    str(e),
                )
                raise ProcessingError(
                    f"{step} step failed: {e}",
                    step=step,
                    original_error=e,
                    user_message="Contrast enhancement failed.",
                ) from e

        return wrapper  # type: ignore
    return decorator


def format_user_error(error: Union[Exception, str], context: Optional[str] = None) -> str:
    """
    Format an error message for user display.

    Args:
        error: The error or error message.
        context: Optional context about what operation failed.

    Returns:
        User-friendly error message.
    """
    if isinstance(error, AppError):
        return error.user_message

    error_str = str(error)

    if isinstance(error, MemoryError) or "out of memory" in error_str.lower():
        return "Not enough memory to complete this operation. Try with a smaller image."

    if context:
        return f"Error {context}: {error_str}"
    return f"An error occurred: {error_str}"
