# This file makes the 'utils' directory a Python package.

from .errors import (
    AppError,
    InvalidDimensionsError,
    InvalidParameterError,
    ProcessingError,
    ErrorCategory,
    wrap_errors,
    format_user_error,
)
from .logger import get_logger, configure_logging

__all__ = [
    'AppError',
    'InvalidDimensionsError',
    'InvalidParameterError',
    'ProcessingError',
    'ErrorCategory',
    'wrap_errors',
    'format_user_error',
    'get_logger',
    'configure_logging',
]
