"""Luminance-only CLAHE for RGB(A) images."""
from .processing import (
    ClaheEnhancer,
    ClaheResult,
    enhance,
    enhance_interleaved,
    enhance_with_details,
    fit_within,
)
from .utils import InvalidDimensionsError, InvalidParameterError, ProcessingError

__all__ = [
    "ClaheEnhancer",
    "ClaheResult",
    "enhance",
    "enhance_interleaved",
    "enhance_with_details",
    "fit_within",
    "InvalidDimensionsError",
    "InvalidParameterError",
    "ProcessingError",
]

__version__ = "0.1.0"
