# Luminance/chrominance transcoding
"""
RGB <-> YCbCr conversion used by the enhancement pipeline.

Forward conversion splits an interleaved RGB(A) image into three uint8
planes (Y, Cb, Cr). Inverse conversion recombines a (possibly remapped)
luminance plane with the original chroma planes. Both directions clamp to
[0, 255] and round half-to-even when storing samples, matching a clamped
byte-array store.
"""

from typing import NamedTuple, Tuple
import numpy as np

from ..utils.errors import InvalidDimensionsError, InvalidParameterError

SUPPORTED_CHANNELS = (3, 4)

_CHROMA_OFFSET = 128.0


class ChannelPlanes(NamedTuple):
    """Decoupled full-resolution channel planes of one image."""
    y: np.ndarray
    cb: np.ndarray
    cr: np.ndarray

    @property
    def shape(self) -> Tuple[int, int]:
        return self.y.shape


def _store_u8(values: np.ndarray) -> np.ndarray:
    """Clamp to [0, 255] and round half-to-even into uint8."""
    return np.rint(np.clip(values, 0.0, 255.0)).astype(np.uint8)


def validate_pixels(pixels) -> Tuple[int, int, int]:
    """
    Check that `pixels` is an H x W x 3|4 uint8 array with H, W >= 1.

    Returns:
        (height, width, channels)
    """
    if not isinstance(pixels, np.ndarray):
        raise InvalidParameterError(
            f"Pixels must be a numpy array, got {type(pixels).__name__}",
            parameter="pixels",
            value=type(pixels).__name__,
        )
    if pixels.ndim != 3 or pixels.shape[2] not in SUPPORTED_CHANNELS:
        raise InvalidDimensionsError(
            f"Pixels must be an H x W x 3 or H x W x 4 array, got shape {pixels.shape}",
            width=pixels.shape[1] if pixels.ndim > 1 else None,
            height=pixels.shape[0] if pixels.ndim > 0 else None,
        )
    height, width, channels = pixels.shape
    if width <= 0 or height <= 0:
        raise InvalidDimensionsError(
            f"Image dimensions must be positive, got {width}x{height}",
            width=width,
            height=height,
        )
    if pixels.dtype != np.uint8:
        raise InvalidParameterError(
            f"Pixels must be uint8, got {pixels.dtype}",
            parameter="pixels",
            value=str(pixels.dtype),
        )
    return height, width, channels


def rgb_to_ycbcr(pixels: np.ndarray) -> ChannelPlanes:
    """
    Split an RGB(A) uint8 image into Y, Cb and Cr uint8 planes.

    Alpha, when present, is ignored.
    """
    r = pixels[..., 0].astype(np.float64)
    g = pixels[..., 1].astype(np.float64)
    b = pixels[..., 2].astype(np.float64)
    # Term order matches a scalar per-pixel loop
    y = 0.299 * r + 0.587 * g + 0.114 * b
    cb = -0.168736 * r - 0.331264 * g + 0.5 * b + _CHROMA_OFFSET
    cr = 0.5 * r - 0.418688 * g - 0.081312 * b + _CHROMA_OFFSET
    return ChannelPlanes(y=_store_u8(y), cb=_store_u8(cb), cr=_store_u8(cr))


def ycbcr_to_rgb(y: np.ndarray, cb: np.ndarray, cr: np.ndarray, channels: int = 3) -> np.ndarray:
    """
    Recombine luminance and chroma planes into an RGB(A) uint8 image.

    `y`, `cb` and `cr` must share a shape (any shape, typically H x W or a
    band of rows). With `channels=4` the alpha channel is fully opaque.
    """
    yy = y.astype(np.float64)
    cbf = cb.astype(np.float64) - _CHROMA_OFFSET
    crf = cr.astype(np.float64) - _CHROMA_OFFSET

    out = np.empty(y.shape + (channels,), dtype=np.uint8)
    out[..., 0] = _store_u8(yy + 1.402 * crf)
    out[..., 1] = _store_u8(yy - 0.344136 * cbf - 0.714136 * crf)
    out[..., 2] = _store_u8(yy + 1.772 * cbf)
    if channels == 4:
        out[..., 3] = 255
    return out


def from_interleaved(data, width: int, height: int, channels: int = 4) -> np.ndarray:
    """
    View a flat row-major interleaved byte buffer as an H x W x C array.

    Dimensions are validated before anything is allocated. The returned
    array is read-only when `data` is an immutable bytes object.
    """
    if not isinstance(width, (int, np.integer)) or not isinstance(height, (int, np.integer)):
        raise InvalidDimensionsError(
            f"Width and height must be integers, got {width!r}x{height!r}",
            width=width,
            height=height,
        )
    if width <= 0 or height <= 0:
        raise InvalidDimensionsError(
            f"Image dimensions must be positive, got {width}x{height}",
            width=width,
            height=height,
        )
    if channels not in SUPPORTED_CHANNELS:
        raise InvalidDimensionsError(
            f"Interleaved buffers must have 3 or 4 channels, got {channels}",
            width=width,
            height=height,
        )

    flat = np.frombuffer(data, dtype=np.uint8)
    expected = int(width) * int(height) * channels
    if flat.size != expected:
        raise InvalidDimensionsError(
            f"Buffer holds {flat.size} bytes, expected {expected} for "
            f"{width}x{height}x{channels}",
            width=width,
            height=height,
        )
    return flat.reshape(int(height), int(width), channels)


def to_interleaved(pixels: np.ndarray) -> bytes:
    """Flatten an H x W x C uint8 array back into row-major bytes."""
    return np.ascontiguousarray(pixels, dtype=np.uint8).tobytes()
