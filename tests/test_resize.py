import numpy as np
import pytest
from luma_clahe.processing.resize import fit_within, fitted_size
from luma_clahe.utils.errors import InvalidDimensionsError, InvalidParameterError


def test_fitted_size_landscape():
    assert fitted_size(2400, 1200, 1200) == (1200, 600)


def test_fitted_size_portrait_rounds_half_up():
    # scale 0.75; 333 * 0.75 = 249.75
    assert fitted_size(333, 1600, 1200) == (250, 1200)


def test_fitted_size_never_upscales():
    assert fitted_size(640, 480, 1200) == (640, 480)


def test_fitted_size_keeps_at_least_one_pixel():
    assert fitted_size(1, 5000, 1200) == (1, 1200)


def test_fit_within_downscales():
    image = np.zeros((300, 1500, 3), dtype=np.uint8)
    result = fit_within(image, 1200)
    assert result.shape == (240, 1200, 3)
    assert result.dtype == np.uint8


def test_fit_within_preserves_rgba():
    image = np.full((2000, 1000, 4), 77, dtype=np.uint8)
    result = fit_within(image)
    assert result.shape == (1200, 600, 4)
    assert np.all(result == 77)


def test_fit_within_returns_copy_when_small(sample_image_uint8):
    result = fit_within(sample_image_uint8, 1200)
    assert result is not sample_image_uint8
    assert np.array_equal(result, sample_image_uint8)


@pytest.mark.parametrize("max_dimension", [0, -10, 12.5, True])
def test_fit_within_rejects_bad_bound(sample_image_uint8, max_dimension):
    with pytest.raises(InvalidParameterError):
        fit_within(sample_image_uint8, max_dimension)


def test_fit_within_rejects_unknown_interpolation(sample_image_uint8):
    with pytest.raises(InvalidParameterError, match="Unknown interpolation"):
        fit_within(sample_image_uint8, 50, interpolation="sinc")


def test_fit_within_rejects_empty_image():
    with pytest.raises(InvalidDimensionsError):
        fit_within(np.zeros((0, 10, 3), dtype=np.uint8), 50)


def test_fitted_size_exact_half_rounds_up():
    # scale 0.5; 3 * 0.5 = 1.5
    assert fitted_size(3, 2400, 1200) == (2, 1200)
