import pytest
import numpy as np

@pytest.fixture
def rng():
    """Seeded generator so random images are reproducible."""
    return np.random.default_rng(1234)

@pytest.fixture
def sample_image_uint8():
    """Returns a simple 100x100 uint8 RGB image."""
    img = np.zeros((100, 100, 3), dtype=np.uint8)
    img[:50, :50] = [255, 0, 0]    # Red quadrant
    img[:50, 50:] = [0, 255, 0]    # Green quadrant
    img[50:, :50] = [0, 0, 255]    # Blue quadrant
    img[50:, 50:] = [255, 255, 0]  # Yellow quadrant
    return img

@pytest.fixture
def random_image(rng):
    """Returns a 97x131 uint8 RGB image of uniform noise."""
    return rng.integers(0, 256, size=(97, 131, 3), dtype=np.uint8)

@pytest.fixture
def gray_gradient():
    """Returns a 64x96 neutral gray image with a horizontal ramp and a dark band."""
    ramp = np.tile(np.linspace(20, 220, 96).astype(np.uint8), (64, 1))
    ramp[20:30] //= 4
    return np.repeat(ramp[:, :, None], 3, axis=2)

@pytest.fixture
def flat_gray():
    """Returns a 4x4 image filled with (128, 128, 128)."""
    return np.full((4, 4, 3), 128, dtype=np.uint8)
