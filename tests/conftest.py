import pytest

from fractalinator import build_gradient

BLACK = (0, 0, 0)
WHITE = (255, 255, 255)


@pytest.fixture
def grayscale_table():
    return build_gradient([0.0, 50.0], [BLACK, WHITE])
