import pytest

from mandelbrot_renderer.api import RenderConfig


@pytest.fixture
def scenario_config():
    """4x4 view of the whole set with the classic colors."""
    return RenderConfig(x=-0.75, y=0.0, zoom=3.0, max_iterations=100,
                        width=4, height=4, multiplier=25.0,
                        outside_color=(0, 0, 0), inside_color=(255, 0, 0),
                        second_color=(255, 0, 255))


@pytest.fixture
def small_config():
    return RenderConfig(width=24, height=16, max_iterations=50)
