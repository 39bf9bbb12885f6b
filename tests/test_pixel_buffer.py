import numpy as np
import pytest

from mandelbrot_renderer.core.pixel_buffer import PixelBuffer


def test_length_must_match_dimensions():
    with pytest.raises(ValueError):
        PixelBuffer(2, 2, bytes(11))


def test_dimensions_must_be_positive():
    with pytest.raises(ValueError):
        PixelBuffer(0, 1, b"")


def test_pixel_lookup_is_row_major():
    data = bytes(range(2 * 3 * 3))
    buffer = PixelBuffer(3, 2, data)
    assert buffer.pixel(0, 0) == (0, 1, 2)
    assert buffer.pixel(2, 0) == (6, 7, 8)
    assert buffer.pixel(0, 1) == (9, 10, 11)
    assert buffer.size == (3, 2)


def test_to_array():
    data = bytes(range(2 * 3 * 3))
    array = PixelBuffer(3, 2, data).to_array()
    assert array.shape == (2, 3, 3)
    assert array.dtype == np.uint8
    assert array[1, 2].tolist() == [15, 16, 17]
    assert array.tobytes() == data
