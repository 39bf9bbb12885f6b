import pytest

from mandelbrot_renderer.core.math_functions import ComplexPlane, EscapeResult, escape_time


class TestComplexPlane:
    def test_top_left_pixel(self):
        plane = ComplexPlane(-0.75, 0.0, 3.0, 4, 4)
        assert plane.pixel_to_complex(0, 0) == (-2.25, -1.5)

    def test_bottom_right_pixel(self):
        cx, cy, zoom, width, height = 0.5, -0.25, 2.0, 8, 5
        plane = ComplexPlane(cx, cy, zoom, width, height)
        x, y = plane.pixel_to_complex(width - 1, height - 1)
        assert x == cx - zoom / 2 + zoom * ((width - 1) / width)
        assert y == cy - zoom / 2 + zoom * ((height - 1) / height)
        assert x < cx + zoom / 2
        assert y < cy + zoom / 2

    def test_center_pixel_maps_to_center(self):
        plane = ComplexPlane(-0.75, 0.1, 3.0, 10, 10)
        x, y = plane.pixel_to_complex(5, 5)
        assert x == pytest.approx(-0.75)
        assert y == pytest.approx(0.1)

    def test_viewport_is_square_for_wide_images(self):
        plane = ComplexPlane(0.0, 0.0, 2.0, 200, 50)
        assert plane.pixel_to_complex(0, 0) == (-1.0, -1.0)
        x, y = plane.pixel_to_complex(100, 25)
        assert (x, y) == (0.0, 0.0)

    def test_row_coordinates_match_pixel_mapping(self):
        plane = ComplexPlane(-0.3, 0.7, 0.01, 7, 3)
        xs, y = plane.row_coordinates(2)
        assert [plane.pixel_to_complex(px, 2)[0] for px in range(7)] == xs
        assert plane.pixel_to_complex(0, 2)[1] == y

    @pytest.mark.parametrize("width,height,zoom", [(0, 4, 1.0), (4, -1, 1.0), (4, 4, 0.0)])
    def test_invalid_geometry(self, width, height, zoom):
        with pytest.raises(ValueError):
            ComplexPlane(0.0, 0.0, zoom, width, height)


class TestEscapeTime:
    @pytest.mark.parametrize("max_iter", [1, 2, 100, 1000])
    def test_origin_is_bounded(self, max_iter):
        assert escape_time(max_iter, 0.0, 0.0) == EscapeResult(True, 0.0)

    @pytest.mark.parametrize("max_iter", [1, 10, 500])
    def test_far_point_escapes_on_first_iteration(self, max_iter):
        result = escape_time(max_iter, 2.0, 2.0)
        assert result.bounded is False
        assert result.distance == 0.0

    def test_escape_fraction_uses_iteration_index(self):
        # c = -0.75 - 1.5i leaves the radius-2 disc on the second iteration
        result = escape_time(100, -0.75, -1.5)
        assert result == EscapeResult(False, 0.01)

    def test_later_escape(self):
        # -0.75 - 0.75i escapes on iteration 3
        assert escape_time(100, -0.75, -0.75) == EscapeResult(False, 0.03)
        assert escape_time(10, -0.75, -0.75) == EscapeResult(False, 0.3)

    def test_bounded_distance_is_final_squared_magnitude(self):
        # c = -1 cycles 0 -> -1 -> 0 -> -1 ...
        assert escape_time(3, -1.0, 0.0) == EscapeResult(True, 1.0)
        assert escape_time(4, -1.0, 0.0) == EscapeResult(True, 0.0)

    def test_bounded_distance_not_renormalized(self):
        # c = -2 sits on the boundary: z = -2, 2, 2, ... with |z|^2 == 4
        result = escape_time(50, -2.0, 0.0)
        assert result.bounded is True
        assert result.distance == 4.0

    def test_real_part_uses_previous_imaginary_part(self):
        # One step from z = 0 gives z = c; a second step gives c^2 + c
        x, y = 0.1, 0.2
        zr, zi = x, y
        expected_zr = zr * zr + x - zi * zi
        expected_zi = 2.0 * zr * zi + y
        result = escape_time(2, x, y)
        assert result.bounded is True
        assert result.distance == expected_zr * expected_zr + expected_zi * expected_zi

    def test_conjugate_points_match(self):
        assert escape_time(200, -0.1, 0.65) == escape_time(200, -0.1, -0.65)
