import numpy as np
import pytest

from mandelview.palette import INSIDE_COLOR, color, colorize


@pytest.mark.parametrize("max_iterations", [1, 100, 256, 5000])
def test_inside_points_are_opaque_black(max_iterations):
    assert color(max_iterations, max_iterations) == (0, 0, 0, 255)


@pytest.mark.parametrize("max_iterations", [1, 100, 256])
def test_immediate_escape_is_black(max_iterations):
    assert color(0, max_iterations) == (0, 0, 0, 255)


def test_midpoint_color():
    assert color(128, 256) == (143, 239, 135, 255)


def test_quarter_color():
    # t = 0.25
    r = int(9.0 * 0.75 * 0.25 ** 3 * 255.0)
    g = int(15.0 * 0.75 ** 2 * 0.25 ** 2 * 255.0)
    b = int(8.5 * 0.75 ** 3 * 0.25 * 255.0)
    assert color(25, 100) == (r, g, b, 255)
    assert color(25, 100) == (26, 134, 228, 255)


@pytest.mark.parametrize("max_iterations", [7, 100, 256])
def test_channels_stay_in_byte_range(max_iterations):
    for iterations in range(max_iterations + 1):
        rgba = color(iterations, max_iterations)
        assert all(0 <= channel <= 255 for channel in rgba)
        assert rgba[3] == 255


@pytest.mark.parametrize("max_iterations", [7, 100, 256])
def test_vectorized_palette_matches_scalar(max_iterations):
    iterations = np.arange(max_iterations + 1).reshape(1, -1)
    rgba = colorize(iterations, max_iterations)
    assert rgba.shape == (1, max_iterations + 1, 4)
    assert rgba.dtype == np.uint8
    expected = np.array([[color(int(i), max_iterations) for i in iterations[0]]], dtype=np.uint8)
    np.testing.assert_array_equal(rgba, expected)


def test_vectorized_palette_marks_inside():
    rgba = colorize(np.array([[0, 10], [10, 3]]), 10)
    np.testing.assert_array_equal(rgba[0, 1], INSIDE_COLOR)
    np.testing.assert_array_equal(rgba[1, 0], INSIDE_COLOR)
    np.testing.assert_array_equal(rgba[0, 0], (0, 0, 0, 255))
