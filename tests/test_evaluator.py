import numpy as np
import pytest

from mandelview.evaluator import escape_iterations, escape_iterations_grid


def complex_escape(c, max_iterations):
    z = c
    for i in range(max_iterations):
        if z.real * z.real + z.imag * z.imag > 4.0:
            return i
        z = z * z + c
    return max_iterations


@pytest.mark.parametrize("max_iterations", [1, 64, 1000])
def test_origin_never_escapes(max_iterations):
    assert escape_iterations(0.0, 0.0, max_iterations) == max_iterations


@pytest.mark.parametrize("max_iterations", [1, 64, 1000])
def test_point_outside_radius_escapes_immediately(max_iterations):
    assert escape_iterations(2.0, 2.0, max_iterations) == 0


def test_zero_cap_returns_zero():
    assert escape_iterations(2.0, 2.0, 0) == 0
    assert escape_iterations(0.0, 0.0, 0) == 0


def test_known_orbits():
    # 1 -> 2 -> 5: |z|^2 == 4 does not count as escaped
    assert escape_iterations(1.0, 0.0, 100) == 2
    # period two cycle
    assert escape_iterations(-1.0, 0.0, 100) == 100
    # i -> -1+i -> -i -> -1+i ...
    assert escape_iterations(0.0, 1.0, 100) == 100
    assert escape_iterations(-2.0, 0.0, 100) == 100


def test_matches_complex_recurrence():
    rng = np.random.default_rng(7)
    points = rng.uniform(-2.0, 1.0, 200) + 1j * rng.uniform(-1.5, 1.5, 200)
    for c in points:
        assert escape_iterations(c.real, c.imag, 80) == complex_escape(complex(c), 80)


def test_scalar_precision_is_honoured():
    c_re, c_im = -0.75, 0.1
    assert escape_iterations(c_re, c_im, 200, dtype=np.float64) == escape_iterations(c_re, c_im, 200)
    assert escape_iterations(0.0, 0.0, 50, dtype=np.float32) == 50
    assert escape_iterations(2.0, 2.0, 50, dtype=np.float32) == 0


@pytest.mark.parametrize("dtype", [np.float64, np.float32])
def test_grid_matches_scalar_loop(dtype):
    re, im = np.meshgrid(np.linspace(-2.0, 1.0, 31, dtype=dtype), np.linspace(-1.5, 1.5, 17, dtype=dtype))
    counts = escape_iterations_grid(re, im, 50)

    expected = np.array(
        [[escape_iterations(r, i, 50, dtype=dtype) for r, i in zip(row_re, row_im)] for row_re, row_im in zip(re, im)]
    )
    assert counts.shape == (17, 31)
    assert counts.dtype == np.int32
    np.testing.assert_array_equal(counts, expected)


def test_grid_boundary_points():
    counts = escape_iterations_grid(np.array([0.0, 2.0, 1.0]), np.array([0.0, 2.0, 0.0]), 32)
    np.testing.assert_array_equal(counts, [32, 0, 2])


def test_grid_stops_when_everything_escaped():
    counts = escape_iterations_grid(np.full((4, 4), 3.0), np.zeros((4, 4)), 10 ** 6)
    assert np.all(counts == 0)


def test_grid_accepts_integer_input():
    counts = escape_iterations_grid([[0, 3]], [[0, 0]], 16)
    np.testing.assert_array_equal(counts, [[16, 0]])


def test_grid_rejects_mismatched_shapes():
    with pytest.raises(ValueError):
        escape_iterations_grid(np.zeros(3), np.zeros(4), 10)


def test_grid_rejects_cap_beyond_int32():
    with pytest.raises(ValueError):
        escape_iterations_grid(np.zeros(3), np.zeros(3), 2 ** 31)


def test_single_precision_draws_a_different_boundary():
    # Pixel spacing here is below float32 resolution, so neighbouring pixels collapse.
    center_re, center_im = -0.743643887037151, 0.131825904205330
    spacing = 1e-9
    offsets = (np.arange(48) - 24) * spacing
    re64, im64 = np.meshgrid(center_re + offsets, center_im + offsets)
    re32, im32 = re64.astype(np.float32), im64.astype(np.float32)

    counts64 = escape_iterations_grid(re64, im64, 2000)
    counts32 = escape_iterations_grid(re32, im32, 2000)

    assert not np.array_equal(counts64, counts32)
    assert len(np.unique(re32[0])) < len(np.unique(re64[0]))
