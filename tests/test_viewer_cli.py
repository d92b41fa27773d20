import numpy as np
import pytest

import viewer


def test_default_run_reports_parameters(capsys):
    frame = viewer.main(["--width", "32", "--height", "24", "--max-iterations", "20"])
    out = capsys.readouterr().out

    assert frame.pixels.shape == (24, 32, 4)
    assert "scale: 4" in out
    assert "uniform (float64, 48 bytes)" in out
    assert "rendered in" in out


def test_scroll_and_drag_are_replayed(capsys):
    frame = viewer.main([
        "--width", "40", "--height", "30", "--max-iterations", "30",
        "--drag", "10", "0", "--scroll", "1", "--scroll", "1",
    ])
    params = frame.params
    assert params.scale == pytest.approx(4.0 * 2.0 ** -0.2)
    assert params.world_center[0] < 0.0
    assert "uniform" in capsys.readouterr().out


def test_backends_agree():
    args = ["--width", "16", "--height", "12", "--max-iterations", "25", "--pointer", "3", "4", "--scroll", "2"]
    reference = viewer.main(args + ["--backend", "reference"])
    vectorized = viewer.main(args + ["--backend", "tensorflow"])
    np.testing.assert_array_equal(reference.pixels, vectorized.pixels)


def test_single_precision_uniform(capsys):
    viewer.main(["--width", "8", "--height", "8", "--max-iterations", "10", "--precision", "float32"])
    assert "uniform (float32, 24 bytes)" in capsys.readouterr().out


def test_zero_area_window_is_an_error():
    with pytest.raises(SystemExit):
        viewer.main(["--width", "0", "--height", "10"])


def test_invalid_config_is_an_error():
    with pytest.raises(SystemExit):
        viewer.main(["--width", "8", "--height", "8", "--zoom-factor", "0"])
