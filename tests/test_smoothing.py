import math

import numpy as np
import pytest

from sensetrack.analysis.smoothing import smooth, smooth_series


@pytest.mark.parametrize("factor", [0.0, 0.75, 0.9, 1.0])
def test_first_sample_passes_through(factor: float) -> None:
    assert smooth(None, 3.25, factor) == 3.25


def test_factor_one_ignores_new_data() -> None:
    assert smooth(2.0, 100.0, 1.0) == 2.0


def test_factor_zero_returns_new_data() -> None:
    assert smooth(2.0, 100.0, 0.0) == 100.0


def test_weighted_average() -> None:
    assert math.isclose(smooth(4.0, 8.0, 0.75), 5.0)


def test_previous_of_zero_is_not_treated_as_missing() -> None:
    assert math.isclose(smooth(0.0, 8.0, 0.75), 2.0)


def test_smooth_series_matches_streaming_recursion() -> None:
    rng = np.random.default_rng(7)
    readings = rng.normal(size=64)
    factor = 0.9

    expected = []
    previous = None
    for value in readings:
        previous = smooth(previous, float(value), factor)
        expected.append(previous)

    np.testing.assert_allclose(smooth_series(readings, factor), expected, rtol=1e-12, atol=1e-12)


def test_smooth_series_short_inputs() -> None:
    assert smooth_series([], 0.8).size == 0
    np.testing.assert_array_equal(smooth_series([1.5], 0.8), [1.5])
