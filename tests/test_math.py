from __future__ import annotations

import math

import pytest

from bigofit.util.math import dispersion_index, least_squares, mean, rmse, variance


def test_least_squares_recovers_line() -> None:
    fit = least_squares([1.0, 2.0, 3.0, 4.0], [3.0, 5.0, 7.0, 9.0])
    assert fit.slope == pytest.approx(2.0)
    assert fit.intercept == pytest.approx(1.0)
    assert fit.rmse == pytest.approx(0.0, abs=1e-12)
    assert fit.points == 4


def test_least_squares_without_spread_is_flat() -> None:
    fit = least_squares([2.0, 2.0, 2.0], [1.0, 2.0, 3.0])
    assert fit.slope == 0.0
    assert fit.intercept == pytest.approx(2.0)
    assert fit.rmse == pytest.approx(math.sqrt(2.0 / 3.0))


def test_least_squares_empty_has_infinite_error() -> None:
    assert math.isinf(least_squares([], []).rmse)


def test_basic_statistics() -> None:
    values = [1.0, 2.0, 3.0, 4.0]
    assert mean(values) == 2.5
    assert variance(values) == pytest.approx(1.25)
    assert dispersion_index(values) == pytest.approx(0.5)
    assert dispersion_index([0.0, 0.0]) == 0.0
    assert rmse([1.0, 3.0], [2.0, 2.0]) == pytest.approx(1.0)
