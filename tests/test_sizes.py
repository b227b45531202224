from __future__ import annotations

import pytest

from bigofit.errors import InvalidSizeError
from bigofit.measure.sizes import (
    build_sizes,
    dense_range,
    doubling,
    linear_steps,
    parse_sizes,
    powers_of_ten,
)


def test_powers_of_ten() -> None:
    assert powers_of_ten(4) == [10, 100, 1000, 10000]
    assert powers_of_ten(0) == []


def test_doubling() -> None:
    assert doubling(100, 4) == [100, 200, 400, 800]


def test_linear_steps() -> None:
    assert linear_steps(1000, 1000, 3) == [1000, 2000, 3000]


def test_dense_range_is_inclusive_and_deduplicated() -> None:
    assert dense_range(0, 100, 5) == [0, 25, 50, 75, 100]
    assert dense_range(1, 3, 10) == [1, 2, 3]
    assert dense_range(7, 9, 1) == [7]


def test_dense_range_rejects_reversed_bounds() -> None:
    with pytest.raises(InvalidSizeError):
        dense_range(10, 1, 3)


def test_parse_sizes() -> None:
    assert parse_sizes("10, 100,1000,") == [10, 100, 1000]
    with pytest.raises(InvalidSizeError):
        parse_sizes("10,abc")
    with pytest.raises(InvalidSizeError):
        parse_sizes("10,-5")


def test_build_sizes_dispatch() -> None:
    assert build_sizes("powers", max_power=2) == [10, 100]
    assert build_sizes("doubling", start=5, steps=3) == [5, 10, 20]
    assert build_sizes("custom", sizes=[3, 1]) == [3, 1]
    with pytest.raises(ValueError):
        build_sizes("fibonacci")


def test_negative_parameters_are_rejected() -> None:
    with pytest.raises(InvalidSizeError):
        doubling(-1, 3)
