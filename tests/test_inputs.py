from __future__ import annotations

import pytest

from bigofit.errors import InvalidSizeError
from bigofit.measure.inputs import generate, input_factory, make_input


@pytest.mark.parametrize("n", [0, 1, 7, 1000])
def test_generate_has_requested_length(n: int) -> None:
    assert len(generate(n)) == n


def test_generate_is_deterministic_and_fresh() -> None:
    a = generate(50)
    b = generate(50)
    assert a == b == list(range(50))
    assert a is not b


@pytest.mark.parametrize("bad", [-1, 2.5, "10", True])
def test_generate_rejects_invalid_sizes(bad: object) -> None:
    with pytest.raises(InvalidSizeError):
        generate(bad)  # type: ignore[arg-type]


def test_number_mode_returns_size() -> None:
    assert make_input(42, "number") == 42
    assert input_factory("number")(9) == 9
    assert input_factory("array")(3) == [0, 1, 2]


def test_unknown_mode() -> None:
    with pytest.raises(ValueError):
        make_input(3, "matrix")
    with pytest.raises(ValueError):
        input_factory("matrix")
