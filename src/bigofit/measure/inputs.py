from __future__ import annotations

from collections.abc import Callable
from functools import partial
from typing import Any

from bigofit.errors import InvalidSizeError

INPUT_MODES = ("array", "number")


def validate_size(n: Any) -> int:
    if isinstance(n, bool) or not isinstance(n, int):
        raise InvalidSizeError(f"input size must be an integer, got {n!r}")
    if n < 0:
        raise InvalidSizeError(f"input size must be non-negative, got {n}")
    return n


def generate(n: int) -> list[int]:
    """Fresh ``[0, 1, ..., n-1]`` workload."""
    return list(range(validate_size(n)))


def make_input(n: int, mode: str = "array") -> Any:
    if mode == "array":
        return generate(n)
    if mode == "number":
        return validate_size(n)
    raise ValueError(f"unknown input mode {mode!r} (expected one of: {', '.join(INPUT_MODES)})")


def input_factory(mode: str = "array") -> Callable[[int], Any]:
    if mode not in INPUT_MODES:
        raise ValueError(f"unknown input mode {mode!r} (expected one of: {', '.join(INPUT_MODES)})")
    if mode == "array":
        return generate
    return partial(make_input, mode=mode)
