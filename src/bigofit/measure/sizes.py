from __future__ import annotations

from typing import Any

from bigofit.errors import InvalidSizeError
from bigofit.measure.inputs import validate_size

STRATEGIES = ("powers", "doubling", "linear", "dense", "custom")


def powers_of_ten(max_power: int) -> list[int]:
    validate_size(max_power)
    return [10**i for i in range(1, max_power + 1)]


def doubling(start: int, steps: int) -> list[int]:
    validate_size(start)
    validate_size(steps)
    return [start * 2**i for i in range(steps)]


def linear_steps(start: int, step: int, count: int) -> list[int]:
    validate_size(start)
    validate_size(step)
    validate_size(count)
    return [start + i * step for i in range(count)]


def dense_range(start: int, stop: int, count: int) -> list[int]:
    """``count`` evenly spaced sizes from ``start`` to ``stop`` inclusive."""
    validate_size(start)
    validate_size(stop)
    validate_size(count)
    if stop < start:
        raise InvalidSizeError(f"stop ({stop}) must not be smaller than start ({start})")
    if count == 0:
        return []
    if count == 1:
        return [start]
    span = stop - start
    out: list[int] = []
    for i in range(count):
        n = start + round(span * i / (count - 1))
        if not out or out[-1] != n:
            out.append(n)
    return out


def parse_sizes(text: str) -> list[int]:
    out: list[int] = []
    for part in text.replace(" ", "").split(","):
        if not part:
            continue
        try:
            value = int(part)
        except ValueError as exc:
            raise InvalidSizeError(f"invalid size {part!r}") from exc
        out.append(validate_size(value))
    return out


def build_sizes(strategy: str, **params: Any) -> list[int]:
    strategy = strategy.lower()
    if strategy == "powers":
        return powers_of_ten(params.get("max_power", 5))
    if strategy == "doubling":
        return doubling(params.get("start", 100), params.get("steps", 5))
    if strategy == "linear":
        return linear_steps(params.get("start", 1000), params.get("step", 1000), params.get("count", 5))
    if strategy == "dense":
        return dense_range(params.get("start", 100), params.get("stop", 10000), params.get("count", 5))
    if strategy == "custom":
        return [validate_size(n) for n in params.get("sizes", [])]
    raise ValueError(f"unknown size strategy {strategy!r} (expected one of: {', '.join(STRATEGIES)})")
