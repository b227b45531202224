from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class LineFit:
    slope: float
    intercept: float
    rmse: float
    points: int


def mean(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return math.fsum(values) / len(values)


def variance(values: Sequence[float]) -> float:
    """Population variance."""
    if not values:
        return 0.0
    mu = mean(values)
    return math.fsum((v - mu) ** 2 for v in values) / len(values)


def dispersion_index(values: Sequence[float]) -> float:
    """Variance over mean; 0 for an all-zero series."""
    mu = mean(values)
    if mu <= 0:
        return 0.0
    return variance(values) / mu


def rmse(actual: Sequence[float], predicted: Sequence[float]) -> float:
    if not actual:
        return math.inf
    sse = math.fsum((a - p) ** 2 for a, p in zip(actual, predicted, strict=True))
    return math.sqrt(sse / len(actual))


def all_finite(values: Iterable[float]) -> bool:
    return all(math.isfinite(v) for v in values)


def flat_fit(ys: Sequence[float]) -> LineFit:
    if not ys:
        return LineFit(slope=0.0, intercept=0.0, rmse=math.inf, points=0)
    mu = mean(ys)
    return LineFit(slope=0.0, intercept=mu, rmse=rmse(ys, [mu] * len(ys)), points=len(ys))


def least_squares(xs: Sequence[float], ys: Sequence[float]) -> LineFit:
    """Ordinary least squares ``y = slope * x + intercept``.

    Falls back to a flat line through the mean when ``x`` has no spread.
    A fit that turns out non-finite reports an infinite RMSE.
    """
    if len(xs) != len(ys):
        raise ValueError("xs and ys must have the same length")
    if len(xs) < 2:
        return flat_fit(ys)

    x_mean = mean(xs)
    y_mean = mean(ys)
    sxx = math.fsum((x - x_mean) ** 2 for x in xs)
    if sxx <= 0 or not math.isfinite(sxx):
        return flat_fit(ys)
    sxy = math.fsum((x - x_mean) * (y - y_mean) for x, y in zip(xs, ys, strict=True))
    slope = sxy / sxx
    intercept = y_mean - slope * x_mean
    preds = [slope * x + intercept for x in xs]
    error = rmse(ys, preds)
    if not (math.isfinite(slope) and math.isfinite(intercept) and math.isfinite(error)):
        return LineFit(slope=slope, intercept=intercept, rmse=math.inf, points=len(xs))
    return LineFit(slope=slope, intercept=intercept, rmse=error, points=len(xs))
