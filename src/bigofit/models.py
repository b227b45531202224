from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class DataPoint:
    """One measured observation: input size and average duration per call (ms)."""

    n: int
    duration: float

    def to_dict(self) -> dict[str, Any]:
        return {"n": self.n, "duration": _finite_or_none(self.duration)}


def _log(n: int) -> float | None:
    if n <= 0:
        return None
    return math.log(n)


def _linear(n: int) -> float | None:
    return float(n)


def _linearithmic(n: int) -> float | None:
    if n <= 0:
        return None
    return n * math.log(n)


def _quadratic(n: int) -> float | None:
    return float(n) * float(n)


class GrowthModel(Enum):
    """The closed set of growth models, ordered by complexity rank."""

    CONSTANT = ("O(1)", 1, None)
    LOGARITHMIC = ("O(log n)", 2, _log)
    LINEAR = ("O(n)", 3, _linear)
    LINEARITHMIC = ("O(n log n)", 4, _linearithmic)
    QUADRATIC = ("O(n^2)", 5, _quadratic)

    def __init__(self, label: str, rank: int, fn: Callable[[int], float | None] | None) -> None:
        self.label = label
        self.rank = rank
        self._fn = fn

    @property
    def is_constant(self) -> bool:
        return self._fn is None

    def transform(self, n: int) -> float | None:
        """Linearizing transform ``f(n)``; ``None`` where it is undefined."""
        if self._fn is None:
            return 1.0
        return self._fn(n)

    @classmethod
    def by_rank(cls) -> list[GrowthModel]:
        return sorted(cls, key=lambda m: m.rank)

    @classmethod
    def from_label(cls, label: str) -> GrowthModel:
        for model in cls:
            if label in {model.label, model.name, model.name.lower()}:
                return model
        raise ValueError(f"unknown growth model: {label}")


@dataclass(frozen=True)
class ModelFit:
    model: GrowthModel
    rmse: float
    slope: float = 0.0
    intercept: float = 0.0
    points: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "model": self.model.label,
            "rank": self.model.rank,
            "rmse": _finite_or_none(self.rmse),
            "slope": _finite_or_none(self.slope),
            "intercept": _finite_or_none(self.intercept),
            "points": self.points,
        }


@dataclass(frozen=True)
class AnalysisResult:
    best_fit: GrowthModel
    confidence: int
    fits: tuple[ModelFit, ...] = field(default_factory=tuple)

    def fit_for(self, model: GrowthModel) -> ModelFit | None:
        for fit in self.fits:
            if fit.model is model:
                return fit
        return None

    def to_dict(self) -> dict[str, Any]:
        best = self.fit_for(self.best_fit)
        return {
            "best_fit": self.best_fit.label,
            "confidence": self.confidence,
            "rmse": _finite_or_none(best.rmse) if best else None,
            "fits": [fit.to_dict() for fit in self.fits],
        }


def _finite_or_none(value: float) -> float | None:
    if not math.isfinite(value):
        return None
    return value
