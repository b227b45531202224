"""Classify measured timings into one of the fixed growth models.

Every model is fitted by ordinary least squares on its linearizing transform
and scored by RMSE in the original time unit. The verdict is the simplest model
whose RMSE is within tolerance of the best one, then noise-floor and confidence
rules are applied on top.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

from bigofit.errors import InsufficientDataError, InvalidSizeError
from bigofit.models import AnalysisResult, DataPoint, GrowthModel, ModelFit
from bigofit.util.math import all_finite, dispersion_index, flat_fit, least_squares, mean

log = logging.getLogger(__name__)

RMSE_TOLERANCE = 0.15
LOG_CONSTANT_ERROR_RATIO = 0.10
LOG_CONSTANT_RMSE_FACTOR = 3.0
NOISE_FLOOR_DURATION_MS = 0.001
NOISE_FLOOR_DISPERSION = 0.1
EXACT_FIT_RMSE = 1e-9
FIT_QUALITY_WEIGHT = 0.7
SEPARATION_WEIGHT = 0.3
MIN_POINTS = 2
FITTED_PARAMS = 2
LOW_CONFIDENCE_THRESHOLD = 75


@dataclass(frozen=True)
class ClassifierSettings:
    rmse_tolerance: float = RMSE_TOLERANCE
    log_constant_error_ratio: float = LOG_CONSTANT_ERROR_RATIO
    log_constant_rmse_factor: float = LOG_CONSTANT_RMSE_FACTOR
    noise_floor_duration_ms: float = NOISE_FLOOR_DURATION_MS
    noise_floor_dispersion: float = NOISE_FLOOR_DISPERSION
    exact_fit_rmse: float = EXACT_FIT_RMSE
    fit_quality_weight: float = FIT_QUALITY_WEIGHT
    separation_weight: float = SEPARATION_WEIGHT


def _validate(points: Sequence[DataPoint]) -> None:
    if len(points) < MIN_POINTS:
        raise InsufficientDataError(
            f"at least {MIN_POINTS} data points are required, got {len(points)}"
        )
    for point in points:
        if isinstance(point.n, bool) or not isinstance(point.n, int) or point.n < 0:
            raise InvalidSizeError(f"data point size must be a non-negative integer, got {point.n!r}")


def fit_model(model: GrowthModel, points: Sequence[DataPoint]) -> ModelFit:
    """Fit one model; points where its transform is undefined are skipped.

    A model that had to skip points and is left with no more points than it
    has parameters scores an infinite RMSE, so it can never be selected.
    """
    if model.is_constant:
        line = flat_fit([p.duration for p in points])
        return ModelFit(model=model, rmse=line.rmse, intercept=line.intercept, points=line.points)

    xs: list[float] = []
    ys: list[float] = []
    for point in points:
        x = model.transform(point.n)
        if x is None or not math.isfinite(x):
            continue
        xs.append(x)
        ys.append(point.duration)
    line = least_squares(xs, ys)
    if len(xs) < len(points) and len(xs) <= FITTED_PARAMS:
        # Too few usable points left for the residual to say anything.
        return ModelFit(model=model, rmse=math.inf, points=len(xs))
    return ModelFit(
        model=model,
        rmse=line.rmse,
        slope=line.slope,
        intercept=line.intercept,
        points=line.points,
    )


def fit_all(points: Sequence[DataPoint]) -> list[ModelFit]:
    """All model fits sorted by ascending RMSE, simpler model first on ties."""
    fits = [fit_model(model, points) for model in GrowthModel.by_rank()]
    return sorted(fits, key=lambda f: (f.rmse, f.model.rank))


def _within_tolerance(candidate: ModelFit, best: ModelFit, settings: ClassifierSettings) -> bool:
    if candidate.rmse <= best.rmse:
        return True
    if best.rmse < settings.exact_fit_rmse:
        return candidate.rmse < settings.exact_fit_rmse
    return (candidate.rmse - best.rmse) / best.rmse < settings.rmse_tolerance


def select_best(
    fits: Sequence[ModelFit],
    mean_duration: float,
    settings: ClassifierSettings | None = None,
) -> ModelFit:
    """Pick the simplest model whose fit is indistinguishable from the best one."""
    settings = settings or ClassifierSettings()
    ranked = sorted(fits, key=lambda f: (f.rmse, f.model.rank))
    best = ranked[0]

    for candidate in sorted(fits, key=lambda f: f.model.rank):
        if candidate.model.rank >= best.model.rank:
            break
        if _within_tolerance(candidate, best, settings):
            best = candidate
            break

    if best.model is GrowthModel.LOGARITHMIC and mean_duration > 0:
        constant = next((f for f in fits if f.model is GrowthModel.CONSTANT), None)
        if (
            constant is not None
            and best.rmse / mean_duration < settings.log_constant_error_ratio
            and constant.rmse <= settings.log_constant_rmse_factor * best.rmse
        ):
            best = constant
    return best


def below_noise_floor(durations: Sequence[float], settings: ClassifierSettings | None = None) -> bool:
    """True when timings are too small for any trend to be more than noise."""
    settings = settings or ClassifierSettings()
    if max(durations) >= settings.noise_floor_duration_ms:
        return False
    return dispersion_index(durations) < settings.noise_floor_dispersion


def confidence_score(
    best: ModelFit,
    fits: Sequence[ModelFit],
    mean_duration: float,
    settings: ClassifierSettings | None = None,
) -> int:
    settings = settings or ClassifierSettings()
    if best.rmse < settings.exact_fit_rmse:
        return 100

    fit_quality = 0.0
    if mean_duration > 0 and math.isfinite(best.rmse):
        fit_quality = max(0.0, 1.0 - 2.0 * (best.rmse / mean_duration))

    others = [f for f in fits if f.model is not best.model]
    separation = 0.0
    if others:
        runner_up = min(others, key=lambda f: (f.rmse, f.model.rank))
        if math.isinf(runner_up.rmse):
            separation = 1.0
        elif runner_up.rmse > 0:
            separation = (runner_up.rmse - best.rmse) / runner_up.rmse
        separation = min(1.0, max(0.0, separation))

    score = 100.0 * (settings.fit_quality_weight * fit_quality + settings.separation_weight * separation)
    return int(min(100, max(0, round(score))))


def _degenerate_result() -> AnalysisResult:
    fits = tuple(ModelFit(model=model, rmse=math.inf) for model in GrowthModel.by_rank())
    return AnalysisResult(best_fit=GrowthModel.CONSTANT, confidence=0, fits=fits)


def classify(points: Sequence[DataPoint], settings: ClassifierSettings | None = None) -> AnalysisResult:
    """Decide which growth model best explains ``points``.

    Raises ``InsufficientDataError`` for fewer than two points and
    ``InvalidSizeError`` for a negative size. Numerically degenerate input is
    never an error: it ends up classified as constant time.
    """
    settings = settings or ClassifierSettings()
    points = list(points)
    _validate(points)

    durations = [p.duration for p in points]
    if not all_finite(durations):
        log.warning("Non-finite durations in timing data; reporting constant time with zero confidence.")
        return _degenerate_result()

    fits = fit_all(points)
    mean_duration = mean(durations)
    best = select_best(fits, mean_duration, settings)

    if best.model is not GrowthModel.CONSTANT and below_noise_floor(durations, settings):
        log.debug("Timings below noise floor (max %.3g ms); forcing constant time.", max(durations))
        best = next(f for f in fits if f.model is GrowthModel.CONSTANT)

    confidence = confidence_score(best, fits, mean_duration, settings)
    return AnalysisResult(best_fit=best.model, confidence=confidence, fits=tuple(fits))


def is_low_confidence(result: AnalysisResult, threshold: int = LOW_CONFIDENCE_THRESHOLD) -> bool:
    return result.confidence <= threshold
