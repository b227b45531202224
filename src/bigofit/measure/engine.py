"""Adaptive timing harness.

Turns a coarse clock into a per-call duration estimate: warm up once, calibrate
how many calls make a measurable batch, then time a fixed number of batches on
fresh workloads and aggregate the per-call samples.
"""

from __future__ import annotations

import logging
import statistics
import time
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from bigofit.errors import AlgorithmExecutionError
from bigofit.measure.inputs import generate, validate_size
from bigofit.models import DataPoint

log = logging.getLogger(__name__)

WARMUP_RUNS = 50
REPETITIONS = 10
MIN_CALIBRATION_MS = 5.0
TARGET_BATCH_MS = 15.0
MAX_CALIBRATION_CALLS = 1_000_000

AGGREGATORS: dict[str, Callable[[Sequence[float]], float]] = {
    "mean": statistics.fmean,
    "median": statistics.median,
}


@dataclass(frozen=True)
class MeasureSettings:
    warmup_runs: int = WARMUP_RUNS
    repetitions: int = REPETITIONS
    min_calibration_ms: float = MIN_CALIBRATION_MS
    target_batch_ms: float = TARGET_BATCH_MS
    max_calibration_calls: int = MAX_CALIBRATION_CALLS
    aggregate: str = "mean"
    verify_idempotent: bool = False


@dataclass(frozen=True)
class Calibration:
    calls: int
    elapsed_ms: float
    capped: bool = False


def resolve_aggregator(name: str) -> Callable[[Sequence[float]], float]:
    try:
        return AGGREGATORS[name.lower()]
    except KeyError:
        raise ValueError(
            f"unknown aggregate {name!r} (expected one of: {', '.join(sorted(AGGREGATORS))})"
        ) from None


def batch_size(calibration: Calibration, target_ms: float) -> int:
    if calibration.calls <= 1:
        return 1
    if calibration.elapsed_ms <= 0:
        return calibration.calls
    per_call = calibration.elapsed_ms / calibration.calls
    return max(1, round(target_ms / per_call))


def _calibrate(
    algorithm: Callable[[Any], Any],
    workload: Any,
    settings: MeasureSettings,
    clock: Callable[[], float],
) -> Calibration:
    calls = 0
    start = clock()
    elapsed_ms = 0.0
    while calls < settings.max_calibration_calls:
        algorithm(workload)
        calls += 1
        elapsed_ms = (clock() - start) * 1000.0
        if elapsed_ms >= settings.min_calibration_ms:
            return Calibration(calls=calls, elapsed_ms=elapsed_ms)
    return Calibration(calls=calls, elapsed_ms=elapsed_ms, capped=True)


def _timed_batch(
    algorithm: Callable[[Any], Any],
    workload: Any,
    batch: int,
    clock: Callable[[], float],
) -> float:
    start = clock()
    for _ in range(batch):
        algorithm(workload)
    end = clock()
    return max(0.0, (end - start) * 1000.0 / batch)


def _same(a: Any, b: Any) -> bool:
    try:
        return bool(a == b)
    except Exception as exc:
        log.debug("Cannot compare values for idempotence check (%s)", exc)
        return True


def _check_idempotent(
    algorithm: Callable[[Any], Any],
    n: int,
    input_factory: Callable[[int], Any],
) -> None:
    workload = input_factory(n)
    first = algorithm(workload)
    second = algorithm(workload)
    if not _same(first, second):
        log.warning(
            "Algorithm returned different results on repeated calls (n=%d); "
            "batched timings may not reflect a single call.",
            n,
        )
    if not _same(workload, input_factory(n)):
        log.warning(
            "Algorithm mutates its input (n=%d); calibration reuses one workload and may be skewed.",
            n,
        )


def _measure_size(
    algorithm: Callable[[Any], Any],
    n: int,
    repetitions: int,
    settings: MeasureSettings,
    input_factory: Callable[[int], Any],
    clock: Callable[[], float],
    aggregate: Callable[[Sequence[float]], float],
) -> DataPoint:
    phase = "calibration"
    try:
        calibration = _calibrate(algorithm, input_factory(n), settings, clock)
        if calibration.capped:
            log.debug(
                "Calibration cap reached for n=%d after %d calls (%.3f ms)",
                n,
                calibration.calls,
                calibration.elapsed_ms,
            )
        batch = batch_size(calibration, settings.target_batch_ms)

        phase = "timing"
        samples: list[float] = []
        for _ in range(repetitions):
            samples.append(_timed_batch(algorithm, input_factory(n), batch, clock))
    except Exception as exc:
        raise AlgorithmExecutionError(phase, n, exc) from exc

    duration = max(0.0, float(aggregate(samples)))
    log.debug("n=%d calls=%d batch=%d duration=%.6f ms", n, calibration.calls, batch, duration)
    return DataPoint(n=n, duration=duration)


def measure(
    algorithm: Callable[[Any], Any],
    sizes: Iterable[int],
    repetitions: int | None = None,
    *,
    settings: MeasureSettings | None = None,
    input_factory: Callable[[int], Any] = generate,
    clock: Callable[[], float] = time.perf_counter,
) -> list[DataPoint]:
    """Measure the average single-call duration of ``algorithm`` for each size.

    ``algorithm`` must not change its own behavior by mutating its workload:
    calibration calls it many times on one workload instance, and each timed
    batch reuses a single fresh workload. A mutating algorithm skews the
    numbers but does not break the run.

    Sizes are measured one at a time in the given order and one ``DataPoint``
    is returned per size. Any exception from ``algorithm`` aborts the sweep as
    ``AlgorithmExecutionError``; negative sizes raise ``InvalidSizeError``
    before anything runs. ``clock`` returns seconds; durations are in ms.
    """
    settings = settings or MeasureSettings()
    reps = settings.repetitions if repetitions is None else repetitions
    if reps < 1:
        raise ValueError(f"repetitions must be at least 1, got {reps}")
    aggregate = resolve_aggregator(settings.aggregate)
    sizes_list = [validate_size(n) for n in sizes]
    if not sizes_list:
        return []

    smallest = min(sizes_list)
    try:
        warmup_input = input_factory(smallest)
        for _ in range(max(0, settings.warmup_runs)):
            algorithm(warmup_input)
    except Exception as exc:
        raise AlgorithmExecutionError("warm-up", smallest, exc) from exc

    if settings.verify_idempotent:
        try:
            _check_idempotent(algorithm, smallest, input_factory)
        except Exception as exc:
            raise AlgorithmExecutionError("idempotence check", smallest, exc) from exc

    points: list[DataPoint] = []
    for n in sizes_list:
        points.append(
            _measure_size(algorithm, n, reps, settings, input_factory, clock, aggregate)
        )
    return points
