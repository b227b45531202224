from __future__ import annotations

from dataclasses import dataclass, field

from bigofit.analyze.classify import LOW_CONFIDENCE_THRESHOLD, RMSE_TOLERANCE, ClassifierSettings
from bigofit.measure.engine import (
    MAX_CALIBRATION_CALLS,
    MIN_CALIBRATION_MS,
    REPETITIONS,
    TARGET_BATCH_MS,
    WARMUP_RUNS,
    MeasureSettings,
)


@dataclass(frozen=True)
class BigOFitConfig:
    strategy: str = "powers"
    max_power: int = 5
    start_size: int = 100
    steps: int = 5
    step_size: int = 1000
    count: int = 5
    stop_size: int = 10000
    sizes: list[int] = field(default_factory=list)
    input_mode: str = "array"
    repetitions: int = REPETITIONS
    warmup_runs: int = WARMUP_RUNS
    min_calibration_ms: float = MIN_CALIBRATION_MS
    target_batch_ms: float = TARGET_BATCH_MS
    max_calibration_calls: int = MAX_CALIBRATION_CALLS
    aggregate: str = "mean"
    verify_idempotent: bool = False
    rmse_tolerance: float = RMSE_TOLERANCE
    low_confidence_threshold: int = LOW_CONFIDENCE_THRESHOLD
    json_path: str | None = None
    md_path: str | None = None

    def to_measure_settings(self) -> MeasureSettings:
        return MeasureSettings(
            warmup_runs=self.warmup_runs,
            repetitions=self.repetitions,
            min_calibration_ms=self.min_calibration_ms,
            target_batch_ms=self.target_batch_ms,
            max_calibration_calls=self.max_calibration_calls,
            aggregate=self.aggregate,
            verify_idempotent=self.verify_idempotent,
        )

    def to_classifier_settings(self) -> ClassifierSettings:
        return ClassifierSettings(rmse_tolerance=self.rmse_tolerance)

    def size_params(self) -> dict[str, object]:
        if self.strategy == "doubling":
            return {"start": self.start_size, "steps": self.steps}
        if self.strategy == "linear":
            return {"start": self.start_size, "step": self.step_size, "count": self.count}
        if self.strategy == "dense":
            return {"start": self.start_size, "stop": self.stop_size, "count": self.count}
        if self.strategy == "custom":
            return {"sizes": list(self.sizes)}
        return {"max_power": self.max_power}
