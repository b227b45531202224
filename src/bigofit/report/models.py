from __future__ import annotations

import platform
import sys
import time
from dataclasses import dataclass, field
from typing import Any

from bigofit.models import AnalysisResult, DataPoint

SCHEMA_VERSION = 1


@dataclass(frozen=True)
class AnalysisReport:
    algorithm: str
    input_mode: str
    sizes: list[int]
    points: list[DataPoint]
    result: AnalysisResult
    low_confidence: bool
    expected: str | None = None
    repetitions: int = 10
    aggregate: str = "mean"
    schema_version: int = SCHEMA_VERSION
    generated_at: str = field(default_factory=lambda: time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()))
    python: str = field(default_factory=lambda: sys.version.split()[0])
    platform: str = field(default_factory=lambda: platform.platform())

    def to_dict(self) -> dict[str, Any]:
        return {
            "schema_version": self.schema_version,
            "generated_at": self.generated_at,
            "python": self.python,
            "platform": self.platform,
            "algorithm": self.algorithm,
            "expected": self.expected,
            "input_mode": self.input_mode,
            "repetitions": self.repetitions,
            "aggregate": self.aggregate,
            "sizes": list(self.sizes),
            "points": [p.to_dict() for p in self.points],
            "result": self.result.to_dict(),
            "low_confidence": self.low_confidence,
        }
