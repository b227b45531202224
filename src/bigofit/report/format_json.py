from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any

from bigofit.models import AnalysisResult, DataPoint, GrowthModel, ModelFit

from .models import SCHEMA_VERSION, AnalysisReport


def write_json(report: AnalysisReport, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(report.to_dict(), indent=2), encoding="utf-8")


def _float(value: Any) -> float:
    if value is None:
        return math.inf
    return float(value)


def _result_from_dict(raw: dict[str, Any]) -> AnalysisResult:
    fits = []
    for f in raw.get("fits", []):
        if not isinstance(f, dict):
            continue
        fits.append(
            ModelFit(
                model=GrowthModel.from_label(str(f.get("model", ""))),
                rmse=_float(f.get("rmse")),
                slope=float(f.get("slope") or 0.0),
                intercept=float(f.get("intercept") or 0.0),
                points=int(f.get("points", 0)),
            )
        )
    return AnalysisResult(
        best_fit=GrowthModel.from_label(str(raw.get("best_fit", "O(1)"))),
        confidence=int(raw.get("confidence", 0)),
        fits=tuple(fits),
    )


def read_json(path: Path) -> AnalysisReport:
    raw = json.loads(path.read_text(encoding="utf-8"))
    points = [
        DataPoint(n=int(p.get("n", 0)), duration=_float(p.get("duration")))
        for p in raw.get("points", [])
        if isinstance(p, dict)
    ]
    result_raw = raw.get("result", {})
    return AnalysisReport(
        algorithm=str(raw.get("algorithm", "")),
        input_mode=str(raw.get("input_mode", "array")),
        sizes=[int(n) for n in raw.get("sizes", [])],
        points=points,
        result=_result_from_dict(result_raw if isinstance(result_raw, dict) else {}),
        low_confidence=bool(raw.get("low_confidence", False)),
        expected=raw.get("expected"),
        repetitions=int(raw.get("repetitions", 10)),
        aggregate=str(raw.get("aggregate", "mean")),
        schema_version=int(raw.get("schema_version", SCHEMA_VERSION)),
        generated_at=str(raw.get("generated_at", "")),
        python=str(raw.get("python", "")),
        platform=str(raw.get("platform", "")),
    )
