from __future__ import annotations

import json
from pathlib import Path

from bigofit.models import AnalysisResult, DataPoint, GrowthModel, ModelFit
from bigofit.report.format_json import read_json, write_json
from bigofit.report.format_md import to_markdown
from bigofit.report.models import SCHEMA_VERSION, AnalysisReport


def _report(confidence: int = 92, low: bool = False) -> AnalysisReport:
    result = AnalysisResult(
        best_fit=GrowthModel.LINEAR,
        confidence=confidence,
        fits=(
            ModelFit(GrowthModel.LINEAR, 0.01, slope=0.001, intercept=0.0, points=3),
            ModelFit(GrowthModel.LINEARITHMIC, 0.2, points=3),
            ModelFit(GrowthModel.QUADRATIC, 1.5, points=3),
            ModelFit(GrowthModel.LOGARITHMIC, 2.0, points=3),
            ModelFit(GrowthModel.CONSTANT, 3.0, points=3),
        ),
    )
    return AnalysisReport(
        algorithm="linear_time",
        input_mode="array",
        sizes=[10, 100, 1000],
        points=[DataPoint(10, 0.01), DataPoint(100, 0.1), DataPoint(1000, 1.0)],
        result=result,
        low_confidence=low,
        expected="O(n)",
        generated_at="2026-01-01T00:00:00Z",
    )


def test_report_to_dict() -> None:
    data = _report().to_dict()
    assert data["schema_version"] == SCHEMA_VERSION
    assert data["algorithm"] == "linear_time"
    assert data["points"][1] == {"n": 100, "duration": 0.1}
    assert data["result"]["best_fit"] == "O(n)"
    assert data["result"]["confidence"] == 92
    assert data["result"]["rmse"] == 0.01
    assert [f["model"] for f in data["result"]["fits"]][:2] == ["O(n)", "O(n log n)"]


def test_json_write_and_read(tmp_path: Path) -> None:
    path = tmp_path / "out" / "report.json"
    report = _report()
    write_json(report, path)

    assert json.loads(path.read_text(encoding="utf-8"))["low_confidence"] is False
    loaded = read_json(path)
    assert loaded.result == report.result
    assert loaded.points == report.points
    assert loaded.generated_at == report.generated_at


def test_markdown_lists_measurements_and_fits() -> None:
    md = to_markdown(_report())
    assert "# bigofit report" in md
    assert "Most likely Big O: **O(n)**" in md
    assert "| 1000 | 1.000000 |" in md
    assert "| O(n) ✅ | 0.010000 | 3 |" in md
    assert "Low confidence" not in md


def test_markdown_warns_on_low_confidence() -> None:
    md = to_markdown(_report(confidence=40, low=True))
    assert "Confidence: **40%**" in md
    assert "Low confidence" in md
