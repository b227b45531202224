from __future__ import annotations

import math

from .models import AnalysisReport


def _fmt_ms(value: float) -> str:
    if not math.isfinite(value):
        return "n/a"
    return f"{value:.6f}"


def to_markdown(report: AnalysisReport) -> str:
    result = report.result
    lines: list[str] = []
    lines.append("# bigofit report")
    lines.append("")
    lines.append(f"- Generated: `{report.generated_at}`")
    lines.append(f"- Algorithm: `{report.algorithm}`")
    if report.expected:
        lines.append(f"- Expected: `{report.expected}`")
    lines.append(f"- Input mode: `{report.input_mode}`")
    lines.append(f"- Repetitions per size: `{report.repetitions}` ({report.aggregate})")
    lines.append(f"- Python: `{report.python}`")
    lines.append("")

    lines.append("## Measurements")
    lines.append("")
    lines.append("| n | Time per call (ms) |")
    lines.append("|---:|---:|")
    for point in report.points:
        lines.append(f"| {point.n} | {_fmt_ms(point.duration)} |")
    lines.append("")

    lines.append("## Verdict")
    lines.append("")
    lines.append(f"Most likely Big O: **{result.best_fit.label}**")
    lines.append("")
    lines.append(f"Confidence: **{result.confidence}%**")
    lines.append("")
    if report.low_confidence:
        lines.append(
            "⚠️ Low confidence: the data may be noisy or the algorithm may not follow "
            "one of the standard complexity classes."
        )
        lines.append("")

    lines.append("## Model fit (RMSE, lower is better)")
    lines.append("")
    lines.append("| Model | RMSE (ms) | Points |")
    lines.append("|---|---:|---:|")
    for fit in result.fits:
        marker = " ✅" if fit.model is result.best_fit else ""
        lines.append(f"| {fit.model.label}{marker} | {_fmt_ms(fit.rmse)} | {fit.points} |")
    lines.append("")
    return "\n".join(lines)
