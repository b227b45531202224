from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml

from bigofit.measure.engine import AGGREGATORS
from bigofit.measure.inputs import INPUT_MODES
from bigofit.measure.sizes import STRATEGIES

KNOWN_KEYS = {
    "strategy",
    "max_power",
    "start_size",
    "steps",
    "step_size",
    "count",
    "stop_size",
    "sizes",
    "input_mode",
    "repetitions",
    "warmup_runs",
    "min_calibration_ms",
    "target_batch_ms",
    "max_calibration_calls",
    "aggregate",
    "verify_idempotent",
    "rmse_tolerance",
    "low_confidence_threshold",
    "json_path",
    "md_path",
}


def _is_bool(value: Any) -> bool:
    return isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _validate_optional_number(raw: dict[str, Any], key: str, errors: list[str], minimum: float = 0.0) -> None:
    if key not in raw:
        return
    value = raw.get(key)
    if value is None:
        return
    if not _is_number(value):
        errors.append(f"{key} must be a number")
    elif value < minimum:
        errors.append(f"{key} must be >= {minimum:g}")


def _validate_optional_int(raw: dict[str, Any], key: str, errors: list[str], minimum: int = 0) -> None:
    if key not in raw:
        return
    value = raw.get(key)
    if value is None:
        return
    if not _is_int(value):
        errors.append(f"{key} must be an integer")
    elif value < minimum:
        errors.append(f"{key} must be >= {minimum}")


def _validate_optional_str_choice(raw: dict[str, Any], key: str, choices: Iterable[str], errors: list[str]) -> None:
    if key not in raw:
        return
    value = raw.get(key)
    if value is None:
        return
    if not isinstance(value, str):
        errors.append(f"{key} must be a string")
        return
    allowed = set(choices)
    if value.lower() not in allowed:
        errors.append(f"{key} must be one of: {', '.join(sorted(allowed))}")


def _validate_optional_bool(raw: dict[str, Any], key: str, errors: list[str]) -> None:
    if key not in raw:
        return
    value = raw.get(key)
    if value is None:
        return
    if not _is_bool(value):
        errors.append(f"{key} must be a boolean")


def validate_raw_config(raw: dict[str, Any]) -> list[str]:
    errors: list[str] = []
    for key in raw.keys():
        if key not in KNOWN_KEYS:
            errors.append(f"Unknown key: {key}")

    if "sizes" in raw and raw.get("sizes") is not None:
        value = raw.get("sizes")
        if not isinstance(value, list) or not all(_is_int(v) and v >= 0 for v in value):
            errors.append("sizes must be a list of non-negative integers")

    for key in ["max_power", "start_size", "steps", "step_size", "count", "stop_size", "warmup_runs"]:
        _validate_optional_int(raw, key, errors)
    for key in ["repetitions", "max_calibration_calls"]:
        _validate_optional_int(raw, key, errors, minimum=1)
    _validate_optional_int(raw, "low_confidence_threshold", errors)
    if _is_int(raw.get("low_confidence_threshold")) and raw["low_confidence_threshold"] > 100:
        errors.append("low_confidence_threshold must be <= 100")

    for key in ["min_calibration_ms", "target_batch_ms", "rmse_tolerance"]:
        _validate_optional_number(raw, key, errors)

    _validate_optional_bool(raw, "verify_idempotent", errors)
    _validate_optional_str_choice(raw, "strategy", STRATEGIES, errors)
    _validate_optional_str_choice(raw, "input_mode", INPUT_MODES, errors)
    _validate_optional_str_choice(raw, "aggregate", AGGREGATORS.keys(), errors)

    for key in ["json_path", "md_path"]:
        if key in raw and raw.get(key) is not None and not isinstance(raw.get(key), str):
            errors.append(f"{key} must be a string")

    return errors


def validate_config_path(path: Path) -> list[str]:
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except Exception as exc:
        return [f"{path}: failed to read ({exc})"]
    if not isinstance(raw, dict):
        return [f"{path}: config must be a mapping"]
    errors = validate_raw_config(raw)
    return [f"{path}: {err}" for err in errors]


def validate_config_paths(paths: Iterable[Path]) -> list[str]:
    errors: list[str] = []
    for path in paths:
        if not path.exists():
            errors.append(f"{path}: file not found")
            continue
        errors.extend(validate_config_path(path))
    return errors
