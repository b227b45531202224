from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml

from .schema import BigOFitConfig

log = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = ".bigofit.yml"


def _load_raw_config(path: Path) -> dict[str, Any]:
    try:
        return yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except Exception as e:
        log.warning("Failed to load %s (%s). Skipping.", path, e)
        return {}


def _get_int_list(raw: dict[str, Any], key: str) -> list[int] | None:
    if key not in raw:
        return None
    v = raw.get(key)
    if not isinstance(v, list):
        return None
    out: list[int] = []
    for item in v:
        try:
            out.append(int(item))
        except (TypeError, ValueError):
            continue
    return out


def _get_optional_int(raw: dict[str, Any], key: str) -> int | None:
    if key not in raw:
        return None
    v = raw.get(key)
    if v is None or isinstance(v, bool):
        return None
    try:
        return int(v)
    except (TypeError, ValueError):
        return None


def _get_optional_float(raw: dict[str, Any], key: str) -> float | None:
    if key not in raw:
        return None
    v = raw.get(key)
    if v is None or isinstance(v, bool):
        return None
    try:
        return float(v)
    except (TypeError, ValueError):
        return None


def _get_optional_str(raw: dict[str, Any], key: str) -> str | None:
    if key not in raw:
        return None
    v = raw.get(key)
    if v is None:
        return None
    return str(v)


def _get_bool(raw: dict[str, Any], key: str, default: bool) -> bool:
    if key not in raw:
        return default
    v = raw.get(key)
    if isinstance(v, bool):
        return v
    if isinstance(v, (int, float)):
        return bool(v)
    if isinstance(v, str):
        if v.strip().lower() in {"true", "yes", "1", "on"}:
            return True
        if v.strip().lower() in {"false", "no", "0", "off"}:
            return False
    return default


_INT_KEYS = (
    "max_power",
    "start_size",
    "steps",
    "step_size",
    "count",
    "stop_size",
    "repetitions",
    "warmup_runs",
    "max_calibration_calls",
    "low_confidence_threshold",
)
_FLOAT_KEYS = ("min_calibration_ms", "target_batch_ms", "rmse_tolerance")
_STR_KEYS = ("strategy", "input_mode", "aggregate", "json_path", "md_path")
_LOWERED_KEYS = {"strategy", "input_mode", "aggregate"}


def _merge_config(base: BigOFitConfig, raw: dict[str, Any]) -> BigOFitConfig:
    updates: dict[str, Any] = {}
    for key in _INT_KEYS:
        value = _get_optional_int(raw, key)
        if value is not None:
            updates[key] = value
    for key in _FLOAT_KEYS:
        value = _get_optional_float(raw, key)
        if value is not None:
            updates[key] = value
    for key in _STR_KEYS:
        value = _get_optional_str(raw, key)
        if value is not None:
            updates[key] = value.strip().lower() if key in _LOWERED_KEYS else value
    updates["verify_idempotent"] = _get_bool(raw, "verify_idempotent", base.verify_idempotent)

    raw_sizes = _get_int_list(raw, "sizes")
    if raw_sizes:
        updates["sizes"] = raw_sizes
        if "strategy" not in updates:
            updates["strategy"] = "custom"
    return dataclasses.replace(base, **updates)


def resolve_config_paths(root: Path, config_paths: Iterable[Path] | None) -> list[Path]:
    if config_paths is None:
        return [root / DEFAULT_CONFIG_NAME]
    resolved: list[Path] = []
    for path in config_paths:
        p = Path(path)
        if not p.is_absolute():
            p = root / p
        resolved.append(p)
    return resolved


def load_config(root: Path, config_paths: Iterable[Path] | None = None) -> BigOFitConfig:
    paths = resolve_config_paths(root, config_paths)
    if config_paths is None and not paths[0].exists():
        return BigOFitConfig()

    cfg = BigOFitConfig()
    for path in paths:
        if not path.exists():
            log.warning("Config %s not found; skipping.", path)
            continue
        raw = _load_raw_config(path)
        if not isinstance(raw, dict):
            log.warning("Config %s is not a mapping; skipping.", path)
            continue
        cfg = _merge_config(cfg, raw)
    return cfg
