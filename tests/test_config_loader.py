from __future__ import annotations

from pathlib import Path

from bigofit.config.loader import load_config
from bigofit.config.schema import BigOFitConfig


def test_missing_default_config_gives_defaults(tmp_path: Path) -> None:
    assert load_config(tmp_path) == BigOFitConfig()


def test_load_multiple_configs_merges_in_order(tmp_path: Path) -> None:
    cfg1 = tmp_path / "a.yml"
    cfg2 = tmp_path / "b.yml"
    cfg1.write_text("strategy: doubling\nstart_size: 50\nrepetitions: 4\n", encoding="utf-8")
    cfg2.write_text("repetitions: 7\naggregate: MEDIAN\nverify_idempotent: yes\n", encoding="utf-8")

    cfg = load_config(tmp_path, [cfg1, cfg2])

    assert cfg.strategy == "doubling"
    assert cfg.start_size == 50
    assert cfg.repetitions == 7
    assert cfg.aggregate == "median"
    assert cfg.verify_idempotent is True


def test_explicit_sizes_imply_custom_strategy(tmp_path: Path) -> None:
    (tmp_path / ".bigofit.yml").write_text("sizes: [10, 20, 40]\n", encoding="utf-8")
    cfg = load_config(tmp_path)
    assert cfg.strategy == "custom"
    assert cfg.size_params() == {"sizes": [10, 20, 40]}


def test_broken_yaml_is_skipped(tmp_path: Path) -> None:
    bad = tmp_path / "bad.yml"
    bad.write_text("repetitions: [unclosed\n", encoding="utf-8")
    assert load_config(tmp_path, [bad]) == BigOFitConfig()


def test_config_converts_to_settings() -> None:
    cfg = BigOFitConfig(repetitions=3, warmup_runs=60, aggregate="median", rmse_tolerance=0.2)
    measure_settings = cfg.to_measure_settings()
    assert measure_settings.repetitions == 3
    assert measure_settings.warmup_runs == 60
    assert measure_settings.aggregate == "median"
    assert cfg.to_classifier_settings().rmse_tolerance == 0.2
