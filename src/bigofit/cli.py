from __future__ import annotations

import argparse
import dataclasses
import logging
from pathlib import Path
from typing import Any

import yaml

from bigofit import __version__
from bigofit.algorithms.builtin import BUILTIN_ALGORITHMS
from bigofit.algorithms.loader import resolve_algorithm
from bigofit.analyze.classify import classify, is_low_confidence
from bigofit.config.loader import DEFAULT_CONFIG_NAME, load_config, resolve_config_paths
from bigofit.config.schema import BigOFitConfig
from bigofit.config.templates import CONFIG_PRESETS
from bigofit.config.validate import validate_config_paths
from bigofit.errors import BigOFitError
from bigofit.measure.engine import AGGREGATORS, measure
from bigofit.measure.inputs import INPUT_MODES, input_factory
from bigofit.measure.sizes import STRATEGIES, build_sizes, parse_sizes
from bigofit.report.format_json import read_json, write_json
from bigofit.report.format_md import to_markdown
from bigofit.report.models import AnalysisReport
from bigofit.util.logging import setup_logging

log = logging.getLogger(__name__)


def _config_paths(args: argparse.Namespace) -> list[Path] | None:
    return [Path(p) for p in args.config] if args.config else None


def _apply_overrides(cfg: BigOFitConfig, args: argparse.Namespace) -> BigOFitConfig:
    updates: dict[str, Any] = {}
    for attr, key in [
        ("strategy", "strategy"),
        ("max_power", "max_power"),
        ("start", "start_size"),
        ("steps", "steps"),
        ("step", "step_size"),
        ("count", "count"),
        ("stop", "stop_size"),
        ("input_mode", "input_mode"),
        ("repetitions", "repetitions"),
        ("warmups", "warmup_runs"),
        ("aggregate", "aggregate"),
        ("json_path", "json_path"),
        ("md_path", "md_path"),
    ]:
        value = getattr(args, attr, None)
        if value is not None:
            updates[key] = value
    if args.sizes:
        updates["sizes"] = parse_sizes(args.sizes)
        updates.setdefault("strategy", "custom")
    if args.verify_idempotent:
        updates["verify_idempotent"] = True
    return dataclasses.replace(cfg, **updates)


def _write_outputs(report: AnalysisReport, md: str, cfg: BigOFitConfig) -> None:
    if cfg.json_path:
        path = Path(cfg.json_path)
        write_json(report, path)
        log.info("Wrote JSON report to %s", path)
    if cfg.md_path:
        path = Path(cfg.md_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(md, encoding="utf-8")
        log.info("Wrote Markdown report to %s", path)


def cmd_analyze(args: argparse.Namespace) -> int:
    root = Path.cwd()
    cfg = _apply_overrides(load_config(root, _config_paths(args)), args)
    try:
        target = resolve_algorithm(args.target, root)
        input_mode = args.input_mode or target.input_mode or cfg.input_mode
        sizes = build_sizes(cfg.strategy, **cfg.size_params())
        if len(sizes) < 2:
            log.error("At least two input sizes are required, got %s", sizes)
            return 1
        log.info("Testing %s with input sizes: %s", target.name, ", ".join(str(n) for n in sizes))
        settings = cfg.to_measure_settings()
        points = measure(
            target.func,
            sizes,
            settings=settings,
            input_factory=input_factory(input_mode),
        )
        result = classify(points, cfg.to_classifier_settings())
    except (BigOFitError, ValueError) as exc:
        log.error("%s", exc)
        return 1

    low = is_low_confidence(result, cfg.low_confidence_threshold)
    report = AnalysisReport(
        algorithm=target.name,
        input_mode=input_mode,
        sizes=sizes,
        points=points,
        result=result,
        low_confidence=low,
        expected=target.expected,
        repetitions=settings.repetitions,
        aggregate=settings.aggregate,
    )
    if low:
        log.warning(
            "Low confidence (%d%%): the data may be noisy or the algorithm may differ "
            "from standard complexity classes.",
            result.confidence,
        )
    md = to_markdown(report)
    _write_outputs(report, md, cfg)
    print(md)
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    path = Path(args.report)
    if not path.exists():
        log.error("Report %s not found.", path)
        return 1
    try:
        report = read_json(path)
    except (ValueError, TypeError) as exc:
        log.error("Could not read report %s: %s", path, exc)
        return 1
    print(to_markdown(report))
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    for algo in BUILTIN_ALGORITHMS.values():
        print(f"{algo.name:<24} {algo.expected:<11} [{algo.input_mode}] {algo.description}")
    return 0


def cmd_init(args: argparse.Namespace) -> int:
    root = Path(args.path).resolve()
    target = Path(args.output) if args.output else root / DEFAULT_CONFIG_NAME
    if not target.is_absolute():
        target = root / target
    preset = str(args.preset or "full").lower()
    template = CONFIG_PRESETS.get(preset, CONFIG_PRESETS["full"])
    if target.exists() and not args.force:
        log.error("Config %s already exists. Use --force to overwrite.", target)
        return 1
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(template, encoding="utf-8")
    log.info("Wrote config to %s", target)
    return 0


def cmd_config_show(args: argparse.Namespace) -> int:
    root = Path(args.path).resolve()
    cfg = load_config(root, _config_paths(args))
    text = yaml.safe_dump(dataclasses.asdict(cfg), sort_keys=False)
    if args.output:
        out_path = Path(args.output)
        if not out_path.is_absolute():
            out_path = root / out_path
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(text, encoding="utf-8")
    else:
        print(text)
    return 0


def cmd_config_validate(args: argparse.Namespace) -> int:
    root = Path(args.path).resolve()
    config_paths = resolve_config_paths(root, _config_paths(args))
    if not args.config and not config_paths[0].exists():
        log.error("Config %s not found.", config_paths[0])
        return 1
    errors = validate_config_paths(config_paths)
    if errors:
        for err in errors:
            log.error("%s", err)
        return 1
    log.info("Config valid.")
    return 0


def _add_analyze_args(a: argparse.ArgumentParser) -> None:
    a.add_argument(
        "target",
        help="Built-in algorithm name, path/to/file.py[:func] or package.module:func",
    )
    a.add_argument(
        "--config",
        action="append",
        default=None,
        help=f"Config file path (repeatable; default: ./{DEFAULT_CONFIG_NAME})",
    )
    a.add_argument("--strategy", choices=list(STRATEGIES), default=None, help="Input size strategy")
    a.add_argument("--sizes", default=None, help="Explicit comma-separated sizes (implies --strategy custom)")
    a.add_argument("--max-power", dest="max_power", type=int, default=None, help="powers: largest power of ten")
    a.add_argument("--start", type=int, default=None, help="doubling/linear/dense: first size")
    a.add_argument("--steps", type=int, default=None, help="doubling: number of sizes")
    a.add_argument("--step", type=int, default=None, help="linear: size increment")
    a.add_argument("--count", type=int, default=None, help="linear/dense: number of sizes")
    a.add_argument("--stop", type=int, default=None, help="dense: last size")
    a.add_argument(
        "--input-mode",
        dest="input_mode",
        choices=list(INPUT_MODES),
        default=None,
        help="Pass [0..n-1] (array) or n itself (number)",
    )
    a.add_argument("--repetitions", type=int, default=None, help="Timed batches per size (default: 10)")
    a.add_argument("--warmups", type=int, default=None, help="Warm-up calls before timing (default: 50)")
    a.add_argument("--aggregate", choices=sorted(AGGREGATORS), default=None, help="Per-size statistic")
    a.add_argument(
        "--verify-idempotent",
        dest="verify_idempotent",
        action="store_true",
        help="Warn if the function mutates its input or is not repeatable",
    )
    a.add_argument("--json", dest="json_path", default=None, help="Write JSON report to path")
    a.add_argument("--md", dest="md_path", default=None, help="Write Markdown report to path")


def _add_init_args(a: argparse.ArgumentParser) -> None:
    a.add_argument("path", nargs="?", default=".", help="Directory (default: .)")
    a.add_argument("--output", default=None, help=f"Output path (default: {DEFAULT_CONFIG_NAME})")
    a.add_argument(
        "--preset",
        default="full",
        choices=sorted(CONFIG_PRESETS.keys()),
        help="Template preset (default: full)",
    )
    a.add_argument("--force", action="store_true", help="Overwrite existing config if present")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="bigofit", description="bigofit  Empirical Big-O estimator")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")

    sub = p.add_subparsers(dest="cmd", required=True)

    a = sub.add_parser("analyze", help="Measure a function and estimate its complexity")
    _add_analyze_args(a)
    a.set_defaults(func=cmd_analyze)

    s = sub.add_parser("show", help="Render a saved JSON report as Markdown")
    s.add_argument("report", help="Path to a report written with --json")
    s.set_defaults(func=cmd_show)

    ls = sub.add_parser("list", help="List built-in algorithms")
    ls.set_defaults(func=cmd_list)

    c = sub.add_parser("config", help="Config utilities")
    c_sub = c.add_subparsers(dest="config_cmd", required=True)
    c_show = c_sub.add_parser("show", help="Show merged config")
    c_show.add_argument("path", nargs="?", default=".", help="Directory (default: .)")
    c_show.add_argument(
        "--config",
        action="append",
        default=None,
        help="Config file path (repeatable, relative or absolute)",
    )
    c_show.add_argument("--output", default=None, help="Write output to path instead of stdout")
    c_show.set_defaults(func=cmd_config_show)

    c_validate = c_sub.add_parser("validate", help="Validate config file(s)")
    c_validate.add_argument("path", nargs="?", default=".", help="Directory (default: .)")
    c_validate.add_argument(
        "--config",
        action="append",
        default=None,
        help="Config file path (repeatable, relative or absolute)",
    )
    c_validate.set_defaults(func=cmd_config_validate)

    i = sub.add_parser("init", help="Create a bigofit configuration file")
    _add_init_args(i)
    i.set_defaults(func=cmd_init)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(bool(args.verbose))
    return int(args.func(args))
