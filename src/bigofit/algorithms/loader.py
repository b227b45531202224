from __future__ import annotations

import importlib
import importlib.util
import inspect
import logging
import sys
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType
from typing import Any

from bigofit.algorithms.builtin import get_builtin
from bigofit.errors import AlgorithmLoadError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedAlgorithm:
    name: str
    func: Callable[[Any], Any]
    input_mode: str | None = None
    expected: str | None = None


def _split_target(target: str) -> tuple[str, str]:
    # split on the last colon so drive letters ("C:\\x.py:f") survive
    if ":" in target:
        head, _, tail = target.rpartition(":")
        if head and tail and "/" not in tail and "\\" not in tail:
            return head, tail
    return target, ""


def _load_module_from_path(path: Path) -> ModuleType:
    module_name = f"bigofit_target_{path.stem}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise AlgorithmLoadError(f"cannot import {path}")
    module = importlib.util.module_from_spec(spec)
    sys.path.insert(0, str(path.parent))
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        raise AlgorithmLoadError(f"failed to import {path}: {exc}") from exc
    finally:
        if sys.path and sys.path[0] == str(path.parent):
            sys.path.pop(0)
    return module


def _import_module(name: str) -> ModuleType:
    try:
        return importlib.import_module(name)
    except Exception as exc:
        raise AlgorithmLoadError(f"failed to import module {name}: {exc}") from exc


def _resolve_qualname(module: ModuleType, qualname: str) -> Any:
    obj: Any = module
    for part in qualname.split("."):
        if not hasattr(obj, part):
            raise AlgorithmLoadError(f"{qualname!r} not found in {module.__name__}")
        obj = getattr(obj, part)
    return obj


def public_functions(module: ModuleType) -> list[str]:
    """Functions defined in ``module`` itself, excluding private names."""
    names: list[str] = []
    for name, obj in vars(module).items():
        if name.startswith("_") or not inspect.isfunction(obj):
            continue
        if getattr(obj, "__module__", None) != module.__name__:
            continue
        names.append(name)
    return sorted(names)


def load_callable(target: str, repo_root: Path | None = None) -> ResolvedAlgorithm:
    """Load ``file.py:func``, ``file.py`` or ``package.module:func``.

    A bare file must define exactly one public function.
    """
    location, qualname = _split_target(target.strip())
    if not location:
        raise AlgorithmLoadError("empty target")

    root = repo_root or Path.cwd()
    path = Path(location)
    if not path.is_absolute():
        path = root / path

    if location.endswith(".py") or path.is_file():
        if not path.is_file():
            raise AlgorithmLoadError(f"file not found: {path}")
        log.debug("Loading module from %s", path)
        module = _load_module_from_path(path)
    else:
        module = _import_module(location)

    if not qualname:
        candidates = public_functions(module)
        if len(candidates) != 1:
            listed = ", ".join(candidates) if candidates else "none"
            raise AlgorithmLoadError(
                f"{location} defines {len(candidates)} public functions ({listed}); "
                f"pick one with {location}:<name>"
            )
        qualname = candidates[0]

    func = _resolve_qualname(module, qualname)
    if not callable(func):
        raise AlgorithmLoadError(f"{qualname!r} in {location} is not callable")
    return ResolvedAlgorithm(name=qualname, func=func)


def resolve_algorithm(target: str, repo_root: Path | None = None) -> ResolvedAlgorithm:
    builtin = get_builtin(target)
    if builtin is not None:
        return ResolvedAlgorithm(
            name=builtin.name,
            func=builtin.func,
            input_mode=builtin.input_mode,
            expected=builtin.expected,
        )
    return load_callable(target, repo_root)
