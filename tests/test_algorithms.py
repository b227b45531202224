from __future__ import annotations

from pathlib import Path

import pytest

from bigofit.algorithms import BUILTIN_ALGORITHMS, load_callable, resolve_algorithm
from bigofit.algorithms.builtin import (
    binary_search,
    merge_sort,
    palindrome_bruteforce,
    palindrome_optimized,
    quadratic_time,
)
from bigofit.errors import AlgorithmLoadError


def test_builtin_algorithms_behave() -> None:
    xs = list(range(20))
    assert binary_search(xs, 13) == 13
    assert binary_search(xs, -1) == -1
    assert merge_sort([5, 3, 9, 1, 3]) == [1, 3, 3, 5, 9]
    assert quadratic_time([0, 1, 2]) == 3
    for x in [0, 7, 121, 1221, 12321]:
        assert palindrome_bruteforce(x) and palindrome_optimized(x)
    for x in [-121, 10, 123]:
        assert not palindrome_bruteforce(x)
        assert not palindrome_optimized(x)


def test_every_builtin_accepts_its_input_mode() -> None:
    for algo in BUILTIN_ALGORITHMS.values():
        workload = list(range(16)) if algo.input_mode == "array" else 16
        algo.func(workload)


def test_resolve_builtin_carries_input_mode() -> None:
    resolved = resolve_algorithm("palindrome_optimized")
    assert resolved.input_mode == "number"
    assert resolved.expected == "O(log n)"


def test_load_single_function_file(tmp_path: Path) -> None:
    (tmp_path / "algo.py").write_text("def total(xs):\n    return sum(xs)\n", encoding="utf-8")
    resolved = resolve_algorithm("algo.py", tmp_path)
    assert resolved.name == "total"
    assert resolved.func([1, 2, 3]) == 6
    assert resolved.input_mode is None


def test_load_named_function_from_file(tmp_path: Path) -> None:
    path = tmp_path / "many.py"
    path.write_text("def a(xs):\n    return 1\n\ndef b(xs):\n    return 2\n", encoding="utf-8")
    assert load_callable(f"{path}:b").func([]) == 2


def test_ambiguous_file_lists_candidates(tmp_path: Path) -> None:
    (tmp_path / "many.py").write_text("def a(xs):\n    pass\n\ndef b(xs):\n    pass\n", encoding="utf-8")
    with pytest.raises(AlgorithmLoadError, match="a, b"):
        load_callable("many.py", tmp_path)


def test_load_module_target() -> None:
    resolved = load_callable("bigofit.algorithms.builtin:linear_time")
    assert resolved.func([1, 2, 3]) == 6


@pytest.mark.parametrize(
    "target",
    ["missing.py", "missing.py:f", "bigofit.no_such_module:f", "bigofit.algorithms.builtin:nope"],
)
def test_unresolvable_targets(tmp_path: Path, target: str) -> None:
    with pytest.raises(AlgorithmLoadError):
        load_callable(target, tmp_path)


def test_import_error_in_target_file(tmp_path: Path) -> None:
    (tmp_path / "broken.py").write_text("raise RuntimeError('nope')\n", encoding="utf-8")
    with pytest.raises(AlgorithmLoadError, match="failed to import"):
        load_callable("broken.py", tmp_path)
