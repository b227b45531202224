"""Reference algorithms with known growth, usable as analysis targets."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class BuiltinAlgorithm:
    name: str
    func: Callable[[Any], Any]
    input_mode: str
    description: str
    expected: str


def constant_time(xs: list[int]) -> int | None:
    return xs[0] if xs else None


def binary_search(xs: list[int], target: int) -> int:
    lo, hi = 0, len(xs) - 1
    while lo <= hi:
        mid = (lo + hi) // 2
        if xs[mid] == target:
            return mid
        if xs[mid] < target:
            lo = mid + 1
        else:
            hi = mid - 1
    return -1


def logarithmic_time(xs: list[int]) -> int:
    # -1 is never present, so every call takes the full log2(n) steps
    return binary_search(xs, -1)


def linear_time(xs: list[int]) -> int:
    total = 0
    for x in xs:
        total += x
    return total


def merge_sort(xs: list[int]) -> list[int]:
    if len(xs) <= 1:
        return list(xs)
    mid = len(xs) // 2
    left = merge_sort(xs[:mid])
    right = merge_sort(xs[mid:])
    out: list[int] = []
    i = j = 0
    while i < len(left) and j < len(right):
        if left[i] <= right[j]:
            out.append(left[i])
            i += 1
        else:
            out.append(right[j])
            j += 1
    out.extend(left[i:])
    out.extend(right[j:])
    return out


def linearithmic_time(xs: list[int]) -> list[int]:
    return merge_sort(xs)


def quadratic_time(xs: list[int]) -> int:
    pairs = 0
    for a in xs:
        for b in xs:
            if a < b:
                pairs += 1
    return pairs


def palindrome_bruteforce(x: int) -> bool:
    s = str(x)
    return s == s[::-1]


def palindrome_optimized(x: int) -> bool:
    if x < 0 or (x != 0 and x % 10 == 0):
        return False
    half = 0
    while x > half:
        half = half * 10 + x % 10
        x //= 10
    return x == half or x == half // 10


BUILTIN_ALGORITHMS: dict[str, BuiltinAlgorithm] = {
    algo.name: algo
    for algo in [
        BuiltinAlgorithm("constant_time", constant_time, "array", "First element lookup", "O(1)"),
        BuiltinAlgorithm(
            "logarithmic_time", logarithmic_time, "array", "Binary search for a missing value", "O(log n)"
        ),
        BuiltinAlgorithm("linear_time", linear_time, "array", "Sum with an explicit loop", "O(n)"),
        BuiltinAlgorithm("linearithmic_time", linearithmic_time, "array", "Top-down merge sort", "O(n log n)"),
        BuiltinAlgorithm("quadratic_time", quadratic_time, "array", "Count ordered pairs", "O(n^2)"),
        BuiltinAlgorithm(
            "palindrome_bruteforce", palindrome_bruteforce, "number", "Reverse the digit string", "O(log n)"
        ),
        BuiltinAlgorithm(
            "palindrome_optimized", palindrome_optimized, "number", "Reverse half of the digits", "O(log n)"
        ),
    ]
}


def get_builtin(name: str) -> BuiltinAlgorithm | None:
    return BUILTIN_ALGORITHMS.get(name)
