from bigofit.algorithms.builtin import BUILTIN_ALGORITHMS, BuiltinAlgorithm, get_builtin
from bigofit.algorithms.loader import ResolvedAlgorithm, load_callable, resolve_algorithm

__all__ = [
    "BUILTIN_ALGORITHMS",
    "BuiltinAlgorithm",
    "ResolvedAlgorithm",
    "get_builtin",
    "load_callable",
    "resolve_algorithm",
]
