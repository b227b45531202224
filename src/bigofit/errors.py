from __future__ import annotations


class BigOFitError(Exception):
    """Base class for every error raised by bigofit."""


class InvalidSizeError(BigOFitError, ValueError):
    """A requested input size is negative or not an integer."""


class InsufficientDataError(BigOFitError, ValueError):
    """Fewer than two data points were handed to the classifier."""


class AlgorithmLoadError(BigOFitError):
    """A target could not be resolved to a callable."""


class AlgorithmExecutionError(BigOFitError):
    """The function under test raised while being measured.

    The whole sweep is aborted; ``original`` is the exception raised by the
    algorithm and is also chained as ``__cause__``.
    """

    def __init__(self, phase: str, n: int | None, original: BaseException) -> None:
        self.phase = phase
        self.n = n
        self.original = original
        where = phase if n is None else f"{phase} (n={n})"
        super().__init__(f"algorithm failed during {where}: {type(original).__name__}: {original}")
