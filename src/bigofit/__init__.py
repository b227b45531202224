from importlib.metadata import PackageNotFoundError, version

from bigofit.analyze.classify import classify
from bigofit.measure.engine import measure
from bigofit.measure.inputs import generate

__all__ = ["__version__", "classify", "generate", "measure"]

try:
    __version__ = version("bigofit")
except PackageNotFoundError:  # pragma: no cover - fallback for editable source trees
    __version__ = "0.1.0"
