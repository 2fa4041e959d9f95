"""
EAGLET annotation checker.

Validates entity-linking annotations of benchmark datasets: resolves the
knowledge-base URI of every marking and classifies markings with a set of
pluggable error checkers.
"""

__all__ = [
    "CheckerConfig",
    "CheckingPipeline",
]

__version__ = "0.1.0"

from .config import CheckerConfig  # noqa: E402
from .pipeline import CheckingPipeline  # noqa: E402
