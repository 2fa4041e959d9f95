"""Error checkers."""

from .base import DocumentErrorChecker, ErrorChecker, apply_checkers  # noqa: F401
from .invalid_uri import InvalidUriChecker  # noqa: F401
from .long_description import LongDescriptionChecker  # noqa: F401
from .overlapping import OverlappingChecker  # noqa: F401
from .combined_tagging import CombinedTaggingChecker  # noqa: F401
from .erroneous_span import ErroneousSpanChecker  # noqa: F401
