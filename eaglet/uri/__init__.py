"""URI resolution and validity checking."""

from .fetcher import (  # noqa: F401
    FetchFailure,
    FetchFailureReason,
    FetchResult,
    ParsedModel,
    RdfResourceFetcher,
)
from .http_checker import DISAMBIGUATION_PROPERTY, HttpBasedUriChecker  # noqa: F401
