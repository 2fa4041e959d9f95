from typing import Optional, Protocol

from eaglet.types import ErrorType


class UriChecker(Protocol):
    """Classifies a knowledge-base URI."""

    def check_uri(self, uri: Optional[str]) -> ErrorType:
        ...
