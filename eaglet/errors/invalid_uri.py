import logging
from typing import Dict, Optional, Sequence

from eaglet.errors.base import DocumentErrorChecker
from eaglet.registry import error_checkers
from eaglet.types import Correction, Document, ErrorType
from eaglet.uri.base import UriChecker

logger = logging.getLogger(__name__)


@error_checkers.register("invalid_uri")
class InvalidUriChecker(DocumentErrorChecker):
    """Flags markings whose URI is unresolvable or a disambiguation page."""

    needs_uri_checker = True

    def __init__(self, uri_checker: UriChecker):
        self.uri_checker = uri_checker
        self._results: Dict[Optional[str], ErrorType] = {}

    def check(self, documents: Sequence[Document]) -> None:
        # Results are only shared between markings of the same batch.
        self._results = {}
        try:
            super().check(documents)
        finally:
            self._results = {}

    def _classify(self, uri: Optional[str]) -> ErrorType:
        if uri not in self._results:
            self._results[uri] = self.uri_checker.check_uri(uri)
        return self._results[uri]

    def check_document(self, doc: Document) -> None:
        for marking in doc.markings:
            if marking.correction is Correction.DELETE:
                logger.debug(f"Skipping deleted marking ({marking.start}, {marking.length}) in {doc.id!r}")
                continue
            error = self._classify(marking.uri)
            if error is not ErrorType.NO_ERROR:
                self.mark(marking, error)
