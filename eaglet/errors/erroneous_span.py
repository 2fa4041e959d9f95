import logging

from eaglet.errors.base import DocumentErrorChecker, span_in_text
from eaglet.registry import error_checkers
from eaglet.types import Document, ErrorType

logger = logging.getLogger(__name__)


@error_checkers.register("erroneous_span")
class ErroneousSpanChecker(DocumentErrorChecker):
    """Flags markings that start or end inside a token or on whitespace."""

    def check_document(self, doc: Document) -> None:
        if doc.tokens is None:
            logger.debug(f"Document {doc.id!r} is not tokenized, skipping span check")
            return
        for marking in doc.markings:
            if not span_in_text(doc, marking):
                logger.debug(f"Marking ({marking.start}, {marking.length}) lies outside of {doc.id!r}")
                continue
            surface = doc.surface(marking)
            if (
                surface != surface.strip()
                or self._cuts_token(doc, marking.start)
                or self._cuts_token(doc, marking.end)
            ):
                self.mark(marking, ErrorType.ERRONEOUS_SPAN)

    @staticmethod
    def _cuts_token(doc: Document, offset: int) -> bool:
        return any(t.start < offset < t.end for t in doc.tokens)
