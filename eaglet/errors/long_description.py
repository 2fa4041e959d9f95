import logging
from typing import FrozenSet, Iterable, Optional

from eaglet.errors.base import DocumentErrorChecker, span_in_text
from eaglet.registry import error_checkers
from eaglet.types import Document, ErrorType

logger = logging.getLogger(__name__)

# Lowercase words that legitimately occur inside names ("Bank of England").
NAME_CONNECTORS: FrozenSet[str] = frozenset(
    {
        "of", "the", "and", "for", "on", "upon", "at",
        "de", "del", "della", "der", "den", "des", "di", "da", "do", "dos", "du",
        "la", "le", "van", "von", "y",
    }
)


@error_checkers.register("long_description")
class LongDescriptionChecker(DocumentErrorChecker):
    """
    Flags markings that cover a description instead of a name.

    A marking such as "Sydney that is in Australia" contains lowercase
    function words which never appear inside an entity name. Requires a
    preprocessed (tokenized) document.
    """

    def __init__(self, connectors: Optional[Iterable[str]] = None):
        self.connectors = frozenset(connectors) if connectors is not None else NAME_CONNECTORS

    def check_document(self, doc: Document) -> None:
        if doc.tokens is None:
            logger.debug(f"Document {doc.id!r} is not tokenized, skipping long description check")
            return
        for marking in doc.markings:
            if not span_in_text(doc, marking):
                continue
            tokens = doc.tokens_in(marking.start, marking.end)
            for token in tokens[1:]:
                if token.is_stop and token.text.islower() and token.text not in self.connectors:
                    self.mark(marking, ErrorType.LONG_DESCRIPTION)
                    break
