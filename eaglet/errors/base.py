"""
Common contract for error checkers.

A checker scans a batch of documents and classifies markings in place.
Classification goes through Marking.classify, so the first checker to
flag a marking keeps it; the order of the checker list is the priority.
"""

import logging
from typing import Iterable, Optional, Protocol, Sequence

from eaglet.types import Document, ErrorType, Marking

logger = logging.getLogger(__name__)


class ErrorChecker(Protocol):
    """Classifies the markings of a document batch."""

    def check(self, documents: Sequence[Document]) -> None:
        ...


class DocumentErrorChecker:
    """
    Base class for checkers that look at one document at a time.

    Subclasses implement check_document. A document that cannot be handled
    is skipped and logged instead of aborting the batch.
    """

    def check(self, documents: Sequence[Document]) -> None:
        for doc in documents:
            try:
                self.check_document(doc)
            except (ValueError, IndexError) as e:
                logger.warning(
                    f"{type(self).__name__} skipped document {doc.id!r}: {e}"
                )

    def check_document(self, doc: Document) -> None:
        raise NotImplementedError

    def mark(self, marking: Marking, error: ErrorType, partner: Optional[Marking] = None) -> None:
        if not marking.classify(error, partner):
            logger.debug(
                f"{type(self).__name__} did not overwrite {marking.error.value} "
                f"with {error.value} for span ({marking.start}, {marking.length})"
            )


def span_in_text(doc: Document, marking: Marking) -> bool:
    return 0 <= marking.start and marking.length > 0 and marking.end <= len(doc.text)


def apply_checkers(checkers: Iterable[ErrorChecker], documents: Sequence[Document]) -> None:
    """Run each checker over the whole batch, in order."""
    for checker in checkers:
        logger.debug(f"Running {type(checker).__name__} on {len(documents)} documents")
        checker.check(documents)
