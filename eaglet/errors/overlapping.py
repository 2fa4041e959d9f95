from eaglet.errors.base import DocumentErrorChecker, span_in_text
from eaglet.registry import error_checkers
from eaglet.types import Document, ErrorType


@error_checkers.register("overlapping")
class OverlappingChecker(DocumentErrorChecker):
    """Flags pairs of markings whose spans partially overlap."""

    def check_document(self, doc: Document) -> None:
        markings = [m for m in doc.markings if span_in_text(doc, m)]
        for i, first in enumerate(markings):
            for second in markings[i + 1:]:
                if (first.start, first.length) == (second.start, second.length):
                    continue
                if first.overlaps(second):
                    self.mark(first, ErrorType.OVERLAPPING, second)
                    self.mark(second, ErrorType.OVERLAPPING, first)
