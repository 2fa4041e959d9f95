from eaglet.errors.base import DocumentErrorChecker, span_in_text
from eaglet.registry import error_checkers
from eaglet.types import Document, ErrorType


@error_checkers.register("combined_tagging")
class CombinedTaggingChecker(DocumentErrorChecker):
    """
    Flags neighbouring markings that should have been one marking.

    Two capitalized markings separated only by whitespace ("Bill" "Clinton")
    are classified together, each one partnered with the other.
    """

    def check_document(self, doc: Document) -> None:
        markings = sorted(
            (m for m in doc.markings if span_in_text(doc, m)),
            key=lambda m: (m.start, m.length),
        )
        for first, second in zip(markings, markings[1:]):
            if first.end > second.start:
                continue
            gap = doc.text[first.end:second.start]
            if not gap or not gap.isspace():
                continue
            if doc.text[first.start].isupper() and doc.text[second.start].isupper():
                self.mark(first, ErrorType.COMBINED_TAGGING, second)
                self.mark(second, ErrorType.COMBINED_TAGGING, first)
