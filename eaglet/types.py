from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorType(str, Enum):
    """Error classification attached to a marking."""

    NO_ERROR = "NO_ERROR"
    INVALID_URI = "INVALID_URI"
    DISAMBIGUATION_URI = "DISAMBIGUATION_URI"
    LONG_DESCRIPTION = "LONG_DESCRIPTION"
    COMBINED_TAGGING = "COMBINED_TAGGING"
    OVERLAPPING = "OVERLAPPING"
    ERRONEOUS_SPAN = "ERRONEOUS_SPAN"


class Correction(str, Enum):
    """Gold-standard correction for a marking."""

    KEEP = "KEEP"
    DELETE = "DELETE"
    CHANGE = "CHANGE"


@dataclass
class Token:
    """Token boundaries produced by preprocessing."""

    start: int
    end: int
    text: str
    is_stop: bool = False
    is_punct: bool = False


@dataclass
class Marking:
    """Annotated span pointing at a knowledge-base URI."""

    start: int
    length: int
    uri: Optional[str] = None
    correction: Correction = Correction.KEEP
    error: ErrorType = ErrorType.NO_ERROR
    partner: Optional["Marking"] = field(default=None, compare=False, repr=False)

    @property
    def end(self) -> int:
        return self.start + self.length

    def overlaps(self, other: "Marking") -> bool:
        return self.start < other.end and other.start < self.end

    def classify(self, error: ErrorType, partner: Optional["Marking"] = None) -> bool:
        """
        Record an error for this marking.

        The first rule to classify a marking wins: once the error is anything
        other than NO_ERROR, later classifications are ignored.

        Returns:
            True if the classification was applied
        """
        if self.error is not ErrorType.NO_ERROR:
            return False
        self.error = error
        self.partner = partner
        return True


@dataclass
class Document:
    """Text with its markings."""

    id: Optional[str]
    text: str
    markings: List[Marking] = field(default_factory=list)
    meta: Dict[str, Any] = field(default_factory=dict)
    tokens: Optional[List[Token]] = None

    def surface(self, marking: Marking) -> str:
        return self.text[marking.start:marking.end]

    def tokens_in(self, start: int, end: int) -> List[Token]:
        """Tokens overlapping the character range [start, end)."""
        if self.tokens is None:
            return []
        return [t for t in self.tokens if t.start < end and start < t.end]
