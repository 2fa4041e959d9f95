"""
Document preprocessing.

Tokenizes document text with a blank spaCy pipeline so that error
checkers can reason about token boundaries. Spans are not modified.
"""

import logging
from typing import Sequence

import spacy

from eaglet.types import Document, Token

logger = logging.getLogger(__name__)


class DocumentProcessor:
    """Attaches tokens to documents."""

    def __init__(self, language: str = "en"):
        self.nlp = spacy.blank(language)

    def process_document(self, doc: Document) -> Document:
        spacy_doc = self.nlp.make_doc(doc.text)
        doc.tokens = [
            Token(
                start=t.idx,
                end=t.idx + len(t.text),
                text=t.text,
                is_stop=t.is_stop,
                is_punct=t.is_punct,
            )
            for t in spacy_doc
            if not t.is_space
        ]
        return doc

    def process(self, documents: Sequence[Document]) -> None:
        for doc in documents:
            self.process_document(doc)
        logger.debug(f"Tokenized {len(documents)} documents")
