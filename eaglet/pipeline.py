import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

# Ensure component registration by importing modules with registry decorators.
from eaglet import errors as _errors_pkg  # noqa: F401
from eaglet import loaders as _loaders_pkg  # noqa: F401
from eaglet import uri as _uri_pkg  # noqa: F401

from .config import CheckerConfig
from .errors.base import ErrorChecker, apply_checkers
from .preprocessing import DocumentProcessor
from .registry import error_checkers, loaders, uri_checkers
from .types import Document, Marking
from .uri.base import UriChecker

logger = logging.getLogger(__name__)


def marking_to_dict(marking: Marking) -> Dict[str, Any]:
    partner = marking.partner
    return {
        "start": marking.start,
        "length": marking.length,
        "uri": marking.uri,
        "correction": marking.correction.value,
        "error": marking.error.value,
        "partner": (
            {"start": partner.start, "length": partner.length, "uri": partner.uri}
            if partner is not None
            else None
        ),
    }


class CheckingPipeline:
    """Loads documents, tokenizes them and runs the configured error checkers."""

    def __init__(self, config: CheckerConfig, uri_checker: Optional[UriChecker] = None) -> None:
        self.config = config

        loader_factory = loaders.get(config.loader.name)
        self.loader = loader_factory(**config.loader.params)

        self._owns_uri_checker = uri_checker is None
        self.uri_checker = uri_checker
        if self.uri_checker is None and config.uri_checker:
            uri_checker_factory = uri_checkers.get(config.uri_checker.name)
            self.uri_checker = uri_checker_factory(**config.uri_checker.params)

        try:
            self.checkers = self._build_checkers(config)
            self.preprocessor = DocumentProcessor(config.language) if config.preprocess else None
        except Exception:
            self.close()
            raise

    def _build_checkers(self, config: CheckerConfig) -> List[ErrorChecker]:
        checkers: List[ErrorChecker] = []
        for entry in config.checkers:
            factory = error_checkers.get(entry.name)
            if getattr(factory, "needs_uri_checker", False):
                if self.uri_checker is None:
                    raise ValueError(f"Checker '{entry.name}' requires a 'uri_checker' section.")
                checkers.append(factory(uri_checker=self.uri_checker, **entry.params))
            else:
                checkers.append(factory(**entry.params))
        return checkers

    def close(self) -> None:
        close = getattr(self.uri_checker, "close", None)
        if self._owns_uri_checker and close is not None:
            close()

    def check_documents(self, documents: Sequence[Document]) -> Sequence[Document]:
        if self.preprocessor:
            self.preprocessor.process(documents)
        apply_checkers(self.checkers, documents)
        return documents

    def document_result(self, doc: Document) -> Dict[str, Any]:
        return {
            "id": doc.id,
            "text": doc.text,
            "markings": [marking_to_dict(m) for m in doc.markings],
            "meta": doc.meta,
        }

    def run(self, paths: Iterable[str], output_path: Optional[str] = None) -> List[Dict[str, Any]]:
        documents: List[Document] = []
        for path in paths:
            documents.extend(self.loader.load(path))
        logger.info(f"Loaded {len(documents)} documents")

        self.check_documents(documents)
        results = [self.document_result(doc) for doc in documents]

        if output_path:
            with Path(output_path).open("w", encoding="utf-8") as writer:
                for result in results:
                    writer.write(json.dumps(result) + "\n")
        return results
