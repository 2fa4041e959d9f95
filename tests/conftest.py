"""Shared fixtures for EAGLET tests."""

import json
import os
import tempfile
from typing import Callable, Dict, Iterator, List, Optional

import pytest
import requests

from eaglet.types import Document, ErrorType, Marking


# ---------------------------------------------------------------------------
# Sample data
# ---------------------------------------------------------------------------

HARDING_TEXT = (
    "Florence May Harding studied at a school in Sydney that is in Australia, "
    "and with Douglas Robert Dundas , but in effect had no formal training in "
    "either botany or art."
)

CARVILLE_TEXT = (
    "Such notables include James Carville, who was the senior political adviser "
    "to Bill Clinton, and Donna Brazile, the campaign manager of the 2000 "
    "presidential campaign of Vice-President Al Gore."
)

SENATOR_TEXT = "The senator received a Bachelor of Laws from the Columbia University."

TASK_1 = "http://www.ontologydesignpatterns.org/data/oke-challenge/task-1/"
DBPEDIA = "http://dbpedia.org/resource/"
DISAMBIGUATES = "http://dbpedia.org/ontology/wikiPageDisambiguates"


def span(text: str, surface: str) -> Dict[str, int]:
    start = text.index(surface)
    return {"start": start, "length": len(surface)}


def rdf_xml(subject: str, triples: List[tuple]) -> bytes:
    """Serialize (predicate, object-uri) pairs of one subject as RDF/XML."""
    lines = [
        '<?xml version="1.0" encoding="utf-8"?>',
        '<rdf:RDF xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#">',
        f'  <rdf:Description rdf:about="{subject}">',
    ]
    for predicate, obj in triples:
        cut = max(predicate.rfind("#"), predicate.rfind("/")) + 1
        namespace, local = predicate[:cut], predicate[cut:]
        lines.append(f'    <ns:{local} xmlns:ns="{namespace}" rdf:resource="{obj}"/>')
    lines.append("  </rdf:Description>")
    lines.append("</rdf:RDF>")
    return "\n".join(lines).encode("utf-8")


@pytest.fixture
def harding_document() -> Document:
    return Document(
        id="sentence-1",
        text=HARDING_TEXT,
        markings=[
            Marking(**span(HARDING_TEXT, "Florence May Harding"), uri=TASK_1 + "Florence_May_Harding"),
            Marking(**span(HARDING_TEXT, "school"), uri=TASK_1 + "National_Art_School"),
            Marking(start=44, length=27, uri=TASK_1 + "Sydney"),
            Marking(**span(HARDING_TEXT, "Douglas Robert Dundas"), uri=TASK_1 + "Douglas_Robert_Dundas"),
        ],
    )


@pytest.fixture
def carville_document() -> Document:
    return Document(
        id="sentence-2",
        text=CARVILLE_TEXT,
        markings=[
            Marking(**span(CARVILLE_TEXT, "James Carville"), uri=TASK_1 + "James_Carville"),
            Marking(**span(CARVILLE_TEXT, "Bill Clinton"), uri=TASK_1 + "Bill_Clinton"),
            Marking(**span(CARVILLE_TEXT, "Donna Brazile"), uri=TASK_1 + "Donna_Brazile"),
            Marking(**span(CARVILLE_TEXT, "campaign manager"), uri=TASK_1 + "Campaign_manager"),
            Marking(**span(CARVILLE_TEXT, "Al Gore"), uri=TASK_1 + "Al_Gore"),
        ],
    )


@pytest.fixture
def senator_document() -> Document:
    return Document(
        id="sentence-3",
        text=SENATOR_TEXT,
        markings=[
            Marking(**span(SENATOR_TEXT, "senator"), uri="http://aksws.org/notInWiki/Senator_1"),
            Marking(**span(SENATOR_TEXT, "Columbia University"), uri=DBPEDIA + "Columbia_University"),
        ],
    )


@pytest.fixture
def documents(harding_document, carville_document, senator_document) -> List[Document]:
    return [harding_document, carville_document, senator_document]


# ---------------------------------------------------------------------------
# HTTP doubles
# ---------------------------------------------------------------------------


class FakeResponse(requests.Response):
    """Response with a preloaded body that records whether it was closed."""

    def __init__(
        self,
        url: str,
        status_code: int = 200,
        content_type: Optional[str] = "application/rdf+xml",
        body: bytes = b"",
        transfer_error: Optional[Exception] = None,
    ):
        super().__init__()
        self.url = url
        self.status_code = status_code
        if content_type is not None:
            self.headers["Content-Type"] = content_type
        self._content = body
        self._content_consumed = True
        self.transfer_error = transfer_error
        self.closed = False

    @property
    def content(self):
        if self.transfer_error is not None:
            raise self.transfer_error
        return self._content

    def close(self):
        self.closed = True
        super().close()


class FakeSession:
    """Stands in for requests.Session, answering from a per-URI table."""

    def __init__(self, handlers: Optional[Dict[str, Callable[[str], FakeResponse]]] = None):
        self.handlers = handlers or {}
        self.requests: List[Dict] = []
        self.responses: List[FakeResponse] = []
        self.closed = False

    def add(self, uri: str, **kwargs) -> None:
        self.handlers[uri] = lambda url: FakeResponse(url, **kwargs)

    def add_error(self, uri: str, error: Exception) -> None:
        def raise_error(url: str) -> FakeResponse:
            raise error

        self.handlers[uri] = raise_error

    def get(self, url: str, headers=None, timeout=None, stream=False) -> FakeResponse:
        self.requests.append({"url": url, "headers": headers, "timeout": timeout, "stream": stream})
        if url not in self.handlers:
            raise requests.exceptions.ConnectionError(f"Failed to resolve host of {url}")
        response = self.handlers[url](url)
        self.responses.append(response)
        return response

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def entity_body() -> Callable[[str], bytes]:
    def build(uri: str) -> bytes:
        return rdf_xml(uri, [("http://www.w3.org/2000/01/rdf-schema#seeAlso", DBPEDIA + "Example")])

    return build


@pytest.fixture
def disambiguation_body() -> Callable[[str], bytes]:
    def build(uri: str) -> bytes:
        return rdf_xml(
            uri,
            [
                (DISAMBIGUATES, DBPEDIA + "Sydney"),
                (DISAMBIGUATES, DBPEDIA + "Sydney,_Nova_Scotia"),
            ],
        )

    return build


class MockUriChecker:
    """URI checker answering from a fixed table; unknown URIs are valid."""

    def __init__(self, results: Optional[Dict[str, ErrorType]] = None):
        self.results = results or {}
        self.calls: List[Optional[str]] = []
        self.closed = False

    def check_uri(self, uri: Optional[str]) -> ErrorType:
        self.calls.append(uri)
        if not uri:
            return ErrorType.INVALID_URI
        return self.results.get(uri, ErrorType.NO_ERROR)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def mock_uri_checker() -> MockUriChecker:
    return MockUriChecker(
        {
            "http://aksws.org/notInWiki/Senator_1": ErrorType.INVALID_URI,
            TASK_1 + "Campaign_manager": ErrorType.DISAMBIGUATION_URI,
        }
    )


# ---------------------------------------------------------------------------
# Temporary files
# ---------------------------------------------------------------------------


@pytest.fixture
def documents_jsonl() -> Iterator[str]:
    """JSONL file with the sample documents."""
    rows = [
        {
            "id": "sentence-1",
            "text": HARDING_TEXT,
            "markings": [
                {**span(HARDING_TEXT, "Florence May Harding"), "uri": TASK_1 + "Florence_May_Harding"},
                {"start": 44, "length": 27, "uri": TASK_1 + "Sydney"},
            ],
        },
        {
            "id": "sentence-3",
            "text": SENATOR_TEXT,
            "markings": [
                {**span(SENATOR_TEXT, "senator"), "uri": ""},
                {**span(SENATOR_TEXT, "Columbia University"), "uri": DBPEDIA + "Columbia_University"},
            ],
        },
    ]
    with tempfile.NamedTemporaryFile(mode="w", suffix=".jsonl", delete=False) as f:
        for row in rows:
            f.write(json.dumps(row) + "\n")
        path = f.name
    yield path
    os.unlink(path)


@pytest.fixture
def offline_config_dict() -> Dict:
    """Config that runs only checkers needing no network."""
    return {
        "loader": {"name": "jsonl"},
        "checkers": ["erroneous_span", "overlapping", "combined_tagging", "long_description"],
        "language": "en",
    }


@pytest.fixture
def temp_config_file(offline_config_dict: Dict) -> Iterator[str]:
    with tempfile.NamedTemporaryFile(mode="w", suffix=".json", delete=False) as f:
        json.dump(offline_config_dict, f)
        path = f.name
    yield path
    os.unlink(path)
