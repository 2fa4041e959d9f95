"""
Retrieval of RDF descriptions for knowledge-base URIs.

The fetcher issues a single GET per URI, negotiates an RDF serialization
through the Accept header and parses the body with rdflib. Every failure
is returned as a FetchFailure value instead of being raised.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple, Union
from urllib.parse import urlparse

import requests
from rdflib import Dataset, Graph

logger = logging.getLogger(__name__)

RDF_XML = "application/rdf+xml"

DEFAULT_TIMEOUT: Tuple[float, float] = (10.0, 30.0)

# Media type -> rdflib parser name
CONTENT_TYPE_FORMATS: Dict[str, str] = {
    "application/rdf+xml": "xml",
    "text/turtle": "turtle",
    "application/x-turtle": "turtle",
    "application/n-triples": "nt",
    "text/plain": "nt",
    "text/n3": "n3",
    "text/rdf+n3": "n3",
    "application/ld+json": "json-ld",
    "application/n-quads": "nquads",
    "application/trig": "trig",
    "application/trix": "trix",
}

# Formats whose statements may live in named graphs
QUAD_FORMATS = frozenset({"nquads", "trig", "trix"})


class FetchFailureReason(str, Enum):
    MALFORMED = "MALFORMED"
    NETWORK_UNREACHABLE = "NETWORK_UNREACHABLE"
    TIMEOUT = "TIMEOUT"
    BAD_STATUS = "BAD_STATUS"
    UNSUPPORTED_CONTENT_TYPE = "UNSUPPORTED_CONTENT_TYPE"
    PARSE_ERROR = "PARSE_ERROR"
    EMPTY_MODEL = "EMPTY_MODEL"


@dataclass
class FetchFailure:
    """Terminal failure to resolve a URI."""

    reason: FetchFailureReason
    uri: Optional[str]
    status_code: Optional[int] = None
    detail: str = ""


@dataclass
class ParsedModel:
    """RDF graph retrieved for a URI."""

    uri: str
    graph: Graph
    content_type: str


FetchResult = Union[ParsedModel, FetchFailure]


def rdf_format_for(content_type: Optional[str]) -> Optional[str]:
    """Map a Content-Type header value to an rdflib format name."""
    if not content_type:
        return None
    media_type = content_type.split(";", 1)[0].strip().lower()
    return CONTENT_TYPE_FORMATS.get(media_type)


def parse_model(body: bytes, rdf_format: str, uri: str) -> Graph:
    """
    Parse a response body into a single graph.

    Quad formats are read into a Dataset and flattened, so statements from
    every named graph end up in the returned graph.
    """
    if rdf_format not in QUAD_FORMATS:
        graph = Graph()
        graph.parse(data=body, format=rdf_format, publicID=uri)
        return graph

    dataset = Dataset()
    dataset.parse(data=body, format=rdf_format, publicID=uri)
    graph = Graph()
    for s, p, o, _ in dataset.quads((None, None, None, None)):
        graph.add((s, p, o))
    return graph


def is_absolute_http_uri(uri: str) -> bool:
    try:
        parsed = urlparse(uri)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


class RdfResourceFetcher:
    """
    Fetches and parses the RDF representation of a URI.

    The HTTP session can be shared between many fetches. A session passed
    in by the caller is never closed by the fetcher; a session created here
    is released by close().
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        accept: str = RDF_XML,
        timeout: Tuple[float, float] = DEFAULT_TIMEOUT,
        user_agent: Optional[str] = None,
    ):
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()
        self.accept = accept
        self.timeout = tuple(timeout)
        self.user_agent = user_agent

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "RdfResourceFetcher":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": self.accept, "Accept-Charset": "UTF-8"}
        if self.user_agent:
            headers["User-Agent"] = self.user_agent
        return headers

    def fetch(self, uri: Optional[str]) -> FetchResult:
        if not uri or not is_absolute_http_uri(uri):
            logger.info(f"Not requesting malformed URI \"{uri}\"")
            return FetchFailure(
                FetchFailureReason.MALFORMED, uri, detail="not an absolute http(s) URI"
            )

        try:
            response = self.session.get(
                uri, headers=self._headers(), timeout=self.timeout, stream=True
            )
        except requests.exceptions.Timeout as e:
            logger.error(f"Requesting the model of \"{uri}\" timed out: {e}")
            return FetchFailure(FetchFailureReason.TIMEOUT, uri, detail=str(e))
        except (
            requests.exceptions.InvalidURL,
            requests.exceptions.MissingSchema,
            requests.exceptions.InvalidSchema,
        ) as e:
            logger.info(f"Request for \"{uri}\" rejected as malformed: {e}")
            return FetchFailure(FetchFailureReason.MALFORMED, uri, detail=str(e))
        except requests.exceptions.TooManyRedirects as e:
            status = e.response.status_code if e.response is not None else None
            logger.warning(f"Too many redirects while requesting \"{uri}\"")
            return FetchFailure(
                FetchFailureReason.BAD_STATUS, uri, status_code=status, detail=str(e)
            )
        except requests.exceptions.ConnectionError as e:
            logger.info(f"Couldn't connect to the host of \"{uri}\": {e}")
            return FetchFailure(FetchFailureReason.NETWORK_UNREACHABLE, uri, detail=str(e))
        except requests.exceptions.RequestException as e:
            logger.error(f"Exception while sending request to \"{uri}\": {e}")
            return FetchFailure(FetchFailureReason.NETWORK_UNREACHABLE, uri, detail=str(e))

        with response:
            return self._read_model(uri, response)

    def _read_model(self, uri: str, response: requests.Response) -> FetchResult:
        status = response.status_code
        if status < 200 or status >= 300:
            logger.warning(f"Response of \"{uri}\" has the wrong status ({status})")
            return FetchFailure(FetchFailureReason.BAD_STATUS, uri, status_code=status)

        content_type = response.headers.get("Content-Type")
        if not content_type:
            logger.error(f"The response of \"{uri}\" did not contain a content type header")
            return FetchFailure(FetchFailureReason.UNSUPPORTED_CONTENT_TYPE, uri, status_code=status)

        rdf_format = rdf_format_for(content_type)
        if rdf_format is None:
            logger.error(
                f"Couldn't find an RDF language for the content type \"{content_type}\" of \"{uri}\""
            )
            return FetchFailure(
                FetchFailureReason.UNSUPPORTED_CONTENT_TYPE,
                uri,
                status_code=status,
                detail=content_type,
            )

        try:
            body = response.content
        except requests.exceptions.RequestException as e:
            logger.error(f"Transfer of \"{uri}\" was interrupted: {e}")
            return FetchFailure(FetchFailureReason.TIMEOUT, uri, status_code=status, detail=str(e))

        try:
            graph = parse_model(body, rdf_format, uri)
        except Exception as e:
            logger.error(f"Couldn't parse the response for \"{uri}\" as {rdf_format}: {e}")
            return FetchFailure(FetchFailureReason.PARSE_ERROR, uri, status_code=status, detail=str(e))

        if len(graph) == 0:
            logger.info(f"The model of \"{uri}\" is empty")
            return FetchFailure(FetchFailureReason.EMPTY_MODEL, uri, status_code=status)

        return ParsedModel(uri=uri, graph=graph, content_type=content_type)
