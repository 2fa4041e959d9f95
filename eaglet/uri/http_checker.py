import logging
from typing import Optional, Tuple, Union

import requests
from rdflib import URIRef

from eaglet.registry import uri_checkers
from eaglet.types import ErrorType
from eaglet.uri.fetcher import (
    DEFAULT_TIMEOUT,
    RDF_XML,
    FetchFailure,
    RdfResourceFetcher,
)

logger = logging.getLogger(__name__)

DISAMBIGUATION_PROPERTY = URIRef("http://dbpedia.org/ontology/wikiPageDisambiguates")


@uri_checkers.register("http")
class HttpBasedUriChecker:
    """
    Dereferences a URI and inspects its RDF description.

    A URI is INVALID_URI when it cannot be resolved to a non-empty model,
    DISAMBIGUATION_URI when the model states that the URI disambiguates to
    other resources, and NO_ERROR otherwise.
    """

    def __init__(
        self,
        fetcher: Optional[RdfResourceFetcher] = None,
        session: Optional[requests.Session] = None,
        disambiguation_property: Union[str, URIRef] = DISAMBIGUATION_PROPERTY,
        accept: str = RDF_XML,
        timeout: Tuple[float, float] = DEFAULT_TIMEOUT,
        user_agent: Optional[str] = None,
    ):
        if fetcher is None:
            fetcher = RdfResourceFetcher(
                session=session, accept=accept, timeout=timeout, user_agent=user_agent
            )
        self.fetcher = fetcher
        self.disambiguation_property = URIRef(str(disambiguation_property))

    def close(self) -> None:
        self.fetcher.close()

    def __enter__(self) -> "HttpBasedUriChecker":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def check_uri(self, uri: Optional[str]) -> ErrorType:
        if not uri:
            logger.info(f"INVALID_URI \"{uri}\"")
            return ErrorType.INVALID_URI

        result = self.fetcher.fetch(uri)
        if isinstance(result, FetchFailure):
            logger.info(f"INVALID_URI \"{uri}\" because of {result.reason.value}")
            return ErrorType.INVALID_URI

        entity = URIRef(uri)
        if (entity, self.disambiguation_property, None) in result.graph:
            logger.info(f"DISAMBIGUATION_URI \"{uri}\"")
            return ErrorType.DISAMBIGUATION_URI
        return ErrorType.NO_ERROR
