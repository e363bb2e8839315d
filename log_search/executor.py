"""Search execution: submit a query to the backend and map the hits."""

import json
import logging
from dataclasses import dataclass, field

from elasticsearch import ApiError, TransportError

from log_search.query import QueryDescription, SearchWindow, to_native_query

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Document:
    id: str
    body: str


@dataclass(frozen=True)
class SearchResult:
    documents: list[Document] = field(default_factory=list)
    total: int | None = None

    @property
    def hit_count(self) -> int:
        return len(self.documents)


@dataclass(frozen=True)
class SearchError:
    message: str
    cause: Exception | None = None


def _document_from_hit(hit: dict) -> Document:
    # source may be disabled or filtered out; such a hit renders as null
    return Document(
        id=str(hit.get("_id", "")),
        body=json.dumps(hit.get("_source"), ensure_ascii=False),
    )


def _total_from_hits(hits: dict) -> int | None:
    total = hits.get("total")
    if isinstance(total, dict):
        return total.get("value")
    if isinstance(total, int):
        return total
    return None


class SearchExecutor:
    """Runs queries against a connected search client.

    The client is only ever read from; one request is in flight at a time.
    Failures come back as a SearchError value instead of an exception.
    """

    def __init__(self, client):
        self._client = client

    def execute(self, index: str, query: QueryDescription,
                window: SearchWindow) -> SearchResult | SearchError:
        native = to_native_query(query)
        logger.debug("Searching %s from=%d size=%d query=%s",
                     index, window.offset, window.limit, native)
        try:
            response = self._client.search(
                index=index,
                query=native,
                from_=window.offset,
                size=window.limit,
            )
        except (ApiError, TransportError) as e:
            logger.warning("Search on %s failed: %s", index, e)
            return SearchError(message=str(e), cause=e)

        try:
            hits = response["hits"]
            documents = [_document_from_hit(h) for h in hits["hits"]]
        except (KeyError, TypeError, AttributeError) as e:
            logger.warning("Malformed search response from %s: %r", index, e)
            return SearchError(message=f"malformed search response: {e!r}", cause=e)

        documents = documents[:window.limit]
        logger.info("Search on %s returned %d hit(s)", index, len(documents))
        return SearchResult(documents=documents, total=_total_from_hits(hits))
