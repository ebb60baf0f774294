"""Query façade shared by the MCP host, the REST app and the CLI."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from ..config import Settings
from ..errors import InvalidQueryError
from ..formatting import EMPTY_QUERY_REPLY, format_no_results, format_response
from ..models import DocumentInput, GuidelineDocument, QueryOutcome
from ..store import GuidelineStore

logger = logging.getLogger(__name__)

DEFAULT_RESULT_LIMIT = 5


class GuidelineService:
    """Validates queries, ranks through the injected store and caps the results."""

    def __init__(self, store: GuidelineStore, *, limit: int = DEFAULT_RESULT_LIMIT) -> None:
        if limit < 1:
            raise ValueError("limit must be positive")
        self.store = store
        self.limit = limit

    @classmethod
    def from_settings(cls, settings: Settings) -> "GuidelineService":
        return cls(GuidelineStore.from_settings(settings), limit=settings.result_limit)

    def query(self, query: str) -> QueryOutcome:
        """
        Rank the store for ``query`` and keep the top ``limit`` documents.

        ``total_matches`` counts the untruncated ranking; zero means no match,
        which is not an error. Blank queries raise InvalidQueryError.
        """
        cleaned = (query or "").strip()
        if not cleaned:
            raise InvalidQueryError("query must not be empty")
        ranked = self.store.search(cleaned)
        logger.debug("query %r matched %d documents", cleaned, len(ranked))
        return QueryOutcome(
            query=cleaned,
            total_matches=len(ranked),
            results=ranked[: self.limit],
        )

    def answer(self, query: str) -> str:
        """Return the complete text reply for a tool caller."""
        try:
            outcome = self.query(query)
        except InvalidQueryError:
            return EMPTY_QUERY_REPLY
        if not outcome.has_matches:
            return format_no_results(outcome.query)
        return format_response(outcome.query, outcome.results, outcome.total_matches)

    def add_document(self, data: DocumentInput | Mapping[str, Any]) -> GuidelineDocument:
        return self.store.add_document(data)

    def get_document(self, doc_id: str) -> GuidelineDocument | None:
        return self.store.get_document_by_id(doc_id)

    def list_documents(self) -> tuple[GuidelineDocument, ...]:
        return self.store.get_all_documents()


__all__ = ["DEFAULT_RESULT_LIMIT", "GuidelineService"]
