"""In-memory guideline store with lexical search."""

from __future__ import annotations

import logging
import threading
from typing import Any, Iterable, Mapping

from .config import Settings
from .errors import InvalidQueryError
from .loader import load_initial_documents
from .models import DocumentInput, GuidelineDocument, ScoringWeights, normalize_document
from .scoring import DEFAULT_WEIGHTS, ScoredMatch, rank_documents
from .utils import generate_document_id

logger = logging.getLogger(__name__)


class GuidelineStore:
    """Insertion-ordered guideline collection that owns the ranking entry point."""

    def __init__(
        self,
        documents: Iterable[GuidelineDocument] | None = None,
        *,
        weights: ScoringWeights | None = None,
    ) -> None:
        self.weights = weights or DEFAULT_WEIGHTS
        self._documents: list[GuidelineDocument] = []
        self._ids: set[str] = set()
        self._lock = threading.Lock()
        for doc in documents or ():
            if doc.id in self._ids:
                raise ValueError(f"duplicate document id {doc.id!r}")
            self._documents.append(doc)
            self._ids.add(doc.id)

    @classmethod
    def from_settings(cls, settings: Settings) -> "GuidelineStore":
        store = cls(
            load_initial_documents(settings.guidelines_path),
            weights=settings.score_weights,
        )
        logger.info("Document store initialized with %d documents", len(store))
        return store

    def __len__(self) -> int:
        return len(self._documents)

    # ---- Writes ----------------------------------------------------------
    def add_document(self, data: DocumentInput | Mapping[str, Any]) -> GuidelineDocument:
        """
        Validate, default and append a document.

        Raises pydantic.ValidationError when title or content is missing or
        blank, and ValueError when an explicit id is already taken.
        """
        if not isinstance(data, DocumentInput):
            data = DocumentInput.model_validate(data)
        with self._lock:
            if data.id is not None and data.id in self._ids:
                raise ValueError(f"document id {data.id!r} already exists")
            doc_id = data.id or generate_document_id(self._ids)
            doc = normalize_document(data, doc_id=doc_id)
            self._documents.append(doc)
            self._ids.add(doc.id)
        logger.info("Added document %s (%s)", doc.id, doc.title)
        return doc

    # ---- Reads -----------------------------------------------------------
    def get_document_by_id(self, doc_id: str) -> GuidelineDocument | None:
        for doc in self._documents:
            if doc.id == doc_id:
                return doc
        return None

    def get_all_documents(self) -> tuple[GuidelineDocument, ...]:
        return tuple(self._documents)

    def search_scored(self, query: str) -> list[ScoredMatch]:
        if not query or not query.strip():
            raise InvalidQueryError("query must not be empty")
        return rank_documents(self.get_all_documents(), query, self.weights)

    def search(self, query: str) -> list[GuidelineDocument]:
        """Return matching documents ordered by descending relevance."""
        return [match.document for match in self.search_scored(query)]


__all__ = ["GuidelineStore"]
