"""Lexical relevance scoring and stable ranking for guideline documents."""

from __future__ import annotations

from typing import Iterable, NamedTuple, Sequence

from .errors import InvalidQueryError
from .models import GuidelineDocument, ScoringWeights

DEFAULT_WEIGHTS = ScoringWeights()


class ScoredMatch(NamedTuple):
    document: GuidelineDocument
    score: int


def tokenize(query: str, min_length: int = DEFAULT_WEIGHTS.min_term_length) -> list[str]:
    """
    Lower-case and split on whitespace, keeping terms of at least ``min_length``.

    Duplicate terms are kept; each occurrence scores on its own.
    """
    return [term for term in query.lower().split() if len(term) >= min_length]


def score_document(
    doc: GuidelineDocument,
    query: str,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
    terms: Sequence[str] | None = None,
) -> int:
    query_lower = query.lower()
    if terms is None:
        terms = tokenize(query, weights.min_term_length)
    title = doc.title.lower()
    content = doc.content.lower()
    keywords = [keyword.lower() for keyword in doc.keywords]

    score = 0
    for term in terms:
        if term in title:
            score += weights.title_term
        if term in content:
            score += weights.content_term
        if any(term in keyword for keyword in keywords):
            score += weights.keyword_term

    # whole-query phrase bonus, once per document
    if query_lower in title:
        score += weights.title_phrase
    if query_lower in content:
        score += weights.content_phrase
    return score


def sort_matches(matches: Iterable[ScoredMatch]) -> list[ScoredMatch]:
    # sorted() is stable with reverse=True, so equal scores keep insertion order
    return sorted(matches, key=lambda match: match.score, reverse=True)


def rank_documents(
    documents: Iterable[GuidelineDocument],
    query: str,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> list[ScoredMatch]:
    """Score every document, drop non-matches and order by descending score."""
    if not query or not query.strip():
        raise InvalidQueryError("query must not be empty")
    terms = tokenize(query, weights.min_term_length)
    scored = (
        ScoredMatch(doc, score_document(doc, query, weights, terms))
        for doc in documents
    )
    return sort_matches(match for match in scored if match.score > 0)


__all__ = [
    "DEFAULT_WEIGHTS",
    "ScoredMatch",
    "rank_documents",
    "score_document",
    "sort_matches",
    "tokenize",
]
