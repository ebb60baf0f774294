from __future__ import annotations

import pytest

from ahaguide.errors import InvalidQueryError
from ahaguide.formatting import EMPTY_QUERY_REPLY, RESPONSE_HEADER
from ahaguide.mcp.service import GuidelineService
from ahaguide.seeds import seed_documents
from ahaguide.store import GuidelineStore


def _service(limit: int = 5) -> GuidelineService:
    return GuidelineService(GuidelineStore(seed_documents()), limit=limit)


def test_query_truncates_to_prefix_of_full_ranking() -> None:
    service = _service()
    outcome = service.query("guideline")
    full = service.store.search("guideline")
    assert outcome.total_matches == len(full) == 6
    assert outcome.results == full[:5]


@pytest.mark.parametrize("limit", [1, 2, 5, 10])
def test_results_are_always_a_prefix(limit: int) -> None:
    service = _service(limit)
    outcome = service.query("beta-blockers")
    full = service.store.search("beta-blockers")
    assert outcome.results == full[:limit]
    assert outcome.total_matches == len(full)


def test_no_match_is_an_outcome_not_an_error() -> None:
    outcome = _service().query("xyzxyz-no-match")
    assert outcome.has_matches is False
    assert outcome.total_matches == 0
    assert outcome.results == []


def test_query_is_stripped_before_search() -> None:
    outcome = _service().query("  heart failure  ")
    assert outcome.query == "heart failure"
    assert outcome.results[0].id == "aha-001"


@pytest.mark.parametrize("query", ["", "   ", None])
def test_blank_query_raises(query) -> None:
    with pytest.raises(InvalidQueryError):
        _service().query(query)


def test_answer_for_blank_query_asks_for_input() -> None:
    assert _service().answer("  ") == EMPTY_QUERY_REPLY


def test_answer_for_no_match_mentions_query() -> None:
    text = _service().answer("xyzxyz-no-match")
    assert text.startswith("I couldn't find any AHA guidelines matching \"xyzxyz-no-match\"")


def test_answer_cites_top_results() -> None:
    text = _service().answer("heart failure")
    assert text.startswith(RESPONSE_HEADER)
    assert "Source: 2024 AHA/ACC/HFSA Heart Failure Guideline - AHA/ACC/HFSA (2024)" in text


def test_answer_reports_truncated_count() -> None:
    assert "Showing 5 of 6 matching guidelines." in _service().answer("guideline")


def test_added_documents_flow_through_the_facade() -> None:
    service = _service()
    doc = service.add_document({"title": "Lipid management", "content": "Statin intensity by LDL."})
    assert service.get_document(doc.id) == doc
    assert service.query("statin").results == [doc]
    assert len(service.list_documents()) == 7


def test_limit_must_be_positive() -> None:
    with pytest.raises(ValueError):
        GuidelineService(GuidelineStore(), limit=0)
