from __future__ import annotations

import pytest

from ahaguide.errors import InvalidQueryError
from ahaguide.models import GuidelineDocument, ScoringWeights
from ahaguide.scoring import rank_documents, score_document, tokenize


def _doc(doc_id: str, title: str, content: str, keywords: tuple[str, ...] = ()) -> GuidelineDocument:
    return GuidelineDocument(id=doc_id, title=title, content=content, year=2024, keywords=keywords)


def test_tokenize_lowercases_and_drops_short_terms() -> None:
    assert tokenize("The  Heart failure of a PATIENT") == ["the", "heart", "failure", "patient"]


def test_tokenize_keeps_duplicates() -> None:
    assert tokenize("afib afib") == ["afib", "afib"]


def test_score_counts_terms_and_phrase_bonuses() -> None:
    doc = _doc("d1", "Heart Failure", "Heart failure care pathways", keywords=("HF",))
    # heart: 10 + 3, failure: 10 + 3, phrase in title 15, phrase in content 8
    assert score_document(doc, "heart failure") == 49


def test_keyword_match_is_substring() -> None:
    doc = _doc("d1", "Atrial guideline", "Stroke risk scoring", keywords=("CHA2DS2-VASc",))
    assert score_document(doc, "vasc") == 5


def test_keyword_bonus_counted_once_per_term() -> None:
    doc = _doc("d1", "Other", "Nothing here", keywords=("beta-blockers", "beta agonists"))
    assert score_document(doc, "beta") == 5


def test_duplicate_terms_score_twice() -> None:
    doc = _doc("d1", "heart", "unrelated")
    assert score_document(doc, "heart heart") == 20


def test_phrase_bonus_applies_even_without_surviving_terms() -> None:
    doc = _doc("d1", "Other", "one of a kind")
    assert tokenize("of a") == []
    assert score_document(doc, "of a") == 8


def test_custom_weights_are_honoured() -> None:
    doc = _doc("d1", "Heart", "heart")
    weights = ScoringWeights(title_term=1, content_term=1, title_phrase=0, content_phrase=0)
    assert score_document(doc, "heart", weights) == 2


def test_min_term_length_is_configurable() -> None:
    weights = ScoringWeights(min_term_length=2)
    assert tokenize("av block", weights.min_term_length) == ["av", "block"]


def test_rank_drops_zero_scores_and_orders_descending() -> None:
    docs = [
        _doc("a", "Unrelated", "nothing"),
        _doc("b", "Pacemaker basics", "pacing"),
        _doc("c", "Other", "pacemaker follow-up"),
    ]
    ranked = rank_documents(docs, "pacemaker")
    assert [match.document.id for match in ranked] == ["b", "c"]
    assert ranked[0].score > ranked[1].score > 0


def test_rank_keeps_insertion_order_for_ties() -> None:
    docs = [
        _doc("first", "Doc one", "Ablation after a failed catheter trial."),
        _doc("title-hit", "Catheter ablation", "Procedure notes."),
        _doc("second", "Doc two", "Ablation is offered when catheter access is possible."),
    ]
    ranked = rank_documents(docs, "catheter ablation")
    assert [match.document.id for match in ranked] == ["title-hit", "first", "second"]
    assert ranked[1].score == ranked[2].score == 6


@pytest.mark.parametrize("query", ["", "   ", "\t\n"])
def test_rank_rejects_blank_query(query: str) -> None:
    with pytest.raises(InvalidQueryError):
        rank_documents([_doc("a", "Title", "Content")], query)
