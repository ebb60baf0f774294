"""Citation text and follow-up questions for query replies."""

from __future__ import annotations

from typing import Sequence

from .models import GuidelineDocument

RESPONSE_HEADER = "Based on American Heart Association (AHA) guidelines from the MCP server:"
EMPTY_QUERY_REPLY = "Please provide a search query."

GENERAL_QUESTION = "Would you like more information on this topic?"
EMOTIONAL_QUESTION = "Would you like to see support groups or resources for emotional support nearby?"
RELATED_TOPICS_QUESTION = "Would you like to explore any related topics or specific aspects in more detail?"

EMOTIONAL_KEYWORDS = (
    "stress",
    "anxiety",
    "worried",
    "fear",
    "depressed",
    "sad",
    "overwhelmed",
    "burden",
    "emotional",
    "mental",
    "coping",
    "support",
)

# First matching condition wins; the generic question covers everything else.
CONDITION_QUESTIONS: tuple[tuple[tuple[str, ...], str], ...] = (
    (
        ("heart failure", "hfref", "hfpef"),
        "Would you like me to suggest products or resources to help manage heart failure?",
    ),
    (
        ("arrhythmia", "afib", "atrial fibrillation", "svt", "bradycardia"),
        "Would you like information about monitoring devices or products for managing arrhythmias?",
    ),
    (
        ("chest pain", "angina"),
        "Would you like guidance on when to seek emergency care or monitoring tools?",
    ),
    (
        ("hypertension", "blood pressure", "high bp"),
        "Would you like suggestions for blood pressure monitors or lifestyle resources?",
    ),
)
GENERIC_CONDITION_QUESTION = (
    "Would you like me to suggest products or resources related to your question?"
)


def format_no_results(query: str) -> str:
    return (
        f'I couldn\'t find any AHA guidelines matching "{query}" in the MCP server '
        "database. Please try rephrasing your query or searching for a different topic."
    )


def generate_prompting_questions(
    query: str, results: Sequence[GuidelineDocument]
) -> list[str]:
    query_lower = query.lower()
    questions = [GENERAL_QUESTION]

    if any(keyword in query_lower for keyword in EMOTIONAL_KEYWORDS):
        questions.append(EMOTIONAL_QUESTION)

    for markers, question in CONDITION_QUESTIONS:
        if any(marker in query_lower for marker in markers):
            questions.append(question)
            break
    else:
        questions.append(GENERIC_CONDITION_QUESTION)

    if len(results) > 1:
        questions.append(RELATED_TOPICS_QUESTION)
    return questions


def join_questions(questions: Sequence[str]) -> str:
    """Merge questions into one offer: "A? B? Or c?"."""
    if not questions:
        return ""
    if len(questions) == 1:
        return questions[0]
    last = questions[-1].rstrip("?")
    last = last[:1].lower() + last[1:]
    return " ".join([*questions[:-1], f"Or {last}?"])


def format_response(
    query: str,
    results: Sequence[GuidelineDocument],
    total_matches: int | None = None,
) -> str:
    """Render the complete reply: excerpts, citations and follow-up questions."""
    if not results:
        return format_no_results(query)

    parts = [RESPONSE_HEADER, ""]
    for doc in results:
        parts.append(doc.content)
        parts.append("")
        parts.append(f"Source: {doc.citation}")
        parts.append("")
    if total_matches is not None and total_matches > len(results):
        parts.append(f"Showing {len(results)} of {total_matches} matching guidelines.")
        parts.append("")

    questions = generate_prompting_questions(query, results)
    parts.append("")
    parts.append("---")
    parts.append("")
    parts.append("I'd be happy to help you further. " + join_questions(questions))
    return "\n".join(parts)


__all__ = [
    "EMPTY_QUERY_REPLY",
    "RESPONSE_HEADER",
    "format_no_results",
    "format_response",
    "generate_prompting_questions",
    "join_questions",
]
