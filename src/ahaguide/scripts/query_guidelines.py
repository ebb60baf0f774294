"""Query the guideline store locally and print ranked matches with scores."""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import dataclass
from pathlib import Path

from ahaguide.config import get_settings
from ahaguide.errors import InvalidQueryError
from ahaguide.loader import load_initial_documents
from ahaguide.store import GuidelineStore
from ahaguide.utils import truncate_field

logger = logging.getLogger("ahaguide.query_guidelines")

PREVIEW_CHARS = 120


@dataclass
class QueryConfig:
    query: str
    limit: int
    guidelines: Path
    as_json: bool


def parse_args(argv: list[str] | None = None) -> QueryConfig:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Rank AHA guideline documents for a query.")
    parser.add_argument("query", help="Free-text query")
    parser.add_argument(
        "--limit",
        type=int,
        default=settings.result_limit,
        help="Maximum number of matches to print",
    )
    parser.add_argument(
        "--guidelines",
        type=Path,
        default=settings.guidelines_path,
        help="JSON or YAML guideline file (falls back to the built-in seeds)",
    )
    parser.add_argument("--json", dest="as_json", action="store_true", help="Emit JSON lines")
    args = parser.parse_args(argv)
    return QueryConfig(
        query=args.query,
        limit=max(1, args.limit),
        guidelines=args.guidelines,
        as_json=args.as_json,
    )


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s:%(name)s:%(message)s")
    cfg = parse_args(argv)
    store = GuidelineStore(
        load_initial_documents(cfg.guidelines),
        weights=get_settings().score_weights,
    )
    try:
        matches = store.search_scored(cfg.query)
    except InvalidQueryError as exc:
        logger.error("%s", exc)
        return 2
    if not matches:
        print(f"No guidelines matched {cfg.query!r}")
        return 1

    for match in matches[: cfg.limit]:
        doc = match.document
        if cfg.as_json:
            print(json.dumps({"id": doc.id, "score": match.score, "title": doc.title}))
        else:
            print(f"{match.score:4d}  {doc.id}  {doc.title}")
            print(f"      {truncate_field(doc.content, PREVIEW_CHARS)}")
    if not cfg.as_json:
        print(f"{len(matches)} matching guideline(s)")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
