"""Load persisted guideline collections, falling back to the built-in seeds."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .errors import GuidelineLoadError
from .models import DocumentInput, GuidelineDocument, normalize_document
from .seeds import seed_documents
from .utils import generate_document_id

logger = logging.getLogger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}


def _parse(path: Path, raw: str) -> Any:
    if path.suffix.lower() in YAML_SUFFIXES:
        return yaml.safe_load(raw)
    return json.loads(raw)


def _documents_from_payload(payload: Any) -> list[GuidelineDocument]:
    if not isinstance(payload, list):
        raise GuidelineLoadError(
            f"expected a list of documents, got {type(payload).__name__}"
        )
    documents: list[GuidelineDocument] = []
    seen: set[str] = set()
    for index, entry in enumerate(payload):
        if not isinstance(entry, dict):
            raise GuidelineLoadError(f"entry {index} is not an object")
        try:
            data = DocumentInput.model_validate(entry, context={"persisted": True})
        except ValidationError as exc:
            raise GuidelineLoadError(f"entry {index} is invalid: {exc}") from exc
        doc_id = data.id or generate_document_id(seen)
        if doc_id in seen:
            raise GuidelineLoadError(f"duplicate document id {doc_id!r}")
        seen.add(doc_id)
        documents.append(normalize_document(data, doc_id=doc_id))
    return documents


def load_guidelines_file(path: Path) -> list[GuidelineDocument]:
    """Read and parse a JSON or YAML guideline file. Raises GuidelineLoadError."""
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise GuidelineLoadError(f"cannot read {path}: {exc}") from exc
    try:
        payload = _parse(path, raw)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise GuidelineLoadError(f"cannot parse {path}: {exc}") from exc
    return _documents_from_payload(payload)


def try_load_persisted(path: Path | None) -> list[GuidelineDocument] | None:
    """Return the persisted collection, or None when absent or unusable."""
    if path is None or not path.exists():
        return None
    try:
        documents = load_guidelines_file(path)
    except GuidelineLoadError as exc:
        logger.error("Error loading %s: %s", path, exc)
        return None
    logger.info("Loaded %d documents from %s", len(documents), path)
    return documents


def load_initial_documents(path: Path | None) -> list[GuidelineDocument]:
    documents = try_load_persisted(path)
    if documents is not None:
        return documents
    logger.info("Falling back to built-in seed documents")
    return seed_documents()


__all__ = ["load_guidelines_file", "load_initial_documents", "try_load_persisted"]
