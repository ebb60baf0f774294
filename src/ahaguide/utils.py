"""Shared helpers for document ids and text truncation."""

from __future__ import annotations

import time
from typing import Container

ID_PREFIX = "aha"


def generate_document_id(existing: Container[str] = (), now_ms: int | None = None) -> str:
    """
    Build a timestamp-derived id that is not already in ``existing``.

    Examples:
        aha-1718000000000
        aha-1718000000000-1 (same millisecond as an existing id)
    """
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    candidate = f"{ID_PREFIX}-{stamp}"
    suffix = 0
    while candidate in existing:
        suffix += 1
        candidate = f"{ID_PREFIX}-{stamp}-{suffix}"
    return candidate


def truncate_field(value: str, max_chars: int) -> str:
    if max_chars <= 0:
        return ""
    if len(value) <= max_chars:
        return value
    ellipsis = "..." if max_chars > 3 else ""
    slice_len = max_chars - len(ellipsis)
    return value[:slice_len] + ellipsis


__all__ = ["ID_PREFIX", "generate_document_id", "truncate_field"]
