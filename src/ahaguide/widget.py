"""Widget HTML loading, logo discovery and public-directory path checks."""

from __future__ import annotations

import logging
from pathlib import Path
from urllib.parse import quote

logger = logging.getLogger(__name__)

FALLBACK_WIDGET_HTML = "<html><body><p>Error loading widget HTML</p></body></html>"
LOGO_CANDIDATES = ("AHA Logo.png", "aha-logo.svg")


def load_widget_html(path: Path) -> str:
    """Read the widget fresh on every call so edits show up without a restart."""
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        logger.error("Error loading widget HTML from %s: %s", path, exc)
        return FALLBACK_WIDGET_HTML


def find_logo_url(public_dir: Path, base_url: str) -> str | None:
    """Return a public URL for the first logo file present, PNG preferred."""
    for name in LOGO_CANDIDATES:
        if (public_dir / name).is_file():
            return f"{base_url.rstrip('/')}/public/{quote(name)}"
    logger.warning("Could not find AHA logo file in %s", public_dir)
    return None


def resolve_public_path(public_dir: Path, relative: str) -> Path | None:
    """Map a request path onto a file inside ``public_dir``, rejecting escapes."""
    root = public_dir.resolve()
    try:
        candidate = (root / relative).resolve()
    except (OSError, ValueError):
        return None
    if not candidate.is_relative_to(root) or not candidate.is_file():
        return None
    return candidate


__all__ = [
    "FALLBACK_WIDGET_HTML",
    "find_logo_url",
    "load_widget_html",
    "resolve_public_path",
]
