"""Domain helpers for slug derivation, validation and URL previews."""
from __future__ import annotations

import enum
import re
import unicodedata

from portfolio.core.config import get_settings

SLUG_PATTERN = re.compile(r"^([a-z0-9]+-)*[a-z0-9]+$")
PROJECT_PATH_PREFIX = "/projeto/"
PLACEHOLDER_SLUG = "meu-projeto"

_COMBINING_MARKS = re.compile("[\u0300-\u036f]")
_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")
_EDGE_HYPHENS = re.compile(r"(^-|-$)+")


class AvailabilityState(str, enum.Enum):
    """Advisory availability of a slug candidate."""

    UNKNOWN = "unknown"
    CHECKING = "checking"
    AVAILABLE = "available"
    TAKEN = "taken"


def derive(text: str | None) -> str:
    """
    Canonicalize free text into a URL-safe slug.

    Lowercase, NFD-decompose, drop combining marks (U+0300-U+036F), turn every
    run of characters outside [a-z0-9] into one hyphen and trim edge hyphens.
    Existing persisted slugs were produced by exactly these steps.
    """
    if not text:
        return ""
    value = unicodedata.normalize("NFD", text.lower())
    value = _COMBINING_MARKS.sub("", value)
    value = _NON_ALNUM_RUN.sub("-", value)
    return _EDGE_HYPHENS.sub("", value)


def is_canonical(value: str | None) -> bool:
    """Return True when value is a non-empty, already canonical slug."""
    if not value:
        return False
    return bool(SLUG_PATTERN.fullmatch(value))


def project_path(slug: str | None) -> str:
    return PROJECT_PATH_PREFIX + (slug or PLACEHOLDER_SLUG)


def project_url(slug: str | None, base: str | None = None) -> str:
    """Public URL preview for a project slug (placeholder when empty)."""
    base_url = (base if base is not None else get_settings().public_base_url).rstrip("/")
    return base_url + project_path(slug)
