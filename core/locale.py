"""Locale tag normalization and fallback chains."""

import re

from core.config import env

_LOCALE_SEPARATORS_RE = re.compile(r"[_\s]+")
_LOCALE_TAG_RE = re.compile(r"^[a-z]{2,3}(-[a-z0-9]{2,8})*$")


def normalize_locale_tag(value: str | None) -> str | None:
    """'ES_mx' -> 'es-mx'. Returns None for blank or malformed tags."""
    if not isinstance(value, str):
        return None
    cleaned = _LOCALE_SEPARATORS_RE.sub("-", value.strip().lower()).strip("-")
    if not cleaned or not _LOCALE_TAG_RE.match(cleaned):
        return None
    return cleaned


def base_language(tag: str) -> str:
    return tag.split("-", 1)[0]


def locale_candidates(value: str | None, default: str | None = None) -> list[str]:
    """Most specific tag first, then its base language."""
    tag = normalize_locale_tag(value)
    if not tag:
        tag = normalize_locale_tag(default or env.default_language) or "es"
    candidates = [tag]
    base = base_language(tag)
    if base not in candidates:
        candidates.append(base)
    return candidates
