"""Pure text utilities used across the project."""

import re

_WHITESPACE_RE = re.compile(r"\s+")
_SPACE_BEFORE_PUNCT_RE = re.compile(r"\s+([.,!?])")
_LEADING_PUNCT_RE = re.compile(r"^[\s,;:.]+")
_QUESTION_END_RE = re.compile(r"[?¿]$")


def normalize_whitespace(text: str | None) -> str:
    if not text:
        return ""
    return _WHITESPACE_RE.sub(" ", text).strip()


def normalize_phrase(text: str | None) -> str:
    """Collapse whitespace and glue punctuation to the preceding word."""
    return _SPACE_BEFORE_PUNCT_RE.sub(r"\1", normalize_whitespace(text)).strip()


def strip_leading_punctuation(text: str) -> str:
    return _LEADING_PUNCT_RE.sub("", text)


def first_name(name: str | None) -> str:
    normalized = normalize_whitespace(name)
    if not normalized:
        return ""
    return normalized.split(" ")[0]


def ends_with_question(text: str | None) -> bool:
    return bool(text) and bool(_QUESTION_END_RE.search(text.strip()))


def ensure_question(text: str | None) -> str:
    trimmed = (text or "").strip()
    if not trimmed:
        return trimmed
    return trimmed if ends_with_question(trimmed) else f"{trimmed}?"


def format_price(price_cents: int | None, currency: str | None) -> str:
    if price_cents is None or isinstance(price_cents, bool):
        return ""
    amount = price_cents / 100
    value = f"{amount:.0f}" if price_cents % 100 == 0 else f"{amount:.2f}"
    code = (currency or "").strip().upper()
    return f"{value} {code}".strip()
