"""Text similarity checks for duplicate and retread detection."""

from __future__ import annotations

import re

from core.constants import (
    HEAD_MATCH_MIN_SHARED,
    HEAD_MATCH_TOKENS,
    LONG_OVERLAP_CHARS,
    LONG_OVERLAP_STRIDE,
    NEAR_DUPLICATE_THRESHOLD,
)

# Anything that is not a letter, digit or whitespace (Unicode aware).
_NON_WORD_RE = re.compile(r"[^\w\s]|_")
_WHITESPACE_RE = re.compile(r"\s+")
_DRAFT_PUNCT_RE = re.compile(r"[.,;:!?¡¿\[\]()*\"“”'’`]")
_ROLE_PREAMBLE_RE = re.compile(
    r"^\s*(system|assistant|user|fan|creator|creador|creadora|manager|ia|ai)\s*:",
    re.IGNORECASE,
)
_DRAFT_LABEL_RE = re.compile(r"^\s*(draft|borrador)\s*:\s*", re.IGNORECASE)
_WRAPPING_QUOTES = "\"'“”«»"


def _normalize_for_similarity(text: str) -> str:
    lowered = (text or "").lower()
    return _WHITESPACE_RE.sub(" ", _NON_WORD_RE.sub(" ", lowered)).strip()


def _bigram_units(normalized: str) -> list[str]:
    if not normalized:
        return []
    tokens = normalized.split(" ")
    if len(tokens) <= 1:
        return tokens
    return [f"{a} {b}" for a, b in zip(tokens, tokens[1:])]


def get_near_duplicate_similarity(a: str, b: str) -> float:
    """Jaccard index of the word-bigram sets, in [0, 1]."""
    units_a = set(_bigram_units(_normalize_for_similarity(a)))
    units_b = set(_bigram_units(_normalize_for_similarity(b)))
    if not units_a or not units_b:
        return 0.0
    union = units_a | units_b
    return len(units_a & units_b) / len(union)


def is_near_duplicate(a: str, b: str, threshold: float = NEAR_DUPLICATE_THRESHOLD) -> bool:
    return get_near_duplicate_similarity(a, b) >= threshold


def sanitize_draft_text(text: str | None) -> str:
    """Drop role preamble lines, a leading 'draft:' label and wrapping quotes."""
    if not text:
        return ""
    lines = [line for line in text.splitlines() if not _ROLE_PREAMBLE_RE.match(line)]
    cleaned = "\n".join(lines).strip()
    cleaned = _DRAFT_LABEL_RE.sub("", cleaned, count=1).strip()
    if len(cleaned) >= 2 and cleaned[0] in _WRAPPING_QUOTES and cleaned[-1] in _WRAPPING_QUOTES:
        cleaned = cleaned[1:-1].strip()
    return cleaned


def _normalize_draft(text: str) -> str:
    cleaned = sanitize_draft_text(text)
    if not cleaned:
        return ""
    return _WHITESPACE_RE.sub(" ", _DRAFT_PUNCT_RE.sub(" ", cleaned.lower())).strip()


def _head_tokens(text: str, count: int) -> list[str]:
    return [token for token in text.split(" ")[:count] if token]


def has_long_overlap(a: str, b: str, min_len: int = LONG_OVERLAP_CHARS) -> bool:
    shorter, longer = (a, b) if len(a) <= len(b) else (b, a)
    if len(shorter) < min_len:
        return False
    for start in range(0, len(shorter) - min_len + 1, LONG_OVERLAP_STRIDE):
        if shorter[start:start + min_len] in longer:
            return True
    return False


def is_too_similar_draft(
    text: str,
    avoid: list[str] | None,
    head_match_tokens: int = HEAD_MATCH_TOKENS,
) -> bool:
    """True when ``text`` retreads any entry of ``avoid``.

    Triggers: enough head tokens agree position by position, or a long
    verbatim slice of the shorter text shows up in the longer one.
    """
    if not avoid:
        return False
    normalized = _normalize_draft(text)
    if not normalized:
        return False
    head = _head_tokens(normalized, head_match_tokens)

    for entry in avoid:
        cleaned = _normalize_draft(entry)
        if not cleaned:
            continue
        entry_head = _head_tokens(cleaned, head_match_tokens)
        shared = sum(1 for idx, token in enumerate(entry_head) if idx < len(head) and head[idx] == token)
        if shared >= HEAD_MATCH_MIN_SHARED:
            return True
        if has_long_overlap(normalized, cleaned):
            return True
    return False
