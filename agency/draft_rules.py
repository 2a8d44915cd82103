"""Hard-rule gate, soft QA score and content guards for drafts."""

from __future__ import annotations

from collections.abc import Callable

from agency.types import DraftQa, HardRuleResult
from core.config import runtime
from core.constants import (
    BANNED_TERM_REPLACEMENTS,
    BANNED_WORD_PATTERNS,
    COERCION_PATTERNS,
    GENERIC_PATTERNS,
    HUMAN_DETAIL_PATTERNS,
    MARKETING_WORDS,
    SHORT_DRAFT_CHARS,
    UNDERAGE_PATTERNS,
    WARNING_BANNED_PREFIX,
    WARNING_EMPTY,
    WARNING_GENERIC,
    WARNING_MARKETING,
    WARNING_NO_QUESTION,
    WARNING_NO_WARMTH,
    WARNING_TOO_LONG,
    WARNING_TOO_SHORT,
)
from core.text_utils import ends_with_question, normalize_whitespace

HardRuleCheck = Callable[[str], HardRuleResult]
DraftScorer = Callable[[str], DraftQa]


def detect_unsafe_context(text: str | None) -> str | None:
    """Return 'underage', 'coercion' or None."""
    normalized = (text or "").lower()
    if not normalized:
        return None
    if any(pattern.search(normalized) for pattern in UNDERAGE_PATTERNS):
        return "underage"
    if any(pattern.search(normalized) for pattern in COERCION_PATTERNS):
        return "coercion"
    return None


def sanitize_banned_terms(text: str) -> str:
    """Swap salesy words for softer ones, keeping plural forms plural."""
    result = text
    for pattern, singular, plural in BANNED_TERM_REPLACEMENTS:
        result = pattern.sub(
            lambda m, s=singular, p=plural: p if m.group(0).lower().endswith("s") else s,
            result,
        )
    return normalize_whitespace(result)


def get_banned_word_hits(text: str) -> list[str]:
    return [word for word, pattern in BANNED_WORD_PATTERNS if pattern.search(text)]


def passes_draft_hard_rules(text: str | None) -> HardRuleResult:
    trimmed = normalize_whitespace(text)
    if not trimmed:
        return HardRuleResult(ok=False, warnings=[WARNING_EMPTY])

    warnings: list[str] = []
    if not ends_with_question(trimmed):
        warnings.append(WARNING_NO_QUESTION)
    if len(trimmed) > runtime.draft_max_chars:
        warnings.append(WARNING_TOO_LONG)
    if len(trimmed) < runtime.draft_min_chars:
        warnings.append(WARNING_TOO_SHORT)
    hits = get_banned_word_hits(trimmed)
    if hits:
        warnings.append(f"{WARNING_BANNED_PREFIX}: {', '.join(hits)}")
    return HardRuleResult(ok=not warnings, warnings=warnings)


def score_draft(text: str | None) -> DraftQa:
    """Informational 0-100 score. Independent of the hard-rule gate."""
    trimmed = normalize_whitespace(text)
    if not trimmed:
        return DraftQa(score=0, warnings=[WARNING_EMPTY])

    score = 60
    warnings: list[str] = []

    if ends_with_question(trimmed):
        score += 15
    else:
        score -= 15
        warnings.append(WARNING_NO_QUESTION)

    length = len(trimmed)
    if length <= SHORT_DRAFT_CHARS:
        score += 12
    elif length <= runtime.draft_max_chars:
        score += 6
    else:
        score -= 18
        warnings.append(WARNING_TOO_LONG)

    hits = get_banned_word_hits(trimmed)
    if hits:
        score -= 24
        warnings.append(f"{WARNING_BANNED_PREFIX}: {', '.join(hits)}")

    if any(pattern.search(trimmed) for pattern in HUMAN_DETAIL_PATTERNS):
        score += 8
    else:
        score -= 6
        warnings.append(WARNING_NO_WARMTH)

    lowered = trimmed.lower()
    if any(word in lowered for word in MARKETING_WORDS):
        score -= 18
        warnings.append(WARNING_MARKETING)

    if any(pattern.search(trimmed) for pattern in GENERIC_PATTERNS):
        score -= 14
        warnings.append(WARNING_GENERIC)

    return DraftQa(score=max(0, min(100, score)), warnings=warnings)
