"""Assemble a draft from opener / bridge / tease / cta pools."""

from __future__ import annotations

import re

from agency.draft_rules import detect_unsafe_context, sanitize_banned_terms
from agency.types import ComposedDraft, OfferContext, TemplateBlocks
from core.constants import (
    CONTEXT_REFERENCE_PREFIX,
    MAX_CONTEXT_CHARS,
    MAX_CONTEXT_WORDS,
    OFFER_PLACEHOLDERS,
    SAFE_CONSENT_REPLY,
    SAFE_UNDERAGE_REPLY,
)
from core.hashing import pick_index, stable_hash
from core.text_utils import (
    ensure_question,
    first_name,
    format_price,
    normalize_phrase,
    normalize_whitespace,
    strip_leading_punctuation,
)

_PLACEHOLDER_RE = re.compile(r"\{(\w+)\}")
_TRAILING_PUNCT_RE = re.compile(r"[.,;:!?]$")
_TRAILING_SEPARATOR_RE = re.compile(r"\s*[,;:]+$")

# pool attribute -> part name
_CATEGORY_PARTS = {
    "openers": "opener",
    "bridges": "bridge",
    "teases": "tease",
    "ctas": "cta",
}


def build_context_snippet(last_fan_msg: str | None) -> str | None:
    cleaned = normalize_whitespace(last_fan_msg)
    if not cleaned or detect_unsafe_context(cleaned):
        return None
    snippet = " ".join(cleaned.split(" ")[:MAX_CONTEXT_WORDS])
    snippet = _TRAILING_PUNCT_RE.sub("", snippet)
    if len(snippet) > MAX_CONTEXT_CHARS:
        snippet = _TRAILING_PUNCT_RE.sub("", snippet[:MAX_CONTEXT_CHARS].strip())
    if not snippet:
        return None
    return sanitize_banned_terms(snippet) or None


def interpolate(template: str, replacements: dict[str, str]) -> str:
    if not template:
        return ""
    return _PLACEHOLDER_RE.sub(lambda m: replacements.get(m.group(1), ""), template)


def requires_offer(phrase: str) -> bool:
    return any(f"{{{key}}}" in phrase for key in OFFER_PLACEHOLDERS)


def ensure_context_reference(base: str, snippet: str | None) -> str:
    if not snippet:
        return base.strip()
    if "{context}" in base:
        return base.replace("{context}", snippet).strip()
    if not base.strip():
        return f"{CONTEXT_REFERENCE_PREFIX} {snippet},"
    if snippet in base:
        return base.strip()
    return f"{base.strip()} {CONTEXT_REFERENCE_PREFIX} {snippet},"


def pick_from_pool(pool: tuple[str, ...], seed: int, salt: str, variant: int) -> str:
    if not pool:
        return ""
    return pool[pick_index(stable_hash(f"{seed}:{salt}"), variant, len(pool))]


def _tidy(part: str) -> str:
    return strip_leading_punctuation(normalize_phrase(sanitize_banned_terms(part)))


def _offer_replacements(offer: OfferContext | None) -> dict[str, str]:
    if offer is None:
        return {key: "" for key in OFFER_PLACEHOLDERS}
    return {
        "offerTitle": (offer.title or "").strip(),
        "offerTier": (offer.tier or "").strip(),
        "offerPrice": format_price(offer.price_cents, offer.currency),
    }


def build_agency_draft_from_blocks(
    *,
    stage: str,
    objective: str,
    intensity: str,
    blocks: TemplateBlocks,
    fan_name: str | None = None,
    last_fan_msg: str | None = None,
    offer: OfferContext | None = None,
    variant: int = 0,
    mode: str = "full",
    layout: str = "lines",
) -> ComposedDraft:
    name = first_name(fan_name)

    unsafe = detect_unsafe_context(last_fan_msg)
    if unsafe:
        text = SAFE_UNDERAGE_REPLY if unsafe == "underage" else SAFE_CONSENT_REPLY
        return ComposedDraft(
            text=text,
            used_blocks={part: None for part in _CATEGORY_PARTS.values()},
            parts={},
            context_snippet=None,
        )

    snippet = build_context_snippet(last_fan_msg)
    seed = stable_hash(
        "|".join(
            [
                name or "fan",
                snippet or "",
                stage,
                objective,
                intensity,
                (offer.title or "") if offer else "",
                (offer.tier or "") if offer else "",
                str(variant),
            ]
        )
    )

    picked: dict[str, str] = {}
    for category, part in _CATEGORY_PARTS.items():
        pool = blocks.pool(category)
        if offer is None:
            pool = tuple(p for p in pool if not requires_offer(p)) or pool
        picked[part] = pick_from_pool(pool, seed, category, variant)

    replacements = {"fanName": name, "context": snippet or "", **_offer_replacements(offer)}

    opener = interpolate(picked["opener"], replacements)

    raw_bridge = picked["bridge"]
    if snippet:
        bridge = ensure_context_reference(interpolate(raw_bridge, replacements), snippet)
    elif "{context}" in raw_bridge:
        bridge = ""
    else:
        bridge = interpolate(raw_bridge, replacements)

    tease = interpolate(picked["tease"], replacements)
    if snippet and (not bridge or mode == "short"):
        tease = ensure_context_reference(tease, snippet)

    cta = ensure_question(interpolate(picked["cta"], replacements))

    rendered = {
        "opener": _tidy(opener),
        "bridge": _tidy(bridge),
        "tease": _tidy(tease),
        "cta": _tidy(cta),
    }
    if layout != "inline":
        # a line break already separates parts, so no part ends on a joiner
        rendered = {part: _TRAILING_SEPARATOR_RE.sub("", value) for part, value in rendered.items()}
    order = ["opener", "tease", "cta"] if mode == "short" else ["opener", "bridge", "tease", "cta"]
    lines = [rendered[part] for part in order if rendered[part]]
    separator = " " if layout == "inline" else "\n"
    text = ensure_question(separator.join(lines))

    return ComposedDraft(
        text=text.strip(),
        used_blocks={part: (value or None) for part, value in picked.items()},
        parts={part: rendered[part] for part in order},
        context_snippet=snippet,
    )
