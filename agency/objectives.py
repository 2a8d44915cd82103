"""Built-in and custom objective codes, labels and scoring fallback."""

from __future__ import annotations

import re
from collections.abc import Mapping

from core.constants import AGENCY_OBJECTIVES, DEFAULT_OBJECTIVE
from core.locale import base_language, normalize_locale_tag

BUILT_IN_OBJECTIVE_LABELS: dict[str, dict[str, str]] = {
    "es": {
        "CONNECT": "Conectar",
        "SELL_EXTRA": "Vender extra",
        "SELL_PACK": "Vender pack",
        "SELL_MONTHLY": "Vender mensual",
        "RECOVER": "Recuperar",
        "RETAIN": "Retener",
        "UPSELL": "Upsell",
    },
    "en": {
        "CONNECT": "Connect",
        "SELL_EXTRA": "Sell extra",
        "SELL_PACK": "Sell pack",
        "SELL_MONTHLY": "Sell monthly",
        "RECOVER": "Recover",
        "RETAIN": "Retain",
        "UPSELL": "Upsell",
    },
    "ro": {
        "CONNECT": "Connect",
        "SELL_EXTRA": "Sell extra",
        "SELL_PACK": "Sell pack",
        "SELL_MONTHLY": "Sell monthly",
        "RECOVER": "Recover",
        "RETAIN": "Retain",
        "UPSELL": "Upsell",
    },
}

_LABEL_FALLBACK_LOCALES = ("en", "es")
_SLUG_SEPARATORS_RE = re.compile(r"[^A-Z0-9]+")


def slugify_objective_code(value: str) -> str:
    return _SLUG_SEPARATORS_RE.sub("_", value.strip().upper()).strip("_")


def normalize_objective_code(value: object) -> str | None:
    if not isinstance(value, str) or not value.strip():
        return None
    return slugify_objective_code(value) or None


def is_built_in_objective(code: str) -> bool:
    return code in AGENCY_OBJECTIVES


def resolve_objective_for_scoring(code: object) -> str:
    normalized = normalize_objective_code(code)
    if normalized and is_built_in_objective(normalized):
        return normalized
    return DEFAULT_OBJECTIVE


def _built_in_labels(code: str) -> dict[str, str]:
    return {
        locale: labels[code]
        for locale, labels in BUILT_IN_OBJECTIVE_LABELS.items()
        if code in labels
    }


def pick_label(labels: Mapping[str, str] | None, locale: str | None, fallback: str) -> str:
    if not labels:
        return fallback
    normalized: dict[str, str] = {}
    for key, label in labels.items():
        tag = normalize_locale_tag(key)
        if tag and label and tag not in normalized:
            normalized[tag] = label
    if not normalized:
        return fallback

    tag = normalize_locale_tag(locale)
    lookups: list[str] = []
    if tag:
        lookups.extend([tag, base_language(tag)])
    lookups.extend(_LABEL_FALLBACK_LOCALES)
    for key in lookups:
        if key in normalized:
            return normalized[key]
    return next(iter(normalized.values()))


def resolve_objective_label(
    code: str | None,
    locale: str | None = None,
    labels_by_code: Mapping[str, Mapping[str, str]] | None = None,
) -> str | None:
    normalized = normalize_objective_code(code)
    if not normalized:
        return None
    if is_built_in_objective(normalized):
        return pick_label(_built_in_labels(normalized), locale, normalized)
    custom = labels_by_code.get(normalized) if labels_by_code else None
    return pick_label(custom, locale, normalized)
