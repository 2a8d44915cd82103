"""Move a fan to the next stage based on the action the creator just took."""

from __future__ import annotations

import re
from dataclasses import dataclass
from re import Pattern

Matcher = str | Pattern[str]


@dataclass(frozen=True, slots=True)
class AutoAdvanceRule:
    from_stages: tuple[str, ...]
    to: str
    match: tuple[Matcher, ...]


_OFFER_KEYS: tuple[Matcher, ...] = (
    re.compile(r"^offer:"),
    re.compile(r"^ppv:"),
    re.compile(r"^pack:"),
    "offer_extra",
    "monthly_upsell",
)

# First matching rule wins.
AUTO_ADVANCE_RULES: tuple[AutoAdvanceRule, ...] = (
    AutoAdvanceRule(
        from_stages=("NEW", "WARM_UP", "HEAT", "OFFER", "CLOSE", "AFTERCARE", "RECOVERY"),
        to="RECOVERY",
        match=(
            re.compile(r"^reengage:"),
            "reactivate_cold",
            "renewal",
            "intent:reactivar_fan_frio",
            "intent:renovacion",
            re.compile(r"^autopilot:(reactivar_fan_frio|renovacion)$"),
        ),
    ),
    AutoAdvanceRule(
        from_stages=("NEW", "WARM_UP", "HEAT"),
        to="OFFER",
        match=_OFFER_KEYS + (
            "intent:ofrecer_extra",
            "intent:llevar_a_mensual",
            re.compile(r"^autopilot:(ofrecer_extra|llevar_a_mensual)$"),
        ),
    ),
    AutoAdvanceRule(
        from_stages=("OFFER",),
        to="CLOSE",
        match=_OFFER_KEYS + (
            "intent:llevar_a_mensual",
            re.compile(r"^autopilot:(ofrecer_extra|llevar_a_mensual)$"),
        ),
    ),
    AutoAdvanceRule(
        from_stages=("NEW",),
        to="WARM_UP",
        match=(
            "break_ice",
            "welcome",
            "intent:romper_hielo",
            "intent:bienvenida",
            re.compile(r"^manager:"),
            re.compile(r"^draft:"),
            re.compile(r"^autopilot:(romper_hielo|bienvenida)$"),
            re.compile(r"^template:soft$"),
        ),
    ),
    AutoAdvanceRule(
        from_stages=("NEW", "WARM_UP"),
        to="HEAT",
        match=(re.compile(r"^template:(medium|intense)$"),),
    ),
)


def _matches(key: str, matcher: Matcher) -> bool:
    if isinstance(matcher, str):
        return key == matcher
    return bool(matcher.search(key))


def get_auto_advance_stage(current_stage: str, action_key: str | None) -> str | None:
    if not isinstance(action_key, str):
        return None
    key = action_key.strip().lower()
    if not key:
        return None
    for rule in AUTO_ADVANCE_RULES:
        if current_stage not in rule.from_stages:
            continue
        if any(_matches(key, matcher) for matcher in rule.match):
            return rule.to
    return None
