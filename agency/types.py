"""Agency vocabulary, request/result records and template block parsing."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import structlog

from core.constants import (
    AGENCY_INTENSITIES,
    AGENCY_OBJECTIVES,
    AGENCY_PLAYBOOKS,
    AGENCY_STAGES,
    BLOCK_CATEGORIES,
    DRAFT_LAYOUTS,
    DRAFT_MODES,
    LEGACY_BLOCK_ALIASES,
)
from core.exceptions import InvalidBlocksError, UnknownEnumError

logger = structlog.get_logger()

_ENUM_SEPARATORS_RE = re.compile(r"[^A-Z0-9]+")


def _normalize_enum(value: Any, allowed: tuple[str, ...]) -> str | None:
    if not isinstance(value, str):
        return None
    normalized = _ENUM_SEPARATORS_RE.sub("_", value.strip().upper())
    if not normalized:
        return None
    return normalized if normalized in allowed else None


def normalize_stage(value: Any) -> str | None:
    return _normalize_enum(value, AGENCY_STAGES)


def normalize_objective(value: Any) -> str | None:
    return _normalize_enum(value, AGENCY_OBJECTIVES)


def normalize_intensity(value: Any) -> str | None:
    return _normalize_enum(value, AGENCY_INTENSITIES)


def normalize_playbook(value: Any) -> str | None:
    return _normalize_enum(value, AGENCY_PLAYBOOKS)


def require_stage(value: Any) -> str:
    stage = normalize_stage(value)
    if stage is None:
        raise UnknownEnumError("stage", value, AGENCY_STAGES)
    return stage


# --- Template blocks ---


@dataclass(frozen=True, slots=True)
class TemplateBlocks:
    """Canonical four-pool shape. Pools hold non-empty trimmed strings."""

    openers: tuple[str, ...] = ()
    bridges: tuple[str, ...] = ()
    teases: tuple[str, ...] = ()
    ctas: tuple[str, ...] = ()

    def pool(self, category: str) -> tuple[str, ...]:
        return getattr(self, category)

    def is_empty(self) -> bool:
        return not any(self.pool(category) for category in BLOCK_CATEGORIES)

    def as_dict(self) -> dict[str, list[str]]:
        return {category: list(self.pool(category)) for category in BLOCK_CATEGORIES}


def normalize_pool(value: Any) -> tuple[str, ...]:
    if not isinstance(value, (list, tuple)):
        return ()
    items = (item.strip() if isinstance(item, str) else "" for item in value)
    return tuple(item for item in items if item)


def unique_pool(items) -> tuple[str, ...]:
    seen: set[str] = set()
    result: list[str] = []
    for item in items:
        if not item or item in seen:
            continue
        seen.add(item)
        result.append(item)
    return tuple(result)


def parse_blocks(raw: Any, *, strict: bool = False) -> TemplateBlocks:
    """Parse an untyped ``blocks_json`` payload into TemplateBlocks.

    Legacy keys (``escalations``, ``questions``) are read only when the
    canonical key is empty. With ``strict`` a known key holding a non-list
    raises InvalidBlocksError; otherwise it is treated as empty.
    """
    if not isinstance(raw, dict):
        if raw is not None:
            logger.warning("agency_blocks_invalid", reason="payload_not_object")
        return TemplateBlocks()

    keys = list(BLOCK_CATEGORIES) + list(LEGACY_BLOCK_ALIASES.values())
    for key in keys:
        value = raw.get(key)
        if value is None or isinstance(value, (list, tuple)):
            continue
        if strict:
            raise InvalidBlocksError(key, type(value).__name__)
        logger.warning("agency_blocks_invalid", reason="pool_not_list", key=key)

    pools: dict[str, tuple[str, ...]] = {}
    for category in BLOCK_CATEGORIES:
        pool = normalize_pool(raw.get(category))
        legacy_key = LEGACY_BLOCK_ALIASES.get(category)
        if not pool and legacy_key:
            pool = normalize_pool(raw.get(legacy_key))
        pools[category] = pool
    return TemplateBlocks(**pools)


def merge_blocks(primary: TemplateBlocks, fallback: TemplateBlocks) -> TemplateBlocks:
    """Stored pools first, fallback appended, exact-string dedup."""
    return TemplateBlocks(
        **{
            category: unique_pool(
                item.strip() for item in primary.pool(category) + fallback.pool(category)
            )
            for category in BLOCK_CATEGORIES
        }
    )


# --- Draft records ---


@dataclass(frozen=True, slots=True)
class OfferContext:
    title: str | None = None
    tier: str | None = None
    price_cents: int | None = None
    currency: str | None = None


@dataclass(slots=True)
class DraftRequest:
    stage: str
    objective: str
    intensity: str
    fan_name: str | None = None
    last_fan_msg: str | None = None
    playbook: str | None = None
    language: str | None = None
    offer: OfferContext | None = None
    variant: int = 0
    mode: str = "full"
    layout: str = "lines"
    avoid_text: str | None = None
    avoid_history: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        try:
            variant = int(self.variant)
        except (TypeError, ValueError):
            variant = 0
        self.variant = max(0, variant)
        if self.mode not in DRAFT_MODES:
            self.mode = "full"
        if self.layout not in DRAFT_LAYOUTS:
            self.layout = "lines"


@dataclass(frozen=True, slots=True)
class DraftQa:
    score: int
    warnings: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class HardRuleResult:
    ok: bool
    warnings: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class ComposedDraft:
    text: str
    used_blocks: dict[str, str | None]
    parts: dict[str, str]
    context_snippet: str | None = None


@dataclass(frozen=True, slots=True)
class DraftResult:
    text: str
    qa: DraftQa
    template_id: str | None
    variant: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "qa": {"score": self.qa.score, "warnings": list(self.qa.warnings)},
            "templateId": self.template_id,
            "variant": self.variant,
        }


# --- Priority records ---


@dataclass(frozen=True, slots=True)
class PriorityFlags:
    vip: bool = False
    expired: bool = False
    at_risk: bool = False
    is_new: bool = False


@dataclass(slots=True)
class PriorityInput:
    stage: str | None = None
    objective: str | None = None
    intensity: str | None = None
    last_incoming_at: datetime | str | None = None
    last_outgoing_at: datetime | str | None = None
    spent_7d: float | None = 0
    spent_30d: float | None = 0
    flags: PriorityFlags | None = field(default_factory=PriorityFlags)
    now: datetime | str | None = None
