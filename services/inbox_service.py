"""Agency inbox: score every fan and order the creator's attention queue."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from agency.objectives import resolve_objective_for_scoring
from agency.priority import compute_agency_priority_score, parse_timestamp, rank_by_priority
from agency.types import PriorityFlags, PriorityInput, normalize_intensity, normalize_stage
from core.constants import (
    DEFAULT_INTENSITY,
    DEFAULT_OBJECTIVE,
    DEFAULT_STAGE,
    NEW_FAN_WINDOW_DAYS,
    RISK_LOW,
    SEGMENT_AT_RISK,
    SEGMENT_VIP,
    VIP_SPEND_30D,
)
from core.log_utils import now_utc
from db.repo import fan_repo

logger = structlog.get_logger()


@dataclass(slots=True)
class InboxItem:
    fan_id: str
    display_name: str
    stage: str
    objective_code: str
    intensity: str
    priority_score: int
    last_incoming_at: str | None
    spent_7d: float
    spent_30d: float
    tags: list[str] = field(default_factory=list)


def sum_purchases_since(purchases, since: datetime) -> float:
    total = 0.0
    for purchase in purchases:
        if getattr(purchase, "is_archived", False):
            continue
        amount = purchase.amount or 0
        created_at = parse_timestamp(purchase.created_at)
        if amount <= 0 or created_at is None or created_at < since:
            continue
        total += amount
    return total


def is_new_within_days(fan, days: int, now: datetime) -> bool:
    if getattr(fan, "is_new", False):
        return True
    joined_at = parse_timestamp(fan.invite_used_at) or parse_timestamp(fan.invite_created_at)
    if joined_at is None:
        return False
    return now - joined_at <= timedelta(days=days)


def is_access_expired(fan, now: datetime) -> bool:
    expires_at = parse_timestamp(fan.access_expires_at)
    return expires_at is not None and expires_at <= now


def build_inbox_item(fan, now: datetime) -> InboxItem:
    stage = normalize_stage(fan.stage) or DEFAULT_STAGE
    objective_code = fan.objective_code or DEFAULT_OBJECTIVE
    intensity = normalize_intensity(fan.intensity) or DEFAULT_INTENSITY

    purchases = list(fan.purchases or [])
    spent_7d = sum_purchases_since(purchases, now - timedelta(days=7))
    spent_30d = sum_purchases_since(purchases, now - timedelta(days=30))

    segment = (fan.segment or "").upper()
    risk = (fan.risk_level or RISK_LOW).upper()
    flags = PriorityFlags(
        vip=segment == SEGMENT_VIP or spent_30d >= VIP_SPEND_30D,
        expired=is_access_expired(fan, now),
        at_risk=segment == SEGMENT_AT_RISK or risk != RISK_LOW,
        is_new=is_new_within_days(fan, NEW_FAN_WINDOW_DAYS, now),
    )

    score = compute_agency_priority_score(
        PriorityInput(
            now=now,
            stage=stage,
            objective=resolve_objective_for_scoring(objective_code),
            intensity=intensity,
            last_incoming_at=fan.last_message_at,
            last_outgoing_at=fan.last_creator_message_at,
            spent_7d=spent_7d,
            spent_30d=spent_30d,
            flags=flags,
        )
    )

    tags: list[str] = []
    if segment == SEGMENT_VIP:
        tags.append("vip")
    if flags.at_risk:
        tags.append("en_riesgo")
    if flags.expired:
        tags.append("caducado")
    if flags.is_new:
        tags.append("nuevo")

    incoming = parse_timestamp(fan.last_message_at)
    return InboxItem(
        fan_id=fan.fan_id,
        display_name=fan.display_name or fan.name,
        stage=stage,
        objective_code=objective_code,
        intensity=intensity,
        priority_score=score,
        last_incoming_at=incoming.isoformat() if incoming else None,
        spent_7d=spent_7d,
        spent_30d=spent_30d,
        tags=tags,
    )


def build_agency_inbox(fans, now: datetime | None = None) -> list[InboxItem]:
    current = now or now_utc()
    items = [build_inbox_item(fan, current) for fan in fans]
    return rank_by_priority(items, key=lambda item: item.priority_score)


async def load_agency_inbox(
    session: AsyncSession,
    creator_id: str,
    now: datetime | None = None,
) -> list[InboxItem]:
    fans = await fan_repo.list_inbox_fans(session, creator_id)
    items = build_agency_inbox(fans, now)
    logger.info(
        "agency_inbox_built",
        creator_id=creator_id,
        fan_count=len(items),
        top_score=items[0].priority_score if items else None,
    )
    return items
