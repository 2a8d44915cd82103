"""Priority score for the creator's attention queue.

The score is only meaningful relative to other fans: sort descending.
Weights live in core.constants and are tunable; what must hold is the
ordering active HEAT > cold OFFER > at-risk RECOVERY > idle new VIP,
and that fresher inbound activity, more spend and higher intensity never
lower the score.

Outbound recency is not a freshness bonus. A creator message sent after the
fan's last inbound one means the fan owes the reply, so it costs points for
the first day instead. Outbound activity never adds points.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import datetime, timezone
from typing import TypeVar

from agency.objectives import resolve_objective_for_scoring
from agency.types import PriorityFlags, PriorityInput
from core.constants import (
    AWAITING_REPLY_PENALTY_TIERS,
    FLAG_SCORES,
    INCOMING_RECENCY_TIERS,
    INTENSITY_SCORES,
    OBJECTIVE_SCORES,
    SPEND_7D_TIERS,
    SPEND_30D_TIERS,
    STAGE_SCORES,
)

T = TypeVar("T")


def parse_timestamp(value: datetime | str | None) -> datetime | None:
    if value is None:
        return None
    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            return None
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        try:
            value = datetime.fromisoformat(raw)
        except ValueError:
            return None
    if not isinstance(value, datetime):
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def hours_since(value: datetime | None, now: datetime) -> float | None:
    if value is None:
        return None
    hours = (now - value).total_seconds() / 3600
    return max(0.0, hours)


def _tier_points(hours: float | None, tiers: list[tuple[int, int]]) -> int:
    if hours is None:
        return 0
    for max_hours, points in tiers:
        if hours <= max_hours:
            return points
    return 0


def score_spend(amount: float | None, tiers: list[tuple[int, int]]) -> int:
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        return 0
    if amount != amount or amount in (float("inf"), float("-inf")):
        return 0
    for threshold, points in tiers:
        if amount >= threshold:
            return points
    return 0


def compute_agency_priority_score(data: PriorityInput) -> int:
    now = parse_timestamp(data.now) or datetime.now(timezone.utc)
    incoming_at = parse_timestamp(data.last_incoming_at)
    outgoing_at = parse_timestamp(data.last_outgoing_at)

    score = 0
    score += STAGE_SCORES.get(data.stage or "", 0)
    score += OBJECTIVE_SCORES[resolve_objective_for_scoring(data.objective)]
    score += INTENSITY_SCORES.get(data.intensity or "", 0)

    score += _tier_points(hours_since(incoming_at, now), INCOMING_RECENCY_TIERS)

    # Already answered: the ball is in the fan's court.
    if incoming_at and outgoing_at and outgoing_at > incoming_at:
        score += _tier_points(hours_since(outgoing_at, now), AWAITING_REPLY_PENALTY_TIERS)

    score += score_spend(data.spent_7d, SPEND_7D_TIERS)
    score += score_spend(data.spent_30d, SPEND_30D_TIERS)

    flags = data.flags or PriorityFlags()
    if flags.vip:
        score += FLAG_SCORES["vip"]
    if flags.expired:
        score += FLAG_SCORES["expired"]
    if flags.at_risk:
        score += FLAG_SCORES["at_risk"]
    if flags.is_new:
        score += FLAG_SCORES["is_new"]

    return max(0, round(score))


def rank_by_priority(items: Iterable[T], key: Callable[[T], float]) -> list[T]:
    """Highest score first; ties keep their input order."""
    return sorted(items, key=key, reverse=True)
