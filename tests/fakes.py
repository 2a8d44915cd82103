from __future__ import annotations

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from typing import Any

NOW = datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc)


def hours_ago(hours: float, now: datetime = NOW) -> str:
    return (now - timedelta(hours=hours)).isoformat()


def make_template(
    template_id: str = "tpl-1",
    *,
    stage: str = "NEW",
    objective: str = "CONNECT",
    intensity: str = "MEDIUM",
    playbook: str | None = "GIRLFRIEND",
    language: str = "es",
    blocks_json: Any = None,
):
    return SimpleNamespace(
        id=template_id,
        stage=stage,
        objective=objective,
        intensity=intensity,
        playbook=playbook,
        language=language,
        blocks_json=blocks_json if blocks_json is not None else {"openers": ["Holi {fanName}"]},
    )


def make_purchase(amount: float, *, hours: float = 1, is_archived: bool = False, now: datetime = NOW):
    return SimpleNamespace(
        amount=amount,
        created_at=hours_ago(hours, now),
        is_archived=is_archived,
    )


def make_fan(fan_id: str = "fan-1", **overrides):
    data = {
        "fan_id": fan_id,
        "creator_id": "creator-1",
        "name": f"Fan {fan_id}",
        "display_name": None,
        "stage": "NEW",
        "objective_code": "CONNECT",
        "intensity": "MEDIUM",
        "segment": None,
        "risk_level": "LOW",
        "is_new": False,
        "is_archived": False,
        "is_blocked": False,
        "invite_created_at": None,
        "invite_used_at": None,
        "access_expires_at": None,
        "last_message_at": None,
        "last_creator_message_at": None,
        "notes": None,
        "purchases": [],
    }
    data.update(overrides)
    return SimpleNamespace(**data)
