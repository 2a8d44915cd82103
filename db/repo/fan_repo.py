"""Fan agency state queries. Repos never commit — callers commit."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from agency.types import require_stage
from db.models import FanAgencyState


async def list_inbox_fans(session: AsyncSession, creator_id: str) -> list[FanAgencyState]:
    """Non-archived, non-blocked fans with their purchases preloaded."""
    result = await session.execute(
        select(FanAgencyState).where(
            FanAgencyState.creator_id == creator_id,
            FanAgencyState.is_archived.is_(False),
            FanAgencyState.is_blocked.is_(False),
        )
    )
    return list(result.scalars().all())


async def update_fan_stage(
    session: AsyncSession, fan: FanAgencyState, stage: str
) -> FanAgencyState:
    fan.stage = require_stage(stage)
    await session.flush()
    return fan
