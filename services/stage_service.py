"""Apply stage auto-advance after a creator action."""

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from agency.auto_advance import get_auto_advance_stage
from agency.types import normalize_stage
from core.constants import DEFAULT_STAGE
from db.models import FanAgencyState
from db.repo import fan_repo

logger = structlog.get_logger()


async def advance_fan_stage(
    session: AsyncSession,
    fan: FanAgencyState,
    action_key: str | None,
) -> str | None:
    """Move the fan forward if the action matches a rule. Returns the new stage."""
    current = normalize_stage(fan.stage) or DEFAULT_STAGE
    target = get_auto_advance_stage(current, action_key)
    if target is None or target == current:
        return None

    await fan_repo.update_fan_stage(session, fan, target)
    logger.info(
        "agency_stage_advanced",
        fan_id=fan.fan_id,
        from_stage=current,
        to_stage=target,
        action_key=action_key,
    )
    return target
