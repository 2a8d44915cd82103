"""AgencyTemplate CRUD. Repos never commit — callers commit."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from agency.types import parse_blocks
from core.locale import normalize_locale_tag
from core.log_utils import now_iso
from db.models import AgencyTemplate


async def list_active_templates(
    session: AsyncSession,
    creator_id: str,
    languages: list[str] | None = None,
) -> list[AgencyTemplate]:
    """Active templates for a creator, optionally limited to locale tags.

    Language matching is done on the normalized tag, so 'ES_mx' rows match
    an 'es-mx' candidate.
    """
    result = await session.execute(
        select(AgencyTemplate)
        .where(
            AgencyTemplate.creator_id == creator_id,
            AgencyTemplate.active.is_(True),
        )
        .order_by(AgencyTemplate.created_at.asc(), AgencyTemplate.id.asc())
    )
    rows = list(result.scalars().all())
    if not languages:
        return rows
    wanted = set(languages)
    return [row for row in rows if normalize_locale_tag(row.language) in wanted]


async def get_template(session: AsyncSession, template_id: str) -> AgencyTemplate | None:
    result = await session.execute(
        select(AgencyTemplate).where(AgencyTemplate.id == template_id)
    )
    return result.scalar_one_or_none()


async def create_template(
    session: AsyncSession,
    *,
    creator_id: str,
    stage: str,
    objective: str,
    intensity: str,
    blocks: dict,
    playbook: str = "GIRLFRIEND",
    language: str = "es",
    active: bool = True,
) -> AgencyTemplate:
    """Insert a template. Blocks are validated and stored in canonical shape."""
    canonical = parse_blocks(blocks, strict=True)
    row = AgencyTemplate(
        creator_id=creator_id,
        stage=stage,
        objective=objective,
        intensity=intensity,
        playbook=playbook,
        language=normalize_locale_tag(language) or "es",
        active=active,
        blocks_json=canonical.as_dict(),
    )
    session.add(row)
    await session.flush()
    return row


async def set_template_active(
    session: AsyncSession, template: AgencyTemplate, active: bool
) -> AgencyTemplate:
    template.active = bool(active)
    template.updated_at = now_iso()
    await session.flush()
    return template
