"""Draft orchestration: template pick → compose → validate/retry → QA."""

from collections.abc import Sequence

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from agency.composer import build_agency_draft_from_blocks
from agency.draft_rules import (
    DraftScorer,
    HardRuleCheck,
    passes_draft_hard_rules,
    score_draft,
)
from agency.phrase_pools import build_fallback_pools
from agency.template_selector import TemplateLike, pick_template_for_locales
from agency.types import (
    ComposedDraft,
    DraftRequest,
    DraftResult,
    merge_blocks,
    normalize_intensity,
    normalize_objective,
    normalize_playbook,
    normalize_stage,
    parse_blocks,
)
from core.config import runtime
from core.constants import DEFAULT_INTENSITY, DEFAULT_OBJECTIVE, DEFAULT_STAGE
from core.locale import locale_candidates
from core.log_utils import draft_log_context
from core.similarity import is_near_duplicate, is_too_similar_draft
from db.repo import template_repo

logger = structlog.get_logger()


def _rejection_reason(
    text: str,
    request: DraftRequest,
    hard_rules: HardRuleCheck,
) -> str | None:
    trimmed = text.strip()
    avoid_text = (request.avoid_text or "").strip()
    if avoid_text and (
        trimmed == avoid_text
        or is_near_duplicate(trimmed, avoid_text, runtime.near_duplicate_threshold)
    ):
        return "avoid_text"
    if not hard_rules(trimmed).ok:
        return "hard_rules"
    if request.avoid_history and is_too_similar_draft(
        trimmed, request.avoid_history, runtime.head_match_tokens
    ):
        return "too_similar"
    return None


def build_agency_draft(
    request: DraftRequest,
    templates: Sequence[TemplateLike] = (),
    *,
    hard_rules: HardRuleCheck = passes_draft_hard_rules,
    scorer: DraftScorer = score_draft,
    max_attempts: int | None = None,
) -> DraftResult:
    """Build a draft for one fan context. Never raises on bad drafts.

    Up to ``max_attempts`` compositions (variant, variant + 1, ...). When
    every attempt is rejected the last one is returned and the QA warnings
    carry the problem.
    """
    stage = normalize_stage(request.stage) or DEFAULT_STAGE
    objective = normalize_objective(request.objective) or DEFAULT_OBJECTIVE
    intensity = normalize_intensity(request.intensity) or DEFAULT_INTENSITY
    playbook = normalize_playbook(request.playbook) or runtime.default_playbook
    attempts = max(1, max_attempts if max_attempts is not None else runtime.draft_max_attempts)
    context = draft_log_context(request)

    blocks = build_fallback_pools(stage, intensity, playbook)
    template_id = None
    template = pick_template_for_locales(
        templates,
        locale_candidates(request.language),
        stage=stage,
        objective=objective,
        intensity=intensity,
        fan_name=request.fan_name or "",
        last_fan_msg=request.last_fan_msg or "",
        variant=request.variant,
        playbook=playbook,
    )
    if template is not None:
        stored = parse_blocks(template.blocks_json)
        if not stored.is_empty():
            blocks = merge_blocks(stored, blocks)
            template_id = str(template.id)
        else:
            logger.info("agency_template_empty_blocks", template_id=template.id, **context)

    def compose(variant: int) -> ComposedDraft:
        return build_agency_draft_from_blocks(
            stage=stage,
            objective=objective,
            intensity=intensity,
            blocks=blocks,
            fan_name=request.fan_name,
            last_fan_msg=request.last_fan_msg,
            offer=request.offer,
            variant=variant,
            mode=request.mode,
            layout=request.layout,
        )

    used_variant = request.variant
    draft = compose(used_variant)
    for attempt in range(attempts):
        used_variant = request.variant + attempt
        if attempt > 0:
            draft = compose(used_variant)
        reason = _rejection_reason(draft.text, request, hard_rules)
        if reason is None:
            break
        logger.info(
            "agency_draft_retry",
            attempt=attempt + 1,
            max_attempts=attempts,
            variant=used_variant,
            reason=reason,
            **context,
        )

    qa = scorer(draft.text)
    logger.info(
        "agency_draft_built",
        template_id=template_id,
        variant=used_variant,
        qa_score=qa.score,
        qa_warnings=len(qa.warnings),
        **context,
    )
    return DraftResult(text=draft.text, qa=qa, template_id=template_id, variant=used_variant)


async def build_agency_draft_for_creator(
    session: AsyncSession,
    creator_id: str,
    request: DraftRequest,
) -> DraftResult:
    """Load the creator's active templates, then build the draft."""
    locales = locale_candidates(request.language)
    templates = await template_repo.list_active_templates(session, creator_id, locales)
    logger.info(
        "agency_templates_loaded",
        creator_id=creator_id,
        locales=locales,
        template_count=len(templates),
    )
    return build_agency_draft(request, templates)
