"""Pick one persisted template for a fan context, deterministically."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import Any, Protocol

import structlog

from core.hashing import pick_index, stable_hash
from core.locale import normalize_locale_tag

logger = structlog.get_logger()


class TemplateLike(Protocol):
    id: Any
    stage: str
    objective: str
    intensity: str
    playbook: str | None
    language: str
    blocks_json: Any


def template_seed(
    fan_name: str,
    last_fan_msg: str,
    stage: str,
    objective: str,
    intensity: str,
) -> int:
    return stable_hash("|".join([fan_name, last_fan_msg, stage, objective, intensity]))


def _relaxed_filters(
    stage: str, objective: str, intensity: str
) -> list[Callable[[TemplateLike], bool]]:
    return [
        lambda t: t.stage == stage and t.objective == objective and t.intensity == intensity,
        lambda t: t.stage == stage and t.intensity == intensity,
        lambda t: t.stage == stage and t.objective == objective,
        lambda t: t.stage == stage,
        lambda t: t.objective == objective,
        lambda t: True,
    ]


def pick_template(
    templates: Sequence[TemplateLike],
    *,
    stage: str,
    objective: str,
    intensity: str,
    fan_name: str = "",
    last_fan_msg: str = "",
    variant: int = 0,
    playbook: str | None = None,
) -> TemplateLike | None:
    """Return a template or None when there is nothing to choose from.

    Candidates come from the first non-empty predicate, most specific first.
    Same fan + context + variant always yields the same template; bumping the
    variant cycles through the candidates.
    """
    if not templates:
        return None

    scoped = list(templates)
    if playbook and any(getattr(t, "playbook", None) == playbook for t in scoped):
        scoped = [t for t in scoped if getattr(t, "playbook", None) == playbook]

    candidates: list[TemplateLike] = []
    level = 0
    for level, predicate in enumerate(_relaxed_filters(stage, objective, intensity), start=1):
        candidates = [t for t in scoped if predicate(t)]
        if candidates:
            break
    if not candidates:
        return None

    seed = template_seed(fan_name or "", last_fan_msg or "", stage, objective, intensity)
    chosen = candidates[pick_index(seed, variant, len(candidates))]
    logger.debug(
        "agency_template_selected",
        template_id=chosen.id,
        match_level=level,
        candidate_count=len(candidates),
        variant=variant,
    )
    return chosen


def pick_template_for_locales(
    templates: Iterable[TemplateLike],
    locales: Sequence[str],
    **criteria,
) -> TemplateLike | None:
    """Try each locale in order, scoped to templates in that language."""
    pool = list(templates)
    for locale in locales:
        scoped = [t for t in pool if normalize_locale_tag(t.language) == locale]
        candidate = pick_template(scoped, **criteria)
        if candidate is not None:
            return candidate
    return None
