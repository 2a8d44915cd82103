"""Deterministic fallback phrase pools: intensity bases × stage hooks × playbook style."""

from __future__ import annotations

from functools import lru_cache

from agency.types import (
    TemplateBlocks,
    normalize_intensity,
    normalize_playbook,
    normalize_stage,
    unique_pool,
)
from core.constants import BLOCK_CATEGORIES, DEFAULT_PLAYBOOK
from core.exceptions import ConfigurationError
from core.text_utils import normalize_phrase

# Bases keep {fanName} / {context} for the composer; {hook}, {style} and
# {sensory} are expanded here.
BASES_BY_INTENSITY: dict[str, dict[str, list[str]]] = {
    "openers": {
        "SOFT": [
            "Hey {fanName}{hook} {style}",
            "Hola {fanName}{hook} {style}",
            "Ey {fanName}{hook} {style}",
            "{fanName}, te leo{hook} {style}",
            "Aquí estoy, {fanName}{hook} {style}",
        ],
        "MEDIUM": [
            "Hey {fanName}{hook} {style}",
            "Ey {fanName}{hook} {style}",
            "{fanName}, me gusta leerte{hook} {style}",
            "Hey, {fanName}{hook} {style}",
            "{fanName}, te tengo en mente{hook} {style}",
        ],
        "INTENSE": [
            "Ey {fanName}{hook} {style}",
            "{fanName}, me enciendes{hook} {style}",
            "Hey, {fanName}{hook} {style}",
            "{fanName}, me dejas con ganas{hook} {style}",
            "Ey {fanName}, ven{hook} {style}",
        ],
    },
    "bridges": {
        "SOFT": [
            "Sobre lo de {context}, me quedé pensando{hook} {style}",
            "Lo de {context} me dejó con curiosidad{hook} {style}",
            "Me quedé con {context}{hook} {style}",
            "Lo de {context} me gustó{hook} {style}",
            "Sobre {context}, me apetece seguir{hook} {style}",
        ],
        "MEDIUM": [
            "Lo de {context} me dejó con ganas{hook} {style}",
            "Sobre {context}, me encendió la curiosidad{hook} {style}",
            "Me quedé con {context} en la cabeza{hook} {style}",
            "Lo de {context} me hizo sonreír{hook} {style}",
            "Sobre lo de {context}, me quedé con ganas{hook} {style}",
        ],
        "INTENSE": [
            "Lo de {context} me dejó con tensión{hook} {style}",
            "Sobre {context}, me quedé con ganas de más{hook} {style}",
            "Me quedé con {context} muy en la piel{hook} {style}",
            "Lo de {context} me encendió{hook} {style}",
            "Sobre {context}, me quedé con fuego{hook} {style}",
        ],
    },
    "teases": {
        "SOFT": [
            "Podemos ir suave y subir si te apetece{hook} {sensory} {style}",
            "Te propongo algo suave y cercano{hook} {sensory} {style}",
            "Vamos con ritmo lento y rico{hook} {sensory} {style}",
            "Puedo guiarte con calma y picardía{hook} {sensory} {style}",
            "Me gusta empezar suave y jugar un poco{hook} {sensory} {style}",
        ],
        "MEDIUM": [
            "Podemos subir un poco el tono{hook} {sensory} {style}",
            "Te preparo algo con chispa{hook} {sensory} {style}",
            "Subimos la tensión sin ir a lo explícito{hook} {sensory} {style}",
            "Me apetece jugar más contigo{hook} {sensory} {style}",
            "Vamos a un punto más atrevido{hook} {sensory} {style}",
        ],
        "INTENSE": [
            "Puedo subir el tono con control{hook} {sensory} {style}",
            "Vamos con más fuego, sin pasarnos{hook} {sensory} {style}",
            "Te dejo en tensión y lo subo un paso{hook} {sensory} {style}",
            "Me apetece un punto más intenso{hook} {sensory} {style}",
            "Subimos claro y con cuidado{hook} {sensory} {style}",
        ],
    },
    "ctas": {
        "SOFT": [
            "¿Te apetece seguir{hook}?",
            "¿Lo hacemos con calma{hook}?",
            "¿Te va algo suave{hook}?",
            "¿Quieres que lo lleve despacio{hook}?",
            "¿Te apetece que empecemos{hook}?",
        ],
        "MEDIUM": [
            "¿Te apetece subir un poco{hook}?",
            "¿Lo dejamos suave o subimos{hook}?",
            "¿Te va un toque de chispa{hook}?",
            "¿Quieres que lo haga más intenso{hook}?",
            "¿Te apetece jugar un poco más{hook}?",
        ],
        "INTENSE": [
            "¿Quieres que suba el tono{hook}?",
            "¿Te va algo más intenso{hook}?",
            "¿Subimos un paso más{hook}?",
            "¿Te apetece ir más fuerte{hook}?",
            "¿Lo llevamos a otro nivel{hook}?",
        ],
    },
}

HOOKS_BY_STAGE: dict[str, dict[str, list[str]]] = {
    "openers": {
        "NEW": [", me encanta conocerte", ", vamos paso a paso", ", dime tu ritmo"],
        "WARM_UP": [", vamos suave", ", me quedé con ganas", ", cerquita y sin prisa"],
        "HEAT": [", subamos la tensión", ", me gusta cómo vamos", ", juguemos un poco más"],
        "OFFER": [", tengo un plan en mente", ", puedo prepararte algo rico", ", se me ocurrió algo"],
        "CLOSE": [", si quieres lo dejamos listo", ", lo cerramos cuando digas", ", lo dejamos hecho hoy"],
        "AFTERCARE": [", me gusta cuidarte", ", te leo con calma", ", respiramos un poco"],
        "RECOVERY": [", retomemos suave", ", sin presión", ", volvemos con calma"],
        "BOUNDARY": [", con límites claros", ", sin ir a lo explícito", ", cuidando el ritmo"],
    },
    "bridges": {
        "NEW": [" y con calma", " para ir poco a poco", " sin prisa"],
        "WARM_UP": [" y despacio", " con ganas", " a fuego lento"],
        "HEAT": [" y subiendo", " con más chispa", " con un poco más"],
        "OFFER": [" y se me ocurrió algo", " y te tengo un plan", " y puedo prepararte algo"],
        "CLOSE": [" y lo dejamos listo", " y lo cerramos", " y lo resolvemos hoy"],
        "AFTERCARE": [" y te cuido", " y te leo cerca", " y quedo pendiente"],
        "RECOVERY": [" y retomamos suave", " sin presión", " y volvemos poco a poco"],
        "BOUNDARY": [" con límites", " sin cruzar líneas", " con respeto"],
    },
    "teases": {
        "NEW": [", para empezar bien", ", paso a paso", ", sin correr"],
        "WARM_UP": [", calentando despacio", ", poco a poco", ", para ir entrando"],
        "HEAT": [", con más chispa", ", sin frenar", ", subiendo rico"],
        "OFFER": [", y lo dejo listo", ", si quieres te lo preparo", ", y te lo paso"],
        "CLOSE": [", y lo cerramos ya", ", si quieres lo cerramos", ", y lo dejamos hecho"],
        "AFTERCARE": [", y luego te cuido", ", y luego bajamos", ", con calma después"],
        "RECOVERY": [", y retomamos bien", ", sin presión", ", cuidando el ritmo"],
        "BOUNDARY": [", con límites claros", ", sin cruzar líneas", ", siempre con respeto"],
    },
    "ctas": {
        "NEW": [" ahora", " aquí", " conmigo"],
        "WARM_UP": [" ahora", " aquí", " un poquito"],
        "HEAT": [" ahora", " esta noche", " un poco más"],
        "OFFER": [" ahora", " aquí", " hoy"],
        "CLOSE": [" ya", " ahora", " hoy"],
        "AFTERCARE": [" ahora", " aquí", " con calma"],
        "RECOVERY": [" ahora", " aquí", " con calma"],
        "BOUNDARY": [" ahora", " aquí", " con calma"],
    },
}

# CTAs carry no playbook style.
PLAYBOOK_STYLES: dict[str, dict[str, list[str]]] = {
    "GIRLFRIEND": {
        "openers": ["me encanta cuidarte", "te tengo cerquita", "me gusta estar contigo"],
        "bridges": ["me nace seguirte", "me sale cuidarte", "me quedé con ganas"],
        "teases": ["me apetece mimarte", "quiero ir despacio", "me gusta tu calma"],
        "sensory": ["con tu voz cerquita", "con tu risa suave", "con ese calor en la piel"],
    },
    "PLAYFUL": {
        "openers": ["me apetece jugar", "hoy vengo traviesa", "me gusta provocarte"],
        "bridges": ["me pica la curiosidad", "me dan ganas de jugar", "me pongo juguetona"],
        "teases": ["te doy un guiño", "me apetece picarte", "quiero un toque travieso"],
        "sensory": ["con tu risa de lado", "con tu mirada traviesa", "con ese guiño que imagino"],
    },
    "ELEGANT": {
        "openers": ["con calma y clase", "me gusta lo sutil", "te leo con cariño"],
        "bridges": ["me inspira seguir", "me gusta tu tono", "me quedé con el detalle"],
        "teases": ["con estilo suave", "me gusta lo lento", "quiero algo delicado"],
        "sensory": ["con tu voz suave", "con tu ritmo tranquilo", "con esa calma elegante"],
    },
    "SOFT_DOMINANT": {
        "openers": ["déjame guiarte", "yo marco el ritmo", "sigue mi paso"],
        "bridges": ["deja que te lleve", "confía en mí", "yo conduzco"],
        "teases": ["te llevo despacio", "te marco el ritmo", "control suave y rico"],
        "sensory": ["con tu respiración cerca", "con tu ritmo bajo control", "con ese calor que sube"],
    },
}


def expand_templates(
    bases: list[str],
    *,
    hooks: list[str] | None = None,
    styles: list[str] | None = None,
    sensory: list[str] | None = None,
) -> tuple[str, ...]:
    """Cross-product of bases with hooks/styles/sensory, first-seen order.

    A placeholder only fans out when the phrase actually contains it.
    """
    hook_values = hooks or [""]
    style_values = styles or [""]
    sensory_values = sensory or [""]
    results: list[str] = []

    for base in bases:
        for hook in hook_values if "{hook}" in base else [""]:
            with_hook = base.replace("{hook}", hook, 1).strip()
            for style in style_values if "{style}" in with_hook else [""]:
                with_style = with_hook.replace("{style}", style, 1).strip()
                for sense in sensory_values if "{sensory}" in with_style else [""]:
                    phrase = normalize_phrase(with_style.replace("{sensory}", sense, 1))
                    if phrase:
                        results.append(phrase)
    return unique_pool(results)


def build_fallback_pools(
    stage: str,
    intensity: str,
    playbook: str | None = DEFAULT_PLAYBOOK,
) -> TemplateBlocks:
    """Pools for a stage/intensity/playbook. Unknown playbooks use the default."""
    normalized_stage = normalize_stage(stage)
    normalized_intensity = normalize_intensity(intensity)
    if normalized_stage is None or normalized_intensity is None:
        raise ConfigurationError(
            f"No fallback phrases for stage={stage} intensity={intensity}"
        )
    return _cached_pools(
        normalized_stage,
        normalized_intensity,
        normalize_playbook(playbook) or DEFAULT_PLAYBOOK,
    )


# Keys are normalized enums, so the cache holds at most one entry per combination.
@lru_cache(maxsize=None)
def _cached_pools(stage: str, intensity: str, playbook: str) -> TemplateBlocks:
    style = PLAYBOOK_STYLES[playbook]
    pools: dict[str, tuple[str, ...]] = {}
    for category in BLOCK_CATEGORIES:
        bases = BASES_BY_INTENSITY[category].get(intensity)
        hooks = HOOKS_BY_STAGE[category].get(stage)
        if not bases or not hooks:
            raise ConfigurationError(
                f"No fallback phrases for {category} at stage={stage} intensity={intensity}"
            )
        pools[category] = expand_templates(
            bases,
            hooks=hooks,
            styles=style.get(category),
            sensory=style["sensory"] if category == "teases" else None,
        )
    return TemplateBlocks(**pools)
