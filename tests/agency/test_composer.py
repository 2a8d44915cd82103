from agency.composer import (
    build_agency_draft_from_blocks,
    build_context_snippet,
    ensure_context_reference,
    interpolate,
    requires_offer,
)
from agency.phrase_pools import build_fallback_pools
from agency.types import OfferContext, TemplateBlocks
from core.constants import SAFE_CONSENT_REPLY, SAFE_UNDERAGE_REPLY

BLOCKS = TemplateBlocks(
    openers=("Hey {fanName}",),
    bridges=("Lo de {context} me dejó pensando",),
    teases=("Me apetece jugar contigo",),
    ctas=("¿Seguimos ahora",),
)
CONTEXT_BRIDGE = TemplateBlocks(
    openers=("Hey {fanName}",),
    bridges=("Sobre {context}, me quedé pensando",),
    teases=("Me apetece jugar contigo",),
    ctas=("¿Seguimos ahora?",),
)


def _compose(**overrides):
    kwargs = {
        "stage": "NEW",
        "objective": "CONNECT",
        "intensity": "MEDIUM",
        "blocks": BLOCKS,
        "fan_name": "Ana López",
        "last_fan_msg": "Me encantó tu foto de ayer!",
    }
    kwargs.update(overrides)
    return build_agency_draft_from_blocks(**kwargs)


def test_context_snippet_truncates_and_strips_trailing_punctuation():
    assert build_context_snippet("Me encantó tu foto de ayer!") == "Me encantó tu foto de ayer"
    long_msg = "uno dos tres cuatro cinco seis siete ocho nueve diez once doce"
    assert build_context_snippet(long_msg) == "uno dos tres cuatro cinco seis siete ocho nueve diez"
    assert build_context_snippet("   ") is None
    assert build_context_snippet("tengo 16 años") is None
    assert len(build_context_snippet("x" * 200)) == 80


def test_interpolate_blanks_unknown_keys():
    assert interpolate("Hey {fanName} {other}", {"fanName": "Ana"}) == "Hey Ana "


def test_ensure_context_reference():
    assert ensure_context_reference("Lo de {context}", "tu foto") == "Lo de tu foto"
    assert ensure_context_reference("Me gusta", "tu foto") == "Me gusta Sobre lo de tu foto,"
    assert ensure_context_reference("", "tu foto") == "Sobre lo de tu foto,"
    assert ensure_context_reference("Me gusta tu foto", "tu foto") == "Me gusta tu foto"
    assert ensure_context_reference(" Me gusta ", None) == "Me gusta"


def test_full_draft_has_one_part_per_line():
    draft = _compose()
    assert draft.text == (
        "Hey Ana\n"
        "Lo de Me encantó tu foto de ayer me dejó pensando\n"
        "Me apetece jugar contigo\n"
        "¿Seguimos ahora?"
    )
    assert draft.context_snippet == "Me encantó tu foto de ayer"
    assert list(draft.parts) == ["opener", "bridge", "tease", "cta"]


def test_inline_layout_joins_with_spaces():
    draft = _compose(layout="inline")
    assert "\n" not in draft.text
    assert draft.text.startswith("Hey Ana Lo de")


def test_short_draft_skips_bridge_and_moves_context_into_tease():
    full = _compose()
    short = _compose(mode="short")
    assert full.parts["bridge"] not in short.text
    assert "bridge" not in short.parts
    assert short.text == (
        "Hey Ana\n"
        "Me apetece jugar contigo Sobre lo de Me encantó tu foto de ayer\n"
        "¿Seguimos ahora?"
    )
    assert short.parts["tease"] == "Me apetece jugar contigo Sobre lo de Me encantó tu foto de ayer"


def test_inline_short_draft_keeps_comma_before_cta():
    draft = _compose(mode="short", layout="inline")
    assert draft.text == (
        "Hey Ana Me apetece jugar contigo Sobre lo de Me encantó tu foto de ayer, ¿Seguimos ahora?"
    )


def test_appended_context_bridge_line_has_no_trailing_comma():
    blocks = TemplateBlocks(
        openers=("Hey {fanName}",),
        bridges=("Me quedé pensando",),
        ctas=("¿Seguimos?",),
    )
    draft = _compose(blocks=blocks)
    assert draft.text == "Hey Ana\nMe quedé pensando Sobre lo de Me encantó tu foto de ayer\n¿Seguimos?"
    assert not any(line.endswith(",") for line in draft.text.splitlines())


def test_empty_context_drops_context_bridge():
    draft = _compose(blocks=CONTEXT_BRIDGE, last_fan_msg="")
    assert draft.text == "Hey Ana\nMe apetece jugar contigo\n¿Seguimos ahora?"
    assert "{" not in draft.text
    assert "Sobre" not in draft.text
    assert draft.context_snippet is None


def test_missing_name_leaves_no_dangling_punctuation():
    blocks = TemplateBlocks(openers=("{fanName}, te leo ahora",), ctas=("¿Seguimos?",))
    draft = _compose(blocks=blocks, fan_name=None, last_fan_msg=None)
    assert draft.text == "te leo ahora\n¿Seguimos?"


def test_unsafe_context_returns_safe_reply():
    underage = _compose(last_fan_msg="tengo 16 años")
    assert underage.text == SAFE_UNDERAGE_REPLY
    assert all(value is None for value in underage.used_blocks.values())

    coercion = _compose(last_fan_msg="no me digas que no")
    assert coercion.text == SAFE_CONSENT_REPLY


def test_offer_phrases_are_skipped_without_offer():
    blocks = TemplateBlocks(
        openers=("Hey {fanName}",),
        teases=("Te preparo {offerTitle} por {offerPrice}", "Me apetece jugar contigo"),
        ctas=("¿Seguimos?",),
    )
    for variant in range(4):
        draft = _compose(blocks=blocks, variant=variant)
        assert draft.used_blocks["tease"] == "Me apetece jugar contigo"
    assert requires_offer("Te preparo {offerTitle}")
    assert not requires_offer("Me apetece jugar contigo")


def test_offer_placeholders_are_filled():
    blocks = TemplateBlocks(
        openers=("Hey {fanName}",),
        teases=("Te preparo {offerTitle} por {offerPrice}",),
        ctas=("¿Lo quieres?",),
    )
    offer = OfferContext(title="un vídeo", price_cents=1500, currency="eur")
    draft = _compose(blocks=blocks, offer=offer, last_fan_msg=None)
    assert draft.text == "Hey Ana\nTe preparo un vídeo por 15 EUR\n¿Lo quieres?"


def test_banned_terms_are_softened():
    blocks = TemplateBlocks(openers=("Tengo una oferta especial",), ctas=("¿Te va?",))
    draft = _compose(blocks=blocks, last_fan_msg=None)
    assert draft.text == "Tengo una idea a tu medida\n¿Te va?"


def test_fallback_pool_draft_is_deterministic_and_varies():
    blocks = build_fallback_pools("HEAT", "INTENSE")
    first = _compose(blocks=blocks, stage="HEAT", intensity="INTENSE", variant=2)
    again = _compose(blocks=blocks, stage="HEAT", intensity="INTENSE", variant=2)
    other = _compose(blocks=blocks, stage="HEAT", intensity="INTENSE", variant=3)
    assert first == again
    assert first.text != other.text
    assert first.text.endswith("?")
    assert "{" not in first.text
