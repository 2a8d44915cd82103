import pytest

from core.similarity import (
    get_near_duplicate_similarity,
    has_long_overlap,
    is_near_duplicate,
    is_too_similar_draft,
    sanitize_draft_text,
)

AVOID = ["Hey Ana, me quedé pensando en lo de la foto"]


def test_similarity_identical_and_punctuation_insensitive():
    assert get_near_duplicate_similarity("hola que tal", "hola que tal") == 1.0
    assert get_near_duplicate_similarity("Hey, Ana!", "hey ana") == 1.0
    assert get_near_duplicate_similarity("hola", "HOLA") == 1.0


def test_similarity_partial_overlap():
    assert get_near_duplicate_similarity("a b c", "a b d") == pytest.approx(1 / 3)


def test_similarity_empty_side_is_zero():
    assert get_near_duplicate_similarity("", "algo") == 0.0
    assert get_near_duplicate_similarity("  ¡!  ", "algo") == 0.0


@pytest.mark.parametrize(
    "a,b",
    [
        ("me gusta leerte hoy", "hoy me gusta leerte"),
        ("uno dos tres cuatro", "uno dos"),
        ("x", "y z"),
    ],
)
def test_similarity_is_symmetric_and_bounded(a, b):
    forward = get_near_duplicate_similarity(a, b)
    assert forward == get_near_duplicate_similarity(b, a)
    assert 0.0 <= forward <= 1.0


def test_is_near_duplicate_threshold():
    assert is_near_duplicate("me encanta leerte ahora", "Me encanta leerte, ahora.")
    assert not is_near_duplicate("a b c", "a b d")
    assert is_near_duplicate("a b c", "a b d", threshold=0.3)


def test_sanitize_draft_text_drops_preamble_label_and_quotes():
    raw = 'assistant: aquí va\n"Draft: ¿Seguimos?"'
    assert sanitize_draft_text(raw) == "Draft: ¿Seguimos?"
    assert sanitize_draft_text("Borrador: ¿Seguimos?") == "¿Seguimos?"
    assert sanitize_draft_text("“¿Seguimos?”") == "¿Seguimos?"
    assert sanitize_draft_text(None) == ""


def test_too_similar_on_shared_head_tokens():
    text = "Hey Ana, me quedé pensando en lo de la foto y quiero más"
    assert is_too_similar_draft(text, AVOID) is True


def test_too_similar_on_long_verbatim_overlap():
    text = "Mira, me quedé pensando en lo de la foto"
    assert is_too_similar_draft(text, AVOID) is True


def test_too_similar_ignores_labels():
    assert is_too_similar_draft("Draft: Hey Ana, me quedé pensando en lo de la foto", AVOID)


def test_not_too_similar_for_different_text():
    assert is_too_similar_draft("¿Te apetece seguir ahora?", AVOID) is False
    assert is_too_similar_draft("algo", []) is False
    assert is_too_similar_draft("", AVOID) is False


def test_has_long_overlap_requires_min_length():
    assert has_long_overlap("corto", "corto y algo más") is False
    assert has_long_overlap("me quedé pensando en ti", "ayer me quedé pensando en ti toda la noche")
