import pytest

from agency import phrase_pools
from agency.phrase_pools import build_fallback_pools, expand_templates
from core.constants import AGENCY_INTENSITIES, AGENCY_PLAYBOOKS, AGENCY_STAGES, BLOCK_CATEGORIES
from core.exceptions import ConfigurationError


def test_expand_templates_cross_product_in_order():
    assert expand_templates(["a{hook}", "b"], hooks=[" x", " y"]) == ("a x", "a y", "b")


def test_expand_templates_dedups_after_normalization():
    assert expand_templates(["a{hook}", "a  x"], hooks=[" x"]) == ("a x",)
    assert expand_templates(["Hey{hook} ,{style}"], hooks=[""], styles=[" ven"]) == ("Hey, ven",)


@pytest.mark.parametrize("stage", AGENCY_STAGES)
@pytest.mark.parametrize("intensity", AGENCY_INTENSITIES)
def test_every_stage_intensity_has_non_empty_pools(stage, intensity):
    blocks = build_fallback_pools(stage, intensity)
    for category in BLOCK_CATEGORIES:
        pool = blocks.pool(category)
        assert pool, category
        assert len(pool) == len(set(pool))
        for phrase in pool:
            assert "{hook}" not in phrase
            assert "{style}" not in phrase
            assert "{sensory}" not in phrase


@pytest.mark.parametrize("playbook", AGENCY_PLAYBOOKS)
def test_every_playbook_builds(playbook):
    assert not build_fallback_pools("HEAT", "INTENSE", playbook).is_empty()


def test_ctas_are_questions():
    blocks = build_fallback_pools("OFFER", "MEDIUM")
    assert all(phrase.endswith("?") for phrase in blocks.ctas)


def test_pools_are_deterministic():
    phrase_pools._cached_pools.cache_clear()
    first = build_fallback_pools("NEW", "SOFT")
    phrase_pools._cached_pools.cache_clear()
    assert build_fallback_pools("NEW", "SOFT") == first


def test_unknown_combination_raises():
    with pytest.raises(ConfigurationError):
        build_fallback_pools("NOT_A_STAGE", "SOFT")


def test_raw_enum_spellings_share_one_cache_entry():
    phrase_pools._cached_pools.cache_clear()
    first = build_fallback_pools("HEAT", "INTENSE", "PLAYFUL")
    assert build_fallback_pools(" heat ", "intense", "playful") is first
    assert phrase_pools._cached_pools.cache_info().currsize == 1


def test_unknown_playbook_uses_default_pools():
    phrase_pools._cached_pools.cache_clear()
    default = build_fallback_pools("NEW", "SOFT")
    assert build_fallback_pools("NEW", "SOFT", "not-a-playbook") is default
    assert build_fallback_pools("NEW", "SOFT", None) is default
    assert phrase_pools._cached_pools.cache_info().currsize == 1
