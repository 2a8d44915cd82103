import pytest

from core.hashing import DJB2_SEED, pick_index, stable_hash


def test_stable_hash_known_values():
    assert stable_hash("") == DJB2_SEED
    assert stable_hash("a") == 177604


def test_stable_hash_is_32_bit_and_repeatable():
    value = "Ana|me encantó tu foto|NEW|CONNECT|MEDIUM" * 20
    assert stable_hash(value) == stable_hash(value)
    assert 0 <= stable_hash(value) <= 0xFFFFFFFF
    assert 0 <= stable_hash("😀 emoji fuera del BMP") <= 0xFFFFFFFF


def test_pick_index_wraps_with_variant():
    seed = stable_hash("seed")
    size = 7
    assert pick_index(seed, 3, size) == pick_index(seed, 3 + size, size)
    assert {pick_index(seed, v, size) for v in range(size)} == set(range(size))


def test_pick_index_rejects_empty_pool():
    with pytest.raises(ValueError):
        pick_index(1, 0, 0)
