"""Deterministic string hashing for variant selection."""

DJB2_SEED = 5381
_MASK_32 = 0xFFFFFFFF


def _utf16_units(value: str):
    data = value.encode("utf-16-le")
    for i in range(0, len(data), 2):
        yield data[i] | (data[i + 1] << 8)


def stable_hash(value: str) -> int:
    """DJB2-xor over UTF-16 code units, folded to an unsigned 32-bit int.

    Unlike the builtin ``hash`` this never depends on PYTHONHASHSEED, so
    the same fan context always maps to the same pool index.
    """
    h = DJB2_SEED
    for unit in _utf16_units(value):
        h = ((h * 33) ^ unit) & _MASK_32
    return h


def pick_index(seed: int, variant: int, size: int) -> int:
    if size <= 0:
        raise ValueError("size must be positive")
    return (seed + variant) % size
