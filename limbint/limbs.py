"""Primitive operations on little-endian sequences of 64-bit limbs.

Limb sequences are ordered least significant limb first. Functions never
modify their arguments; they return new lists together with any carry,
borrow or overflow that the operation produced.
"""

from collections.abc import Sequence

LIMB_BITS = 64
LIMB_MASK = (1 << LIMB_BITS) - 1
_DOUBLE_MASK = (1 << (2 * LIMB_BITS)) - 1


def adc(lhs: int, rhs: int, carry: int) -> tuple[int, int]:
    """Return the low limb and the carry of ``lhs + rhs + carry``."""
    total = lhs + rhs + carry
    return total & LIMB_MASK, total >> LIMB_BITS


def sbb(lhs: int, rhs: int, borrow: int) -> tuple[int, int]:
    """Return the low limb and the borrow of ``lhs - rhs - borrow``."""
    result = (lhs - rhs - borrow) & _DOUBLE_MASK
    high = result >> LIMB_BITS
    return result & LIMB_MASK, (-high) & LIMB_MASK


def cmp(lhs: Sequence[int], rhs: Sequence[int]) -> int:
    """Compare two equally long limb sequences; return -1, 0 or 1."""
    if len(lhs) != len(rhs):
        raise ValueError(
            f"limb sequences differ in length: {len(lhs)} != {len(rhs)}"
        )
    for left, right in zip(reversed(lhs), reversed(rhs)):
        if left != right:
            return -1 if left < right else 1
    return 0


def adc_n(
    lhs: Sequence[int], rhs: Sequence[int], carry: int
) -> tuple[list[int], int]:
    """Compute ``lhs + rhs + carry`` over the common length; return limbs and carry."""
    out = list(lhs)
    for index, (left, right) in enumerate(zip(lhs, rhs)):
        out[index], carry = adc(left, right, carry)
    return out, carry


def sbb_n(
    lhs: Sequence[int], rhs: Sequence[int], carry: int
) -> tuple[list[int], int]:
    """Compute ``lhs - rhs - carry`` over the common length; return limbs and borrow."""
    out = list(lhs)
    for index, (left, right) in enumerate(zip(lhs, rhs)):
        out[index], carry = sbb(left, right, carry)
    return out, carry


def _check_shift(amount: int) -> None:
    if not 0 <= amount < LIMB_BITS:
        raise ValueError(f"shift amount must be in [0, {LIMB_BITS}), got {amount}")


def shift_left_small(limbs: Sequence[int], amount: int) -> tuple[list[int], int]:
    """Shift left by fewer than 64 bits; return limbs and the bits shifted out."""
    _check_shift(amount)
    overflow = 0
    out = []
    for limb in limbs:
        out.append(((limb << amount) & LIMB_MASK) | overflow)
        overflow = limb >> (LIMB_BITS - amount)
    return out, overflow


def shift_right_small(limbs: Sequence[int], amount: int) -> tuple[list[int], int]:
    """Shift right by fewer than 64 bits; return limbs and the bits shifted out.

    The shifted-out bits are returned in the top of a limb.
    """
    _check_shift(amount)
    overflow = 0
    out = []
    for limb in reversed(limbs):
        out.append((limb >> amount) | overflow)
        overflow = (limb << (LIMB_BITS - amount)) & LIMB_MASK
    out.reverse()
    return out, overflow