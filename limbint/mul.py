"""Multiplication and Montgomery reduction on 64-bit limb sequences."""

from collections.abc import Sequence
from itertools import zip_longest

from limbint.limbs import LIMB_BITS, LIMB_MASK, cmp, sbb, sbb_n


def _addmul_nx1_into(out: list[int], pos: int, a: Sequence[int], b: int) -> int:
    carry = 0
    for index, limb in enumerate(a, start=pos):
        product = limb * b + carry + out[index]
        out[index] = product & LIMB_MASK
        carry = product >> LIMB_BITS
    return carry


def _add_nx1_into(out: list[int], pos: int, a: int) -> int:
    if a == 0:
        return 0
    for index in range(pos, len(out)):
        total = out[index] + a
        out[index] = total & LIMB_MASK
        a = total >> LIMB_BITS
        if a == 0:
            return 0
    return a


def _strip(limbs: Sequence[int]) -> tuple[list[int], int]:
    """Remove zero limbs at both ends; return the rest and the count removed in front."""
    rest = list(limbs)
    leading = next((i for i, limb in enumerate(rest) if limb), len(rest))
    rest = rest[leading:]
    while rest and rest[-1] == 0:
        rest.pop()
    return rest, leading


def addmul_ref(
    result: Sequence[int], a: Sequence[int], b: Sequence[int]
) -> tuple[list[int], bool]:
    """Schoolbook ``result + a * b``; return the truncated limbs and an overflow flag."""
    out = list(result)
    overflow = 0
    missing = object()
    for shift, a_limb in enumerate(a):
        carry = 0
        for index, b_limb in zip_longest(
            range(shift, len(out)), b, fillvalue=missing
        ):
            if index is not missing and b_limb is not missing:
                carry += out[index] + a_limb * b_limb
                out[index] = carry & LIMB_MASK
            elif index is not missing:
                carry += out[index]
                out[index] = carry & LIMB_MASK
            else:
                carry += a_limb * b_limb
                overflow |= carry & LIMB_MASK
            carry >>= LIMB_BITS
        overflow |= carry & LIMB_MASK
    return out, overflow != 0


def addmul(
    lhs: Sequence[int], a: Sequence[int], b: Sequence[int]
) -> tuple[list[int], bool]:
    """Compute ``lhs + a * b`` truncated to the length of ``lhs``.

    Returns the new limbs and whether the exact result did not fit.
    Inputs may have any length.
    """
    out = list(lhs)
    a, a_zeros = _strip(a)
    b, b_zeros = _strip(b)
    offset = min(len(out), a_zeros + b_zeros)
    if not a or not b:
        return out, False
    if offset == len(out):
        return out, True
    if len(b) > len(a):
        a, b = b, a

    overflow = False
    for pos, b_limb in enumerate(b, start=offset):
        window = len(out) - pos
        if window >= len(a):
            carry = _addmul_nx1_into(out, pos, a, b_limb)
            carry = _add_nx1_into(out, pos + len(a), carry)
            overflow |= carry != 0
        else:
            overflow = True
            if window == 0:
                break
            _addmul_nx1_into(out, pos, a[:window], b_limb)
    return out, overflow


def add_nx1(lhs: Sequence[int], a: int) -> tuple[list[int], int]:
    """Compute ``lhs + a`` for a single limb ``a``; return limbs and carry."""
    out = list(lhs)
    carry = _add_nx1_into(out, 0, a)
    return out, carry


def addmul_n(lhs: Sequence[int], a: Sequence[int], b: Sequence[int]) -> list[int]:
    """Compute wrapping ``lhs + a * b`` for three sequences of the same length."""
    if not len(lhs) == len(a) == len(b):
        raise ValueError(
            f"lengths must match: {len(lhs)}, {len(a)}, {len(b)}"
        )
    out, _ = addmul(lhs, a, b)
    return out


def addmul_nx1(lhs: Sequence[int], a: Sequence[int], b: int) -> tuple[list[int], int]:
    """Compute ``lhs + a * b`` for a single limb ``b``; return limbs and carry limb."""
    if len(lhs) != len(a):
        raise ValueError(f"lengths must match: {len(lhs)} != {len(a)}")
    out = list(lhs)
    carry = _addmul_nx1_into(out, 0, a, b)
    return out, carry


def submul_nx1(lhs: Sequence[int], a: Sequence[int], b: int) -> tuple[list[int], int]:
    """Compute ``lhs - a * b`` for a single limb ``b``; return limbs and borrow limb."""
    if len(lhs) != len(a):
        raise ValueError(f"lengths must match: {len(lhs)} != {len(a)}")
    out = list(lhs)
    carry = 0
    borrow = 0
    for index, (left, limb) in enumerate(zip(lhs, a)):
        product = limb * b + carry
        carry = product >> LIMB_BITS
        out[index], borrow = sbb(left, product & LIMB_MASK, borrow)
    return out, borrow + carry


def mul_redc(
    a: Sequence[int], b: Sequence[int], m: Sequence[int], inv: int
) -> list[int]:
    """Montgomery product ``a * b / 2**(64 n) mod m``.

    ``inv`` must satisfy ``inv * m[0] == -1 (mod 2**64)``. Follows
    Algorithm 14.32 of the Handbook of Applied Cryptography.
    """
    size = len(m)
    if size == 0:
        raise ValueError("modulus must have at least one limb")
    if len(a) != size or len(b) != size:
        raise ValueError("operands must have as many limbs as the modulus")
    if (inv * m[0]) & LIMB_MASK != LIMB_MASK:
        raise ValueError("inv is not the negated inverse of the lowest modulus limb")

    temp, _ = addmul([0] * (2 * size + 1), a, b)

    for i in range(size):
        u = (temp[i] * inv) & LIMB_MASK
        carry = 0
        for index, m_limb in enumerate(m, start=i):
            carry += temp[index] + m_limb * u
            temp[index] = carry & LIMB_MASK
            carry >>= LIMB_BITS
        for index in range(i + size, len(temp)):
            carry += temp[index]
            temp[index] = carry & LIMB_MASK
            carry >>= LIMB_BITS

    result = temp[size : 2 * size]
    if temp[-1] != 0 or cmp(result, m) >= 0:
        result, _ = sbb_n(result, m, 0)
    return result