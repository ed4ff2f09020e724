"""Division of limb sequences by one- and two-limb divisors using reciprocals.

The algorithms follow Möller and Granlund, "Improved division by invariant
integers". Limb sequences are little-endian; functions return new lists and
never modify their arguments.
"""

from collections.abc import Sequence

from limbint.limbs import LIMB_BITS, LIMB_MASK
from limbint.reciprocal import reciprocal, reciprocal_2

_HIGH_BIT = 1 << (LIMB_BITS - 1)
_DOUBLE_HIGH_BIT = 1 << (2 * LIMB_BITS - 1)
_DOUBLE_MASK = (1 << (2 * LIMB_BITS)) - 1


def _check_divisor(d: int) -> None:
    if not _HIGH_BIT <= d <= LIMB_MASK:
        raise ValueError(f"divisor must lie in [2**63, 2**64), got {d:#x}")


def _check_divisor_2(d: int) -> None:
    if not _DOUBLE_HIGH_BIT <= d <= _DOUBLE_MASK:
        raise ValueError(f"divisor must lie in [2**127, 2**128), got {d:#x}")


def _check_numerator(limbs: Sequence[int]) -> None:
    if not limbs:
        raise ValueError("numerator must have at least one limb")
    if limbs[-1] == 0:
        raise ValueError("highest limb of the numerator must be non-zero")


def _div_2x1(u: int, d: int, v: int) -> tuple[int, int]:
    q = (u + (u >> LIMB_BITS) * v) & _DOUBLE_MASK
    q0 = q & LIMB_MASK
    q1 = ((q >> LIMB_BITS) + 1) & LIMB_MASK
    r = ((u & LIMB_MASK) - q1 * d) & LIMB_MASK
    if r > q0:
        q1 = (q1 - 1) & LIMB_MASK
        r = (r + d) & LIMB_MASK
    if r >= d:
        q1 = (q1 + 1) & LIMB_MASK
        r = (r - d) & LIMB_MASK
    return q1, r


def _div_3x2(u21: int, u0: int, d: int, v: int) -> tuple[int, int]:
    u2 = u21 >> LIMB_BITS
    q = (u2 * v + u21) & _DOUBLE_MASK
    q_high = q >> LIMB_BITS
    q_low = q & LIMB_MASK
    d_high = d >> LIMB_BITS
    d_low = d & LIMB_MASK
    r1 = ((u21 & LIMB_MASK) - q_high * d_high) & LIMB_MASK
    t = d_low * q_high
    r = (((r1 << LIMB_BITS) | u0) - t - d) & _DOUBLE_MASK
    q1 = (q_high + 1) & LIMB_MASK
    if (r >> LIMB_BITS) >= q_low:
        q1 = (q1 - 1) & LIMB_MASK
        r = (r + d) & _DOUBLE_MASK
    if r >= d:
        q1 = (q1 + 1) & LIMB_MASK
        r = (r - d) & _DOUBLE_MASK
    return q1, r


def div_2x1_ref(u: int, d: int) -> tuple[int, int]:
    """Divide a two-limb ``u`` by a normalized limb ``d`` with plain division."""
    _check_divisor(d)
    if not 0 <= u or (u >> LIMB_BITS) >= d:
        raise ValueError("numerator must be below d * 2**64")
    return u // d, u % d


def div_2x1_mg10(u: int, d: int, v: int) -> tuple[int, int]:
    """Quotient and remainder of a two-limb ``u`` by a normalized limb ``d``.

    Requires ``u < d * 2**64`` and ``v == reciprocal(d)``. Algorithm 4.
    """
    _check_divisor(d)
    if not 0 <= u or (u >> LIMB_BITS) >= d:
        raise ValueError("numerator must be below d * 2**64")
    if v != reciprocal(d):
        raise ValueError("v is not the reciprocal of d")
    return _div_2x1(u, d, v)


def div_2x1(u: int, d: int, v: int) -> tuple[int, int]:
    """Quotient and remainder of a two-limb number by a normalized limb."""
    return div_2x1_mg10(u, d, v)


def div_3x2_ref(n21: int, n0: int, d: int) -> int:
    """Approximate quotient of the three-limb ``[n21, n0]`` by a normalized ``d``.

    May return a quotient one below the exact one.
    """
    _check_divisor_2(d)
    if not 0 <= n21 < d:
        raise ValueError("high part of the numerator must be below the divisor")
    n2 = n21 >> LIMB_BITS
    n1 = n21 & LIMB_MASK
    d1 = d >> LIMB_BITS
    d0 = d & LIMB_MASK

    if n2 == d1:
        neg_remainder = (d0 - ((n1 << LIMB_BITS) | n0)) & _DOUBLE_MASK
        return LIMB_MASK - 1 if neg_remainder > d else LIMB_MASK

    q, r = div_2x1_ref(n21, d1)
    if q * d0 > ((n0 << LIMB_BITS) | r):
        q -= 1
        r += d1
        if r <= LIMB_MASK and q * d0 > ((n0 << LIMB_BITS) | r):
            q -= 1
    return q


def div_3x2_mg10(u21: int, u0: int, d: int, v: int) -> tuple[int, int]:
    """Quotient limb and two-limb remainder of ``[u21, u0]`` by a normalized ``d``.

    Requires ``u21 < d`` and ``v == reciprocal_2(d)``. Algorithm 5.
    """
    _check_divisor_2(d)
    if not 0 <= u21 < d:
        raise ValueError("high part of the numerator must be below the divisor")
    if not 0 <= u0 <= LIMB_MASK:
        raise ValueError(f"u0 must be a single limb, got {u0:#x}")
    if v != reciprocal_2(d):
        raise ValueError("v is not the reciprocal of d")
    return _div_3x2(u21, u0, d, v)


def div_3x2(u21: int, u0: int, d: int, v: int) -> tuple[int, int]:
    """Quotient limb and remainder of a three-limb number by a normalized two-limb one."""
    return div_3x2_mg10(u21, u0, d, v)


def div_nx1_normalized(u: Sequence[int], d: int) -> tuple[list[int], int]:
    """Divide limbs ``u`` by a normalized limb ``d``; return quotient limbs and remainder."""
    _check_divisor(d)
    v = reciprocal(d)
    out = list(u)
    r = 0
    for index in reversed(range(len(out))):
        out[index], r = _div_2x1((r << LIMB_BITS) | out[index], d, v)
    return out, r


def div_nx1(limbs: Sequence[int], divisor: int) -> tuple[list[int], int]:
    """Divide limbs by any non-zero single limb; return quotient limbs and remainder.

    The highest limb of ``limbs`` must be non-zero.
    """
    if not 0 < divisor <= LIMB_MASK:
        raise ValueError(f"divisor must lie in [1, 2**64), got {divisor:#x}")
    _check_numerator(limbs)
    shift = LIMB_BITS - divisor.bit_length()
    if shift == 0:
        return div_nx1_normalized(limbs, divisor)
    divisor <<= shift
    v = reciprocal(divisor)
    back = LIMB_BITS - shift

    out = list(limbs)
    remainder = limbs[-1] >> back
    for i in range(len(limbs) - 1, 0, -1):
        u = ((limbs[i] << shift) & LIMB_MASK) | (limbs[i - 1] >> back)
        out[i], remainder = _div_2x1((remainder << LIMB_BITS) | u, divisor, v)
    first = (limbs[0] << shift) & LIMB_MASK
    out[0], remainder = _div_2x1((remainder << LIMB_BITS) | first, divisor, v)
    return out, remainder >> shift


def div_nx2_normalized(u: Sequence[int], d: int) -> tuple[list[int], int]:
    """Divide limbs ``u`` by a normalized two-limb ``d``; return quotient limbs and remainder."""
    _check_divisor_2(d)
    v = reciprocal_2(d)
    out = list(u)
    remainder = 0
    for index in reversed(range(len(out))):
        out[index], remainder = _div_3x2(remainder, out[index], d, v)
    return out, remainder


def div_nx2(limbs: Sequence[int], divisor: int) -> tuple[list[int], int]:
    """Divide limbs by a divisor in ``[2**64, 2**128)``; return quotient limbs and remainder.

    The highest limb of ``limbs`` must be non-zero.
    """
    if not 1 << LIMB_BITS <= divisor <= _DOUBLE_MASK:
        raise ValueError(f"divisor must lie in [2**64, 2**128), got {divisor:#x}")
    _check_numerator(limbs)
    shift = LIMB_BITS - (divisor >> LIMB_BITS).bit_length()
    if shift == 0:
        return div_nx2_normalized(limbs, divisor)
    divisor <<= shift
    v = reciprocal_2(divisor)
    back = LIMB_BITS - shift

    out = list(limbs)
    remainder = limbs[-1] >> back
    for i in range(len(limbs) - 1, 0, -1):
        u = ((limbs[i] << shift) & LIMB_MASK) | (limbs[i - 1] >> back)
        out[i], remainder = _div_3x2(remainder, u, divisor, v)
    first = (limbs[0] << shift) & LIMB_MASK
    out[0], remainder = _div_3x2(remainder, first, divisor, v)
    return out, remainder >> shift