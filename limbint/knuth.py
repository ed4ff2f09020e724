"""Knuth long division of limb sequences using two-limb reciprocals.

Limb sequences are little-endian. The functions return new lists and never
modify their arguments.
"""

from collections.abc import Sequence

from limbint.limbs import LIMB_BITS, LIMB_MASK, adc_n
from limbint.mul import submul_nx1
from limbint.reciprocal import reciprocal_2
from limbint.small import div_3x2

_HIGH_BIT = 1 << (LIMB_BITS - 1)
_DOUBLE_MASK = (1 << (2 * LIMB_BITS)) - 1


def _join(high: int, low: int) -> int:
    return (high << LIMB_BITS) | low


def _submul_at(
    limbs: list[int], start: int, divisor: Sequence[int], q: int
) -> int:
    """Subtract ``divisor * q`` from ``limbs[start:]`` in place; return the borrow."""
    end = start + len(divisor)
    limbs[start:end], borrow = submul_nx1(limbs[start:end], divisor, q)
    return borrow


def _add_back_at(limbs: list[int], start: int, divisor: Sequence[int]) -> None:
    """Add ``divisor`` to ``limbs[start:]`` in place, dropping the final carry."""
    end = start + len(divisor)
    limbs[start:end], _ = adc_n(limbs[start:end], divisor, 0)


def div_nxm_normalized(
    numerator: Sequence[int], divisor: Sequence[int]
) -> tuple[list[int], list[int]]:
    """Divide by a normalized divisor; return ``(quotient, remainder)``.

    The divisor must have at least two limbs and its highest bit set, and the
    numerator must be longer than the divisor. The quotient has
    ``len(numerator) - len(divisor)`` limbs and the remainder as many limbs as
    the divisor.
    """
    n = len(divisor)
    if n < 2:
        raise ValueError("divisor must have at least two limbs")
    if len(numerator) <= n:
        raise ValueError("numerator must be longer than the divisor")
    if divisor[-1] < _HIGH_BIT:
        raise ValueError("highest bit of the divisor must be set")

    limbs = list(numerator)
    m = len(limbs) - n - 1
    d = _join(divisor[n - 1], divisor[n - 2])
    v = reciprocal_2(d)

    for j in range(m, -1, -1):
        n21 = _join(limbs[j + n], limbs[j + n - 1])
        n0 = limbs[j + n - 2]

        if n21 == d:
            q = LIMB_MASK
            _submul_at(limbs, j, divisor, q)
            limbs[j + n] = q
            continue

        q, r = div_3x2(n21, n0, d, v)
        borrow = _submul_at(limbs, j, divisor[: n - 2], q)
        r -= borrow
        borrowed = r < 0
        r &= _DOUBLE_MASK
        limbs[j + n - 2] = r & LIMB_MASK
        limbs[j + n - 1] = r >> LIMB_BITS

        if borrowed:
            q = (q - 1) & LIMB_MASK
            _add_back_at(limbs, j, divisor)

        limbs[j + n] = q

    return limbs[n:], limbs[:n]


def div_nxm(
    numerator: Sequence[int], divisor: Sequence[int]
) -> tuple[list[int], list[int]]:
    """Divide with implicit normalization; return ``(quotient, remainder)``.

    The divisor must have at least three limbs with a non-zero highest limb,
    and the numerator must be at least as long as the divisor. The quotient
    has ``len(numerator)`` limbs, zero-padded at the top, and the remainder as
    many limbs as the divisor.
    """
    n = len(divisor)
    if n < 3:
        raise ValueError("divisor must have at least three limbs")
    if len(numerator) < n:
        raise ValueError("numerator must be at least as long as the divisor")
    if divisor[-1] == 0:
        raise ValueError("highest limb of the divisor must be non-zero")

    limbs = list(numerator)
    size = len(limbs)
    m = size - n

    d = _join(divisor[n - 1], divisor[n - 2])
    shift = LIMB_BITS - divisor[n - 1].bit_length()
    back = LIMB_BITS - shift
    if shift:
        d = ((d << shift) & _DOUBLE_MASK) | (divisor[n - 3] >> back)
    v = reciprocal_2(d)

    q_high = 0
    for j in range(m, -1, -1):
        n2 = limbs[j + n] if j + n < size else 0
        n21 = _join(n2, limbs[j + n - 1])
        n0 = limbs[j + n - 2]
        if shift:
            n21, n0 = (
                ((n21 << shift) & _DOUBLE_MASK) | (n0 >> back),
                ((n0 << shift) & LIMB_MASK) | (limbs[j + n - 3] >> back),
            )

        if n21 < d:
            q, r = div_3x2(n21, n0, d, v)
            if q != 0:
                if shift == 0:
                    borrow = _submul_at(limbs, j, divisor[: n - 2], q)
                    r -= borrow
                    borrowed = r < 0
                    r &= _DOUBLE_MASK
                    limbs[j + n - 2] = r & LIMB_MASK
                    limbs[j + n - 1] = r >> LIMB_BITS
                else:
                    borrow = _submul_at(limbs, j, divisor, q)
                    top = limbs[j + n] if j + n < size else 0
                    borrowed = borrow != top

                if borrowed:
                    q = (q - 1) & LIMB_MASK
                    _add_back_at(limbs, j, divisor)
        else:
            q = LIMB_MASK
            _submul_at(limbs, j, divisor, q)

        if j + n < size:
            limbs[j + n] = q
        else:
            q_high = q

    remainder = limbs[:n]
    quotient = limbs[n:] + [q_high] + [0] * (n - 1)
    return quotient, remainder