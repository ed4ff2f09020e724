import pytest
from hypothesis import assume, given
from hypothesis import strategies as st

from limbint.mul import addmul
from limbint.reciprocal import reciprocal, reciprocal_2
from limbint.small import (
    div_2x1,
    div_2x1_mg10,
    div_2x1_ref,
    div_3x2,
    div_3x2_mg10,
    div_3x2_ref,
    div_nx1,
    div_nx1_normalized,
    div_nx2,
    div_nx2_normalized,
)

M64 = (1 << 64) - 1
M128 = (1 << 128) - 1
u64s = st.integers(min_value=0, max_value=M64)
u128s = st.integers(min_value=0, max_value=M128)


def to_int(limbs):
    return sum(limb << (64 * i) for i, limb in enumerate(limbs))


def trimmed(limbs):
    out = list(limbs)
    while out and out[-1] == 0:
        out.pop()
    return out


@given(u64s, u64s, u64s)
def test_div_2x1_mg10(q, r, d):
    d |= 1 << 63
    r %= d
    n = q * d + r
    v = reciprocal(d)
    assert div_2x1_mg10(n, d, v) == (q, r)
    assert div_2x1(n, d, v) == (q, r)
    assert div_2x1_ref(n, d) == (q, r)


def test_div_2x1_pinned():
    d = 1 << 63
    v = reciprocal(d)
    assert v == M64
    assert div_2x1_mg10(3 * d + 5, d, v) == (3, 5)


def test_div_2x1_rejects_bad_input():
    d = 1 << 63
    with pytest.raises(ValueError):
        div_2x1_mg10(5, 1 << 62, reciprocal(1 << 63))
    with pytest.raises(ValueError):
        div_2x1_mg10(d << 64, d, reciprocal(d))
    with pytest.raises(ValueError):
        div_2x1_mg10(5, d, 0)
    with pytest.raises(ValueError):
        div_2x1_ref(d << 64, d)


@given(u64s, u128s, u128s)
def test_div_3x2_mg10(q, r, d):
    d |= 1 << 127
    r %= d
    n = q * d + r
    n21, n0 = n >> 64, n & M64
    v = reciprocal_2(d)
    assert div_3x2_mg10(n21, n0, d, v) == (q, r)
    assert div_3x2(n21, n0, d, v) == (q, r)


def test_div_3x2_ref_pinned():
    d = 1 << 127
    assert div_3x2_ref(1 << 126, 0, d) == 1 << 63
    assert div_3x2_ref(0, 5, d) == 0


def test_div_3x2_rejects_bad_input():
    d = 1 << 127
    with pytest.raises(ValueError):
        div_3x2_mg10(d, 0, d, reciprocal_2(d))
    with pytest.raises(ValueError):
        div_3x2_mg10(0, 0, 1 << 126, 0)
    with pytest.raises(ValueError):
        div_3x2_mg10(0, 0, d, 1)
    with pytest.raises(ValueError):
        div_3x2_ref(d, 0, d)


@given(st.lists(u64s, max_size=9), u64s, u64s)
def test_div_nx1_normalized(quotient, divisor, remainder):
    divisor |= 1 << 63
    remainder %= divisor
    numerator = [remainder] + [0] * len(quotient)
    numerator, _ = addmul(numerator, quotient, [divisor])
    q, r = div_nx1_normalized(numerator, divisor)
    assert to_int(q) == to_int(quotient)
    assert r == remainder


@given(
    st.lists(u64s, min_size=1, max_size=9),
    st.integers(min_value=1, max_value=M64 - 1),
    u64s,
)
def test_div_nx1(quotient, divisor, remainder):
    remainder %= divisor
    numerator = [remainder] + [0] * len(quotient)
    numerator, _ = addmul(numerator, quotient, [divisor])
    numerator = trimmed(numerator)
    assume(numerator)
    q, r = div_nx1(numerator, divisor)
    assert len(q) == len(numerator)
    assert to_int(q) == to_int(quotient)
    assert r == remainder


def test_div_nx1_pinned():
    q, r = div_nx1([7, 1], 3)
    assert to_int(q) == ((1 << 64) + 7) // 3
    assert r == ((1 << 64) + 7) % 3


def test_div_nx1_rejects_bad_input():
    with pytest.raises(ValueError):
        div_nx1([1], 0)
    with pytest.raises(ValueError):
        div_nx1([], 3)
    with pytest.raises(ValueError):
        div_nx1([1, 0], 3)


@given(st.lists(u64s, max_size=9), st.integers(min_value=1 << 127, max_value=M128), u128s)
def test_div_nx2_normalized(quotient, divisor, remainder):
    remainder %= divisor
    numerator = [remainder & M64, remainder >> 64] + [0] * len(quotient)
    numerator, _ = addmul(numerator, quotient, [divisor & M64, divisor >> 64])
    q, r = div_nx2_normalized(numerator, divisor)
    assert to_int(q) == to_int(quotient)
    assert r == remainder


@given(
    st.lists(u64s, min_size=2, max_size=9),
    st.integers(min_value=1 << 64, max_value=M128 - 1),
    u128s,
)
def test_div_nx2(quotient, divisor, remainder):
    remainder %= divisor
    numerator = [remainder & M64, remainder >> 64] + [0] * len(quotient)
    numerator, _ = addmul(numerator, quotient, [divisor & M64, divisor >> 64])
    numerator = trimmed(numerator)
    assume(numerator)
    q, r = div_nx2(numerator, divisor)
    assert to_int(q) == to_int(quotient)
    assert r == remainder


def test_div_nx2_rejects_bad_input():
    with pytest.raises(ValueError):
        div_nx2([1, 1], M64)
    with pytest.raises(ValueError):
        div_nx2([1, 0], 1 << 64)
    with pytest.raises(ValueError):
        div_nx2_normalized([1], 1 << 64)