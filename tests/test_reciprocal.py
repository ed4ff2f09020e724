import pytest
from hypothesis import given
from hypothesis import strategies as st

from limbint.reciprocal import (
    reciprocal,
    reciprocal_2,
    reciprocal_2_mg10,
    reciprocal_mg10,
    reciprocal_ref,
)

U64_MAX = (1 << 64) - 1
U128_MAX = (1 << 128) - 1

normalized_u64 = st.integers(0, U64_MAX).map(lambda n: n | (1 << 63))
normalized_u128 = st.integers(0, U128_MAX).map(lambda n: n | (1 << 127))


@given(normalized_u64)
def test_reciprocal_matches_reference(n):
    assert reciprocal_mg10(n) == reciprocal_ref(n)


@given(normalized_u64)
def test_reciprocal_alias(n):
    assert reciprocal(n) == reciprocal_mg10(n)


def test_reciprocal_extremes():
    assert reciprocal_mg10(1 << 63) == U64_MAX
    assert reciprocal_mg10(U64_MAX) == 1
    assert reciprocal_ref(1 << 63) == U64_MAX
    assert reciprocal_ref(U64_MAX) == 1


def test_reciprocal_2():
    assert reciprocal_2_mg10(1 << 127) == U64_MAX
    assert reciprocal_2_mg10(U128_MAX) == 0
    assert (
        reciprocal_2_mg10(0xD555_5555_5555_5555_5555_5555_5555_5555)
        == 0x3333_3333_3333_3333
    )
    assert (
        reciprocal_2_mg10(0xD0E7_57B0_2171_5FBE_CBA4_AD0E_825A_E500)
        == 0x39B6_C5AF_970F_86B3
    )
    assert (
        reciprocal_2_mg10(0xAE5D_6551_8A51_3208_A850_5491_9637_EB17)
        == 0x77DB_09D1_5C3B_970B
    )


@given(normalized_u128)
def test_reciprocal_2_definition(d):
    assert reciprocal_2(d) == ((1 << 192) - 1) // d - (1 << 64)


@pytest.mark.parametrize("d", [0, 1, (1 << 63) - 1, 1 << 64])
def test_reciprocal_rejects_unnormalized(d):
    with pytest.raises(ValueError):
        reciprocal_mg10(d)
    with pytest.raises(ValueError):
        reciprocal_ref(d)


@pytest.mark.parametrize("d", [0, (1 << 127) - 1, 1 << 128])
def test_reciprocal_2_rejects_unnormalized(d):
    with pytest.raises(ValueError):
        reciprocal_2_mg10(d)