# limbint

Arithmetic on unsigned integers stored as little-endian lists of 64-bit limbs
(least significant limb first). Every function leaves its arguments untouched
and returns new lists together with any carry, borrow, overflow flag or
remainder the operation produced. Invalid inputs (wrong lengths, a divisor that
is not normalized, and the like) raise `ValueError`.

## Modules

- `limbint.limbs` – `adc`, `sbb` on single limbs; `cmp`, `adc_n`, `sbb_n` on limb
  lists; `shift_left_small` and `shift_right_small` for shifts below 64 bits.
- `limbint.mul` – schoolbook multiply-accumulate `addmul` (any lengths, returns the
  truncated result and an overflow flag), its plain reference `addmul_ref`,
  `addmul_n`, `add_nx1`, `addmul_nx1`, `submul_nx1`, and Montgomery multiplication
  `mul_redc`.
- `limbint.reciprocal` – reciprocals of normalized one-limb (`reciprocal`,
  `reciprocal_mg10`, `reciprocal_ref`) and two-limb (`reciprocal_2`,
  `reciprocal_2_mg10`) divisors.
- `limbint.small` – division by one- and two-limb divisors: `div_2x1`, `div_3x2`,
  `div_nx1`, `div_nx1_normalized`, `div_nx2`, `div_nx2_normalized`, and the
  reference forms `div_2x1_ref` and `div_3x2_ref`.
- `limbint.knuth` – long division by divisors of several limbs: `div_nxm_normalized`
  and `div_nxm`, each returning `(quotient, remainder)`.
- `limbint.literal` – `parse` and `parse_literal` turn sized literals such as
  `0xff_U256` into a bit size and limbs; bad input raises `LiteralError`.

## Install

```
pip install limbint
```

## Examples

```python
from limbint.mul import addmul

result, overflow = addmul([0], [3], [4])
assert result == [12] and overflow is False
```

```python
from limbint.limbs import shift_left_small

limbs, out = shift_left_small([0x1234_5678_9ABC_DEF0, 0x1234_5678_9ABC_DEF0], 4)
assert limbs == [0x2345_6789_ABCD_EF00, 0x2345_6789_ABCD_EF01]
assert out == 1
```

```python
from limbint.small import div_nx1

quotient, remainder = div_nx1([7, 1], 2)   # (2**64 + 7) / 2
assert quotient == [2**63 + 3, 0]
assert remainder == 1
```

```python
from limbint.knuth import div_nxm

top = 0x8000000000000000
quotient, remainder = div_nxm([top, top, top, top + 1], [top, top, top])
assert quotient[:2] == [1, 1]
assert remainder == [0, top, top - 1]
```

```python
from limbint.reciprocal import reciprocal_2

assert reciprocal_2(1 << 127) == 2**64 - 1
```

```python
from limbint.literal import parse, parse_literal

assert parse("0x10", "8") == (8, [16])
assert parse_literal("0x10_U8") == (8, [16])
```

## What this package does not do

There is no fixed-width integer value type with operators, and no single
division entry point that trims operands and picks an algorithm for you: choose
between `limbint.small` and `limbint.knuth` according to the divisor's size and
meet each function's stated requirements. Conversion to and from other number
bases is not provided.

## Tests

```
pip install -e .[test]
pytest
```