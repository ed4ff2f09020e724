"""Parsing of sized integer literals such as ``0x10_U8`` into limbs."""

from limbint.limbs import LIMB_BITS, LIMB_MASK

_USIZE_MAX = (1 << 64) - 1
_PREFIXES = {"0x": 16, "0o": 8, "0b": 2}


class LiteralError(ValueError):
    """A literal could not be turned into a sized integer."""


def _parse_bits(bits: str) -> int:
    text = bits[1:] if bits.startswith("+") else bits
    if not text:
        raise LiteralError("Error in suffix: cannot parse integer from empty string")
    if not all("0" <= c <= "9" for c in text):
        raise LiteralError("Error in suffix: invalid digit found in string")
    value = int(text)
    if value > _USIZE_MAX:
        raise LiteralError("Error in suffix: number too large to fit in target type")
    return value


def _digit_value(c: str) -> int | None:
    if "0" <= c <= "9":
        return ord(c) - ord("0")
    if "a" <= c <= "f":
        return ord(c) - ord("a") + 10
    if "A" <= c <= "F":
        return ord(c) - ord("A") + 10
    return None


def parse(value: str, bits: str) -> tuple[int, list[int]]:
    """Parse a literal value and a bit-size suffix.

    Returns the bit size and the little-endian limbs, exactly
    ``ceil(bits / 64)`` of them. Raises :class:`LiteralError` when the
    suffix, a character or the magnitude is not acceptable.
    """
    size = _parse_bits(bits)
    num_limbs = (size + LIMB_BITS - 1) // LIMB_BITS

    base = _PREFIXES.get(value[:2], 10) if len(value) >= 2 else 10
    digits = value[2:] if base != 10 else value

    number = 0
    for c in digits:
        if c == "_":
            continue
        digit = _digit_value(c)
        if digit is None:
            raise LiteralError(f"Invalid character '{c}'")
        if digit > base:
            raise LiteralError(
                f"Invalid digit {c} in base {base} (did you forget the `0x` prefix?)"
            )
        number = number * base + digit

    if number >> size:
        shown = value.rstrip("_")
        raise LiteralError(f"Value too large for Uint<{size}>: {shown}")

    limbs = [(number >> (LIMB_BITS * i)) & LIMB_MASK for i in range(num_limbs)]
    return size, limbs


def parse_literal(source: str) -> tuple[int, list[int]]:
    """Parse a whole literal such as ``"0x10_U8"`` split at its ``U`` suffix."""
    value, sep, bits = source.partition("U")
    if not sep:
        raise LiteralError(f"Missing bit-size suffix in literal: {source}")
    return parse(value, bits)