"""Multi-limb unsigned integer arithmetic on little-endian lists of 64-bit limbs."""

__version__ = "0.1.0"
__all__ = ["limbs", "mul", "reciprocal", "literal", "small", "knuth"]