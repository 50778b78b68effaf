"""
Unsigned integer widths (deterministic, integer-only).

Python ints are unbounded, so the fixed widths of the amounts and ratios are
enforced here explicitly:
- amounts are u64,
- ratio numerators/denominators are u8/u16/u32/u64 (chosen per ratio),
- every intermediate product is computed in the 128-bit width and narrowed
  back to u64 with an explicit overflow outcome.
"""

from __future__ import annotations

from enum import Enum, unique
from typing import Optional


@unique
class UIntWidth(Enum):
    """Bit width of an unsigned integer field."""

    U8 = 8
    U16 = 16
    U32 = 32
    U64 = 64
    U128 = 128

    @property
    def bits(self) -> int:
        return self.value

    @property
    def max(self) -> int:
        return (1 << self.value) - 1

    def __str__(self) -> str:
        return f"u{self.value}"


U64_MAX: int = UIntWidth.U64.max
U128_MAX: int = UIntWidth.U128.max

# Widths a ratio numerator/denominator may use.
RATIO_WIDTHS = (UIntWidth.U8, UIntWidth.U16, UIntWidth.U32, UIntWidth.U64)


def require_uint(name: str, value: int, width: UIntWidth = UIntWidth.U64) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    if not (0 <= value <= width.max):
        raise ValueError(f"{name} must be in [0, {width.max}] ({width}): {value}")


def wider(a: UIntWidth, b: UIntWidth) -> UIntWidth:
    """The larger of two widths."""
    return a if a.bits >= b.bits else b


def narrow_u64(x: int) -> Optional[int]:
    """Narrow a 128-bit intermediate to u64; `None` when it does not fit."""
    if x > U64_MAX:
        return None
    return x


def widen_mul(a: int, b: int) -> int:
    """
    Product of two u64-bounded operands in the 128-bit computation width.

    `(2**64 - 1)**2 < 2**128`, so this never fails for valid operands.
    """
    product = a * b
    if not (0 <= product <= U128_MAX):
        raise AssertionError("internal error: product exceeds the 128-bit computation width")
    return product
