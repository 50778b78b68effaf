"""
Ratio of two unsigned integers, applied to u64 amounts.

A `Ratio` is only a value: it carries no rounding direction. Wrap it in
`Floor` / `Ceil` (see `pool_ratio.rounding`) to apply or reverse it.

Zero-denominator ratios can be constructed, but every applier rejects them.
For comparison purposes they behave like the zero ratio.
"""

from __future__ import annotations

from dataclasses import dataclass
from math import gcd
from typing import ClassVar

from .widths import RATIO_WIDTHS, UIntWidth, require_uint, wider, widen_mul


BPS_DENOM = 10_000


@dataclass(frozen=True, eq=False)
class Ratio:
    """`n / d` with per-field integer widths (u64 by default)."""

    n: int
    d: int
    n_width: UIntWidth = UIntWidth.U64
    d_width: UIntWidth = UIntWidth.U64

    ZERO: ClassVar["Ratio"]
    ONE: ClassVar["Ratio"]

    def __post_init__(self) -> None:
        for name, width in (("n_width", self.n_width), ("d_width", self.d_width)):
            if width not in RATIO_WIDTHS:
                raise ValueError(f"{name} must be one of u8/u16/u32/u64, got {width}")
        require_uint("n", self.n, self.n_width)
        require_uint("d", self.d, self.d_width)

    @classmethod
    def from_bps(cls, bps: int) -> "Ratio":
        """`bps / 10_000`, e.g. `from_bps(30)` is a 0.30% fee."""
        require_uint("bps", bps, UIntWidth.U16)
        if bps > BPS_DENOM:
            raise ValueError(f"bps must be in [0, {BPS_DENOM}]: {bps}")
        return cls(bps, BPS_DENOM, UIntWidth.U16, UIntWidth.U16)

    def is_zero(self) -> bool:
        """True if applying this ratio can only ever output 0 (or is invalid)."""
        return self.n == 0 or self.d == 0

    def is_valid(self) -> bool:
        return self.d != 0

    def is_one(self) -> bool:
        return not self.is_zero() and self.n == self.d

    def lowest_form(self) -> "Ratio":
        """
        The fraction's lowest form, in the wider of the two widths.

        This is `0/0` if `self.is_zero()`.
        """
        width = wider(self.n_width, self.d_width)
        if self.is_zero():
            return Ratio(0, 0, width, width)
        g = gcd(self.d, self.n)
        return Ratio(self.n // g, self.d // g, width, width)

    # -- value ordering ---------------------------------------------------

    def _cmp(self, other: "Ratio") -> int:
        self_zero, other_zero = self.is_zero(), other.is_zero()
        if self_zero and other_zero:
            return 0
        if self_zero:
            return -1
        if other_zero:
            return 1
        lhs = widen_mul(self.n, other.d)
        rhs = widen_mul(other.n, self.d)
        return (lhs > rhs) - (lhs < rhs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ratio):
            return NotImplemented
        return self._cmp(other) == 0

    def __lt__(self, other: "Ratio") -> bool:
        if not isinstance(other, Ratio):
            return NotImplemented
        return self._cmp(other) < 0

    def __le__(self, other: "Ratio") -> bool:
        if not isinstance(other, Ratio):
            return NotImplemented
        return self._cmp(other) <= 0

    def __gt__(self, other: "Ratio") -> bool:
        if not isinstance(other, Ratio):
            return NotImplemented
        return self._cmp(other) > 0

    def __ge__(self, other: "Ratio") -> bool:
        if not isinstance(other, Ratio):
            return NotImplemented
        return self._cmp(other) >= 0

    def __hash__(self) -> int:
        # equal ratios must hash equally: hash the lowest form
        low = self.lowest_form()
        return hash((low.n, low.d))

    def __str__(self) -> str:
        return f"{self.n}/{self.d}"


Ratio.ZERO = Ratio(0, 0)
Ratio.ONE = Ratio(1, 1)
