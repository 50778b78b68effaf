"""
Fee kernels (deterministic, integer-only).

A `Fee` charges a fraction `n/d <= 1` of an amount and splits it into
`(retained, charged)` with `retained + charged == amount` exactly.

Reversal from the retained side uses the duality

    x - ceil(x * n / d)  == floor(x * (d - n) / d)
    x - floor(x * n / d) == ceil(x * (d - n) / d)

i.e. charging `n/d` under one rounding direction retains `(d - n)/d` under
the opposite one. This is an identity over the integers, not an estimate.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .errors import InvalidRatioError, RatioError
from .ratio import Ratio
from .rounding import Ceil, Floor, InclusiveRange, RatioApplier, Rounding
from .widths import U64_MAX, require_uint

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AftFee:
    """An amount after fees: what was retained and what was charged."""

    retained: int
    charged: int

    def __post_init__(self) -> None:
        for name, v in (("retained", self.retained), ("charged", self.charged)):
            require_uint(name, v)
        if self.retained + self.charged > U64_MAX:
            raise ValueError(
                f"retained + charged must fit u64: {self.retained} + {self.charged}"
            )

    @property
    def amount(self) -> int:
        """The amount before fees (`retained + charged`)."""
        return self.retained + self.charged

    @classmethod
    def with_fee(cls, amount: int, charged: int) -> Optional["AftFee"]:
        """Split `amount` by subtracting `charged`; `None` if `charged > amount`."""
        require_uint("amount", amount)
        require_uint("charged", charged)
        if charged > amount:
            return None
        return cls(retained=amount - charged, charged=charged)

    @classmethod
    def with_rem(cls, amount: int, retained: int) -> Optional["AftFee"]:
        """Split `amount` keeping `retained`; `None` if `retained > amount`."""
        require_uint("amount", amount)
        require_uint("retained", retained)
        if retained > amount:
            return None
        return cls(retained=retained, charged=amount - retained)


@dataclass(frozen=True)
class Fee:
    """
    A fee ratio (`<= 1.0`) applied with a fixed rounding direction.

    Construct with `Fee.new(ratio, rounding)`, or `Fee(Ceil(ratio))` to raise
    on an invalid ratio instead.
    """

    applier: RatioApplier

    def __post_init__(self) -> None:
        if not isinstance(self.applier, (Floor, Ceil)):
            raise TypeError("applier must be Floor or Ceil")
        r = self.applier.ratio
        if r.d == 0:
            raise InvalidRatioError(f"fee ratio {r} has a zero denominator")
        if r.n > r.d:
            raise InvalidRatioError(f"fee ratio {r} exceeds 1")

    @classmethod
    def new(cls, ratio: Ratio, rounding: Rounding) -> Optional["Fee"]:
        """`None` if `ratio` has a zero denominator or exceeds 1."""
        try:
            return cls(rounding.wrap(ratio))
        except InvalidRatioError as exc:
            logger.debug("rejected fee: %s", exc)
            return None

    @property
    def ratio(self) -> Ratio:
        return self.applier.ratio

    @property
    def rounding(self) -> Rounding:
        return self.applier.rounding

    def complement(self) -> Ratio:
        """`1.0 - self.ratio`, i.e. the retained fraction `(d - n) / d`."""
        r = self.ratio
        return Ratio(r.d - r.n, r.d, r.d_width, r.d_width)

    def apply_or_raise(self, amount: int) -> AftFee:
        charged = self.applier.apply_or_raise(amount)
        aft = AftFee.with_fee(amount, charged)
        if aft is None:
            raise AssertionError(f"internal error: {self} charged {charged} > {amount}")
        return aft

    def apply(self, amount: int) -> Optional[AftFee]:
        """
        Levy the fee on `amount`.

        Returns `None` if the charged amount does not fit u64 (cannot happen
        for a valid fee, kept for parity with the underlying applier).
        """
        try:
            return self.apply_or_raise(amount)
        except RatioError as exc:
            logger.debug("%s apply(%d) failed: %s", self, amount, exc)
            return None

    def reverse_from_fee_or_raise(self, charged: int) -> InclusiveRange:
        return self.applier.reverse_or_raise(charged)

    def reverse_from_fee(self, charged: int) -> Optional[InclusiveRange]:
        """
        The range of amounts whose `apply()` charges exactly `charged`.

        `retained` differs across the range.
        """
        return self.applier.reverse(charged)

    def reverse_from_rem_or_raise(self, retained: int) -> InclusiveRange:
        return self.rounding.flipped().wrap(self.complement()).reverse_or_raise(retained)

    def reverse_from_rem(self, retained: int) -> Optional[InclusiveRange]:
        """
        The range of amounts whose `apply()` retains exactly `retained`.

        `charged` differs across the range. Returns `None` for a fee of
        100% (every amount retains 0) or if no amount retains `retained`.
        """
        return self.rounding.flipped().wrap(self.complement()).reverse(retained)

    def __str__(self) -> str:
        return f"Fee({self.applier})"
