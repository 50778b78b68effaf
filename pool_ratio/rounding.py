"""
Floor / ceiling application and reversal of a `Ratio` (deterministic, integer-only).

`Floor(ratio)` and `Ceil(ratio)` are two strategy types over the same `Ratio`.
The rounding direction is fixed by the type, never by a flag, so a `Floor`
never compares equal to a `Ceil` and one cannot be passed off as the other.

Forward:
    Floor.apply(x) = floor(x * n / d)
    Ceil.apply(x)  = ceil(x * n / d) = floor((x * n + d - 1) / d)

Reverse (y = result), derived from the rounding bounds:

    Floor:  y <= x*n/d < y + 1
            min = ceil(d*y / n)
            max = ceil(d*(y+1) / n) - 1 = floor((d*y + d - 1) / n)

    Ceil:   y - 1 < x*n/d <= y
            min = floor(d*(y-1) / n) + 1
            max = floor(d*y / n)
            (y == 0 is reachable only from x == 0)

`min` and `max` are computed in the 128-bit width. `max` saturates at U64_MAX.
If `min > max` no u64 amount maps to `y`; ratios > 1 skip output values.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, unique
from typing import ClassVar, Optional, Tuple

from .errors import InvalidRatioError, NoPreimageError, RatioError, RatioOverflowError
from .ratio import Ratio
from .widths import U64_MAX, narrow_u64, require_uint, widen_mul

logger = logging.getLogger(__name__)


def _ceil_div(numerator: int, denominator: int) -> int:
    if denominator <= 0:
        raise ValueError("denominator must be positive")
    if numerator < 0:
        raise ValueError("numerator must be non-negative")
    return (numerator + denominator - 1) // denominator


@dataclass(frozen=True)
class InclusiveRange:
    """`start..=end` over u64 amounts (both ends included)."""

    start: int
    end: int

    def __post_init__(self) -> None:
        require_uint("start", self.start)
        require_uint("end", self.end)
        if self.start > self.end:
            raise ValueError(f"empty range: start ({self.start}) > end ({self.end})")

    def __contains__(self, x: object) -> bool:
        if not isinstance(x, int) or isinstance(x, bool):
            return False
        return self.start <= x <= self.end

    @property
    def size(self) -> int:
        """Number of amounts in the range."""
        return self.end - self.start + 1

    def __str__(self) -> str:
        return f"{self.start}..={self.end}"


@unique
class Rounding(Enum):
    FLOOR = "floor"
    CEIL = "ceil"

    def flipped(self) -> "Rounding":
        return Rounding.CEIL if self is Rounding.FLOOR else Rounding.FLOOR

    def wrap(self, ratio: Ratio) -> "RatioApplier":
        """The applier for `ratio` under this rounding direction."""
        if self is Rounding.FLOOR:
            return Floor(ratio)
        return Ceil(ratio)


@dataclass(frozen=True)
class RatioApplier(ABC):
    """A `Ratio` bound to one rounding direction."""

    ratio: Ratio

    rounding: ClassVar[Rounding]

    def __post_init__(self) -> None:
        if not isinstance(self.ratio, Ratio):
            raise TypeError(f"ratio must be a Ratio, got {type(self.ratio).__name__}")

    @abstractmethod
    def _div(self, xn: int, d: int) -> int:
        """Round `xn / d` in this applier's direction (`d > 0`)."""

    @abstractmethod
    def _raw_bounds(self, result: int) -> Tuple[int, int]:
        """
        Unclamped `(min, max)` of the amounts mapped to `result`.

        Requires a nonzero ratio. `min` may exceed U64_MAX and `min > max`
        when `result` is skipped.
        """

    def _u64_bounds(self, result: int) -> Tuple[int, int]:
        lo, hi = self._raw_bounds(result)
        return lo, min(hi, U64_MAX)

    def apply_or_raise(self, amount: int) -> int:
        """
        Like ``apply()`` but raises instead of returning `None`.

        Raises:
            InvalidRatioError: zero denominator.
            RatioOverflowError: result exceeds U64_MAX.
        """
        require_uint("amount", amount)
        n, d = self.ratio.n, self.ratio.d
        if d == 0:
            raise InvalidRatioError(f"{self}: zero denominator")
        if n == 0:
            return 0
        out = narrow_u64(self._div(widen_mul(amount, n), d))
        if out is None:
            raise RatioOverflowError(f"{self} applied to {amount} exceeds u64")
        return out

    def apply(self, amount: int) -> Optional[int]:
        """
        `amount * n / d`, rounded in this applier's direction.

        Returns `0` for a zero numerator, `None` for a zero denominator or
        if the result does not fit u64.
        """
        try:
            return self.apply_or_raise(amount)
        except RatioError as exc:
            logger.debug("apply(%d) failed: %s", amount, exc)
            return None

    def reverse_or_raise(self, result: int) -> InclusiveRange:
        """
        Like ``reverse()`` but raises instead of returning `None`.

        Raises:
            InvalidRatioError: zero denominator, or zero numerator with
                `result == 0` (every amount maps to 0).
            NoPreimageError: no u64 amount maps to `result`.
        """
        require_uint("result", result)
        n, d = self.ratio.n, self.ratio.d
        if d == 0:
            raise InvalidRatioError(f"{self}: zero denominator")
        if n == 0:
            if result == 0:
                raise InvalidRatioError(f"{self}: every amount maps to 0, use reverse_est()")
            raise NoPreimageError(self, result)
        lo, hi = self._u64_bounds(result)
        if lo > hi:
            raise NoPreimageError(self, result)
        return InclusiveRange(lo, hi)

    def reverse(self, result: int) -> Optional[InclusiveRange]:
        """
        The inclusive range of amounts `x` with `self.apply(x) == result`.

        Returns `None` for a zero numerator or denominator, and if no u64
        amount maps to `result`.
        """
        try:
            return self.reverse_or_raise(result)
        except RatioError as exc:
            logger.debug("reverse(%d) failed: %s", result, exc)
            return None

    def reverse_est(self, result: int) -> InclusiveRange:
        """
        Total variant of ``reverse()``: equal to it wherever it succeeds.

        Otherwise:
        - zero ratio (or zero denominator): the full u64 domain,
        - `result` beyond every reachable output: `U64_MAX..=U64_MAX`,
        - `result` skipped by a ratio > 1: `max..=min`, the two adjacent
          amounts whose outputs bracket `result`.
        """
        require_uint("result", result)
        if self.ratio.is_zero():
            return InclusiveRange(0, U64_MAX)
        lo, hi = self._u64_bounds(result)
        if lo <= hi:
            return InclusiveRange(lo, hi)
        if lo > U64_MAX:
            return InclusiveRange(U64_MAX, U64_MAX)
        return InclusiveRange(hi, lo)

    def __str__(self) -> str:
        return f"{type(self).__name__}({self.ratio})"


@dataclass(frozen=True)
class Floor(RatioApplier):
    """`floor(x * n / d)`."""

    rounding: ClassVar[Rounding] = Rounding.FLOOR

    def _div(self, xn: int, d: int) -> int:
        return xn // d

    def _raw_bounds(self, result: int) -> Tuple[int, int]:
        n, d = self.ratio.n, self.ratio.d
        dy = widen_mul(d, result)
        lo = _ceil_div(dy, n)
        # d >= 1, so dy + d - 1 >= 0
        hi = (dy + d - 1) // n
        return lo, hi


@dataclass(frozen=True)
class Ceil(RatioApplier):
    """`ceil(x * n / d)`."""

    rounding: ClassVar[Rounding] = Rounding.CEIL

    def _div(self, xn: int, d: int) -> int:
        return _ceil_div(xn, d)

    def _raw_bounds(self, result: int) -> Tuple[int, int]:
        if result == 0:
            return 0, 0
        n, d = self.ratio.n, self.ratio.d
        dy = widen_mul(d, result)
        lo = (dy - d) // n + 1
        hi = dy // n
        return lo, hi


def apply(ratio: Ratio, rounding: Rounding, amount: int) -> Optional[int]:
    return rounding.wrap(ratio).apply(amount)


def reverse(ratio: Ratio, rounding: Rounding, result: int) -> Optional[InclusiveRange]:
    return rounding.wrap(ratio).reverse(result)


def reverse_est(ratio: Ratio, rounding: Rounding, result: int) -> InclusiveRange:
    return rounding.wrap(ratio).reverse_est(result)
