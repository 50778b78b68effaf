"""`pool_ratio`: proportional shares of u64 token amounts, and their inverses.

Deterministic, integer-only arithmetic for pool accounting:
- `Ratio` values applied with floor or ceiling rounding (`Floor`, `Ceil`),
- reversal of an applied ratio to the inclusive range of possible inputs,
- fees (`Fee`) that split an amount into `(retained, charged)` and reverse
  either side.

Public API:
- `apply(ratio, rounding, amount) -> Optional[int]`
- `reverse(ratio, rounding, result) -> Optional[InclusiveRange]`
- `reverse_est(ratio, rounding, result) -> InclusiveRange`
- `Fee.new(ratio, rounding) -> Optional[Fee]`
"""

from .errors import InvalidRatioError, NoPreimageError, RatioError, RatioOverflowError
from .fees import AftFee, Fee
from .ratio import BPS_DENOM, Ratio
from .rounding import Ceil, Floor, InclusiveRange, RatioApplier, Rounding, apply, reverse, reverse_est
from .widths import U64_MAX, U128_MAX, UIntWidth

__all__ = [
    "apply",
    "reverse",
    "reverse_est",
    "Ratio",
    "Rounding",
    "RatioApplier",
    "Floor",
    "Ceil",
    "InclusiveRange",
    "Fee",
    "AftFee",
    "UIntWidth",
    "U64_MAX",
    "U128_MAX",
    "BPS_DENOM",
    "RatioError",
    "InvalidRatioError",
    "RatioOverflowError",
    "NoPreimageError",
]
