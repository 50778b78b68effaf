"""Exception types for the ratio and fee engines.

The primary API reports these outcomes as ``None``. The ``*_or_raise``
variants raise them instead, for callers that prefer exceptions over
``Optional`` inspection.
"""

from __future__ import annotations


class RatioError(ValueError):
    """Base class for ratio application/reversal failures."""


class InvalidRatioError(RatioError):
    """Raised when a ratio has a zero denominator, or a fee ratio exceeds 1."""


class RatioOverflowError(RatioError, OverflowError):
    """Raised when a result cannot be narrowed back into u64."""


class NoPreimageError(RatioError):
    """Raised when no u64 amount is mapped to the requested result."""

    def __init__(self, applier: object, result: int) -> None:
        self.applier = applier
        self.result = result
        super().__init__(f"{applier} never outputs {result}")
