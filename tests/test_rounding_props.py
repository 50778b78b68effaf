"""Property tests for floor/ceil application and reversal over the full u64 domain.

Uses Hypothesis to draw ratios of every supported width (both <= 1 and > 1)
and u64 amounts.
"""

from __future__ import annotations

import importlib.util

import pytest

if importlib.util.find_spec("hypothesis") is None:  # pragma: no cover
    pytest.skip("hypothesis not installed", allow_module_level=True)

import hypothesis.strategies as st
from hypothesis import given

from pool_ratio import Ceil, Floor, Ratio, U64_MAX, UIntWidth
from pool_ratio.widths import RATIO_WIDTHS

amounts = st.integers(min_value=0, max_value=U64_MAX)
appliers = st.sampled_from([Floor, Ceil])


@st.composite
def nonzero_ratios(draw, lte_one=False):
    n_width = draw(st.sampled_from(RATIO_WIDTHS))
    d_width = draw(st.sampled_from(RATIO_WIDTHS))
    d = draw(st.integers(min_value=1, max_value=d_width.max))
    n_max = min(n_width.max, d) if lte_one else n_width.max
    n = draw(st.integers(min_value=1, max_value=n_max))
    return Ratio(n, d, n_width, d_width)


@st.composite
def ratio_and_amount(draw, lte_one=False):
    """A ratio and an amount it can be applied to without overflowing u64."""
    ratio = draw(nonzero_ratios(lte_one=lte_one))
    # ceil(x * n / d) <= U64_MAX  <=>  x <= U64_MAX * d / n
    amt_max = min(U64_MAX, U64_MAX * ratio.d // ratio.n)
    amount = draw(st.integers(min_value=0, max_value=amt_max))
    return ratio, amount


@given(cls=appliers, case=ratio_and_amount())
def test_round_trip_contains_amount(cls: type, case: tuple[Ratio, int]) -> None:
    ratio, amount = case
    applier = cls(ratio)
    y = applier.apply(amount)
    assert y is not None

    rng = applier.reverse(y)
    assert rng is not None
    assert amount in rng
    assert applier.reverse_est(y) == rng

    # both ends reproduce y
    assert applier.apply(rng.start) == y
    assert applier.apply(rng.end) == y
    # and the range cannot be extended
    if rng.start > 0:
        assert applier.apply(rng.start - 1) != y
    if rng.end < U64_MAX:
        assert applier.apply(rng.end + 1) != y


@given(cls=appliers, ratio=nonzero_ratios(), result=amounts)
def test_reverse_is_sound_for_any_result(cls: type, ratio: Ratio, result: int) -> None:
    applier = cls(ratio)
    rng = applier.reverse(result)
    est = applier.reverse_est(result)
    if rng is None:
        # the estimate brackets a result that no amount produces
        assert est.size <= 2
        assert applier.apply(est.start) != result
        return
    assert est == rng
    mid = rng.start + (rng.end - rng.start) // 2
    for x in (rng.start, mid, rng.end):
        assert applier.apply(x) == result


@given(cls=appliers, data=st.data())
def test_ratio_lte_one_reaches_every_result(cls: type, data: st.DataObject) -> None:
    # n <= d: consecutive amounts move the output by at most 1
    applier = cls(data.draw(nonzero_ratios(lte_one=True)))
    top = applier.apply(U64_MAX)
    assert top is not None
    result = data.draw(st.integers(min_value=0, max_value=top))
    assert applier.reverse(result) is not None


@given(case=ratio_and_amount())
def test_floor_le_ceil(case: tuple[Ratio, int]) -> None:
    ratio, amount = case
    lo = Floor(ratio).apply(amount)
    hi = Ceil(ratio).apply(amount)
    assert lo is not None and hi is not None
    assert lo <= hi <= lo + 1
    assert (lo == hi) == ((amount * ratio.n) % ratio.d == 0)


@given(data=st.data())
def test_ceil_range_starts_no_later_than_floor_range(data: st.DataObject) -> None:
    ratio = data.draw(nonzero_ratios(lte_one=True))
    top = Floor(ratio).apply(U64_MAX)
    result = data.draw(st.integers(min_value=0, max_value=top))
    rev_floor = Floor(ratio).reverse(result)
    rev_ceil = Ceil(ratio).reverse(result)
    assert rev_floor is not None and rev_ceil is not None
    assert rev_ceil.start <= rev_floor.start
    assert rev_ceil.end <= rev_floor.end


@given(n=st.integers(min_value=0, max_value=U64_MAX), result=amounts)
def test_zero_denominator_never_answers(n: int, result: int) -> None:
    for cls in (Floor, Ceil):
        applier = cls(Ratio(n, 0, UIntWidth.U64, UIntWidth.U64))
        assert applier.apply(result) is None
        assert applier.reverse(result) is None
