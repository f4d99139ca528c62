# file: src/capacity_index/normalize.py
"""
Index normalization: rebase a series to 100 at a base year.

If the base year is not in the series the first observation is used
instead. Empty input, a base value of zero, or a rebased value that
overflows to infinity yields an empty series.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

from .align import align
from .series import ObservationPoint, Series

logger = logging.getLogger(__name__)

INDEX_BASE = 100.0


def resolve_base(series: Series, base_year: int) -> Optional[ObservationPoint]:
    """Observation used as the index base, or None for an empty series."""
    if not series:
        return None
    for point in series:
        if point.year == base_year:
            return point
    logger.info(
        "[normalize] base year %s not in series, falling back to %s",
        base_year, series[0].year,
    )
    return series[0]


def normalize(series: Series, base_year: int) -> Series:
    base = resolve_base(series, base_year)
    if base is None:
        return Series.empty()
    if base.value == 0:
        logger.warning("[normalize] base value is zero at %s, cannot rebase", base.year)
        return Series.empty()

    rebased = [(p.year, p.value / base.value * INDEX_BASE) for p in series]
    overflow = [year for year, value in rebased if not math.isfinite(value)]
    if overflow:
        logger.warning(
            "[normalize] rebasing on %s overflows at %s, cannot rebase",
            base.year, overflow,
        )
        return Series.empty()

    return Series(tuple(ObservationPoint(year, value) for year, value in rebased))


@dataclass(frozen=True)
class IndexPair:
    """Two aligned series rebased to the same base year."""
    years: list[int]
    index_a: Series
    index_b: Series
    base_year_used: int


def align_and_normalize(a: Series, b: Series, base_year: int) -> Optional[IndexPair]:
    """
    Align `a` and `b`, then rebase both to 100.

    Returns None when there is nothing to draw: no common years, or a base
    value of zero on either side.
    """
    aligned_a, aligned_b = align(a, b)
    if not aligned_a:
        logger.info("[normalize] no common years, nothing to index")
        return None

    # both sides share one year sequence, so they resolve to the same base
    base = resolve_base(aligned_a, base_year)
    index_a = normalize(aligned_a, base.year)
    index_b = normalize(aligned_b, base.year)
    if not index_a or not index_b:
        return None

    return IndexPair(
        years=aligned_a.years(),
        index_a=index_a,
        index_b=index_b,
        base_year_used=base.year,
    )
