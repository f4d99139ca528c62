# file: src/capacity_index/align.py
from __future__ import annotations

from typing import Tuple

from .series import ObservationPoint, Series


def common_years(a: Series, b: Series) -> list[int]:
    """Years present in both series, in the order they appear in `a`."""
    b_years = set(b.years())
    return [year for year in a.years() if year in b_years]


def align(a: Series, b: Series) -> Tuple[Series, Series]:
    """
    Restrict two series to their shared years.

    Both results carry exactly the same year sequence (a's order); points
    without a counterpart are omitted. Disjoint inputs give two empty series.
    """
    b_values = {p.year: p.value for p in b}
    kept_a: list[ObservationPoint] = []
    kept_b: list[ObservationPoint] = []
    for point in a:
        if point.year in b_values:
            kept_a.append(point)
            kept_b.append(ObservationPoint(point.year, b_values[point.year]))
    return Series(tuple(kept_a)), Series(tuple(kept_b))
