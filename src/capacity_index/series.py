# file: src/capacity_index/series.py
"""
Yearly observation series.

A Series is immutable, strictly increasing by year and holds no missing
values. Construction fails loud (ValueError) when any of that is violated,
so everything downstream of the fetcher can rely on it.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Sequence, Tuple

import pandas as pd


@dataclass(frozen=True)
class ObservationPoint:
    year: int
    value: float


@dataclass(frozen=True)
class Series:
    points: Tuple[ObservationPoint, ...] = ()

    def __post_init__(self) -> None:
        points = tuple(self.points)
        prev_year: Optional[int] = None
        for p in points:
            if p.value is None or not math.isfinite(p.value):
                raise ValueError(f"Series value must be finite, got {p.value!r} at {p.year}")
            if prev_year is not None and p.year <= prev_year:
                raise ValueError(
                    f"Series years must be strictly increasing: {prev_year} then {p.year}"
                )
            prev_year = p.year
        object.__setattr__(self, "points", points)

    @classmethod
    def empty(cls) -> "Series":
        return cls(())

    @classmethod
    def from_pairs(cls, pairs: Iterable[Sequence[float]]) -> "Series":
        """Build from (year, value) pairs that are already sorted."""
        return cls(tuple(ObservationPoint(int(y), float(v)) for y, v in pairs))

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[ObservationPoint]:
        return iter(self.points)

    def __getitem__(self, idx: int) -> ObservationPoint:
        return self.points[idx]

    def __bool__(self) -> bool:
        return bool(self.points)

    def years(self) -> list[int]:
        return [p.year for p in self.points]

    def values(self) -> list[float]:
        return [p.value for p in self.points]

    def value_at(self, year: int) -> Optional[float]:
        for p in self.points:
            if p.year == year:
                return p.value
        return None

    def to_frame(self) -> pd.DataFrame:
        """Tabular view with columns [year, value]."""
        return pd.DataFrame({"year": self.years(), "value": self.values()})
