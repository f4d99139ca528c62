# file: src/capacity_index/context.py
"""Holder for one batch of fetched series, passed explicitly to charts and export."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Mapping

import pandas as pd

from .series import Series


@dataclass(frozen=True)
class SeriesContext:
    series: Mapping[str, Series] = field(default_factory=dict)
    start_year: int = 2000
    end_year: int = 2024

    def __post_init__(self) -> None:
        object.__setattr__(self, "series", dict(self.series))

    def get(self, key: str) -> Series:
        """Series for `key`, or an empty Series when it was never fetched."""
        return self.series.get(key, Series.empty())

    def __contains__(self, key: object) -> bool:
        return key in self.series

    def __iter__(self) -> Iterator[str]:
        return iter(self.series)

    def keys(self) -> list[str]:
        return list(self.series)

    def empty_keys(self) -> list[str]:
        return [k for k, s in self.series.items() if not s]

    def summary(self) -> pd.DataFrame:
        """Per-series coverage: count, first/last year, min/max value."""
        rows = []
        for key, s in self.series.items():
            rows.append({
                "key": key,
                "count": len(s),
                "first_year": s[0].year if s else None,
                "last_year": s[-1].year if s else None,
                "min_value": min(s.values()) if s else None,
                "max_value": max(s.values()) if s else None,
            })
        df = pd.DataFrame(
            rows,
            columns=["key", "count", "first_year", "last_year", "min_value", "max_value"],
        )
        return df.astype({"first_year": "Int64", "last_year": "Int64"})
