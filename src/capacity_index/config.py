from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv


@dataclass(frozen=True)
class IndicatorSpec:
    key: str
    entity: str        # country/region code, e.g. CHN or WLD
    code: str          # World Bank indicator code
    label: str
    unit: str
    csv_column: str


INDICATORS: Tuple[IndicatorSpec, ...] = (
    IndicatorSpec(
        key="manufacturing",
        entity="CHN",
        code="NV.IND.MANF.CD",
        label="China manufacturing value added",
        unit="current US$",
        csv_column="Manufacturing_VA_USD",
    ),
    IndicatorSpec(
        key="consumption",
        entity="WLD",
        code="NE.CON.PRVT.CD",
        label="Global household consumption",
        unit="current US$",
        csv_column="Global_Consumption_USD",
    ),
    IndicatorSpec(
        key="co2",
        entity="CHN",
        code="EN.ATM.CO2E.KT",
        label="China CO2 emissions",
        unit="kt",
        csv_column="CO2_kt",
    ),
    IndicatorSpec(
        key="exports",
        entity="CHN",
        code="NE.EXP.GNFS.CD",
        label="China exports of goods and services",
        unit="current US$",
        csv_column="Exports_USD",
    ),
)

CAPACITY_KEY = "manufacturing"


def get_indicator(key: str) -> IndicatorSpec:
    for spec in INDICATORS:
        if spec.key == key:
            return spec
    raise ValueError(f"Unknown indicator key: {key}")


@dataclass(frozen=True)
class DashboardConfig:
    # Remote API
    base_url: str = "https://api.worldbank.org/v2"

    # Year window + index base
    start_year: int = 2000
    end_year: int = 2024
    base_year: int = 2000

    indicators: Tuple[IndicatorSpec, ...] = INDICATORS
    capacity_key: str = CAPACITY_KEY

    # IO
    output_dir: str = "artifacts/capacity_index"
    csv_filename: str = "capacity_index.csv"

    def __post_init__(self) -> None:
        if self.start_year > self.end_year:
            raise ValueError(
                f"start_year must be <= end_year, got {self.start_year} > {self.end_year}"
            )
        keys = [spec.key for spec in self.indicators]
        if self.capacity_key not in keys:
            raise ValueError(f"capacity_key {self.capacity_key!r} not in indicators {keys}")

    def indicator(self, key: str) -> IndicatorSpec:
        for spec in self.indicators:
            if spec.key == key:
                return spec
        raise ValueError(f"Unknown indicator key: {key}")

    def capacity_indicator(self) -> IndicatorSpec:
        return self.indicator(self.capacity_key)

    def output_path(self) -> Path:
        return Path(self.output_dir)

    def csv_path(self) -> Path:
        return self.output_path() / self.csv_filename

    def charts_path(self) -> Path:
        return self.output_path() / "charts"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


def load_config(
    start_year: Optional[int] = None,
    end_year: Optional[int] = None,
    base_year: Optional[int] = None,
) -> DashboardConfig:
    """
    Build a DashboardConfig from explicit arguments, falling back to env.

    Reads WORLDBANK_BASE_URL, CAPACITY_START_YEAR, CAPACITY_END_YEAR and
    CAPACITY_BASE_YEAR from the environment or a .env file.
    """
    load_dotenv()

    defaults = DashboardConfig()
    start = start_year if start_year is not None else _env_int("CAPACITY_START_YEAR", defaults.start_year)
    end = end_year if end_year is not None else _env_int("CAPACITY_END_YEAR", defaults.end_year)
    base = base_year if base_year is not None else _env_int("CAPACITY_BASE_YEAR", start)

    return DashboardConfig(
        base_url=os.getenv("WORLDBANK_BASE_URL") or defaults.base_url,
        start_year=start,
        end_year=end,
        base_year=base,
    )
