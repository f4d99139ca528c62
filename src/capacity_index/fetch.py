# file: src/capacity_index/fetch.py
"""
World Bank indicator fetcher.

Each call returns a Series restricted to [start_year, end_year], sorted
ascending, with null observations dropped. Anything that goes wrong on the
wire or in the payload degrades to an empty Series so one bad indicator
never aborts the rest of the batch.

Two flavours share the same payload parser:
- fetch_series: blocking, requests.Session
- fetch_series_async / fetch_batch: asyncio + httpx.AsyncClient, every
  request of a batch in flight at once on a single event loop
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Iterable, Optional

import httpx
import requests

from .config import DashboardConfig, IndicatorSpec
from .context import SeriesContext
from .series import Series

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.worldbank.org/v2"
DEFAULT_START_YEAR = 2000
DEFAULT_END_YEAR = 2024
PER_PAGE = 20000


def build_indicator_url(base_url: str, entity: str, indicator: str) -> str:
    return f"{base_url.rstrip('/')}/country/{entity}/indicator/{indicator}"


def _query_params(per_page: int = PER_PAGE) -> dict:
    return {"format": "json", "per_page": per_page}


def _to_year(raw: Any) -> Optional[int]:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        # yearly payloads use "2019"; tolerate "2019Q1"/"2019M01" by taking the year
        head = raw.strip()[:4]
        if len(head) == 4 and head.isdigit():
            return int(head)
    return None


def _to_value(raw: Any) -> Optional[float]:
    if raw is None or isinstance(raw, bool):
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    if value != value or value in (float("inf"), float("-inf")):
        return None
    return value


def parse_payload(payload: Any, start_year: int, end_year: int) -> Series:
    """
    Turn a World Bank `[meta, records]` payload into a Series.

    Returns an empty Series for anything that does not look like that shape,
    including the single-element `[{"message": [...]}]` error payload.
    """
    if not isinstance(payload, list) or len(payload) < 2:
        if isinstance(payload, list) and payload and isinstance(payload[0], dict) and "message" in payload[0]:
            logger.warning("[fetch] API error payload: %s", payload[0].get("message"))
        else:
            logger.warning("[fetch] malformed payload: type=%s", type(payload).__name__)
        return Series.empty()

    records = payload[1]
    if not isinstance(records, list):
        # an indicator with no data comes back as [meta, null]
        logger.warning("[fetch] payload has no record list: type=%s", type(records).__name__)
        return Series.empty()

    by_year: dict[int, float] = {}
    dropped = 0
    for rec in records:
        if not isinstance(rec, dict):
            dropped += 1
            continue
        year = _to_year(rec.get("date"))
        value = _to_value(rec.get("value"))
        if year is None or value is None:
            dropped += 1
            continue
        if year < start_year or year > end_year:
            continue
        # first record wins on a duplicated year
        by_year.setdefault(year, value)

    if dropped:
        logger.debug("[fetch] dropped %d records with missing date/value", dropped)

    return Series.from_pairs(sorted(by_year.items()))


def fetch_series(
    entity: str,
    indicator: str,
    start_year: int = DEFAULT_START_YEAR,
    end_year: int = DEFAULT_END_YEAR,
    *,
    base_url: str = DEFAULT_BASE_URL,
    session: Optional[requests.Session] = None,
) -> Series:
    """Blocking fetch of one indicator for one entity."""
    if start_year > end_year:
        logger.warning("[fetch] empty range %s..%s for %s/%s", start_year, end_year, entity, indicator)
        return Series.empty()

    url = build_indicator_url(base_url, entity, indicator)
    http = session or requests.Session()
    try:
        resp = http.get(url, params=_query_params())
        resp.raise_for_status()
        payload = resp.json()
    except requests.RequestException as e:
        logger.warning("[fetch] %s/%s request failed: %s", entity, indicator, e)
        return Series.empty()
    except ValueError as e:
        logger.warning("[fetch] %s/%s invalid JSON: %s", entity, indicator, e)
        return Series.empty()
    finally:
        if session is None:
            http.close()

    series = parse_payload(payload, start_year, end_year)
    logger.info("[fetch] %s/%s: %d points (%s..%s)", entity, indicator, len(series), start_year, end_year)
    return series


async def fetch_series_async(
    entity: str,
    indicator: str,
    start_year: int = DEFAULT_START_YEAR,
    end_year: int = DEFAULT_END_YEAR,
    *,
    base_url: str = DEFAULT_BASE_URL,
    client: Optional[httpx.AsyncClient] = None,
) -> Series:
    """Awaitable fetch of one indicator; never raises for network or payload problems."""
    if start_year > end_year:
        logger.warning("[fetch] empty range %s..%s for %s/%s", start_year, end_year, entity, indicator)
        return Series.empty()

    url = build_indicator_url(base_url, entity, indicator)
    own_client = client is None
    http = client or httpx.AsyncClient(timeout=None)
    try:
        resp = await http.get(url, params=_query_params())
        resp.raise_for_status()
        payload = resp.json()
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.warning("[fetch] %s/%s request failed: %s", entity, indicator, e)
        return Series.empty()
    except ValueError as e:
        logger.warning("[fetch] %s/%s invalid JSON: %s", entity, indicator, e)
        return Series.empty()
    finally:
        if own_client:
            await http.aclose()

    series = parse_payload(payload, start_year, end_year)
    logger.info("[fetch] %s/%s: %d points (%s..%s)", entity, indicator, len(series), start_year, end_year)
    return series


async def fetch_batch(
    specs: Iterable[IndicatorSpec],
    start_year: int = DEFAULT_START_YEAR,
    end_year: int = DEFAULT_END_YEAR,
    *,
    base_url: str = DEFAULT_BASE_URL,
    client: Optional[httpx.AsyncClient] = None,
) -> SeriesContext:
    """
    Fetch every indicator concurrently and collect the results by key.

    All requests are started before any is awaited; results are gathered
    once the slowest one finishes.
    """
    specs = list(specs)
    own_client = client is None
    http = client or httpx.AsyncClient(timeout=None)
    try:
        results = await asyncio.gather(*(
            fetch_series_async(
                spec.entity,
                spec.code,
                start_year,
                end_year,
                base_url=base_url,
                client=http,
            )
            for spec in specs
        ), return_exceptions=True)
    finally:
        if own_client:
            await http.aclose()

    collected: dict[str, Series] = {}
    for spec, result in zip(specs, results):
        if isinstance(result, BaseException):
            logger.warning("[fetch] %s/%s failed: %s: %s", spec.entity, spec.code, type(result).__name__, result)
            result = Series.empty()
        collected[spec.key] = result

    context = SeriesContext(
        series=collected,
        start_year=start_year,
        end_year=end_year,
    )

    empty = context.empty_keys()
    if empty:
        logger.warning("[fetch] batch finished with %d/%d empty series: %s", len(empty), len(specs), empty)
    else:
        logger.info("[fetch] batch finished: %d series", len(specs))
    return context


def fetch_context(config: DashboardConfig) -> SeriesContext:
    """Run fetch_batch for every configured indicator from synchronous code."""
    return asyncio.run(
        fetch_batch(
            config.indicators,
            config.start_year,
            config.end_year,
            base_url=config.base_url,
        )
    )
