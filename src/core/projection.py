"""
Module for projecting EPS and the implied P/E ratio of fixed entry prices.

Philosophy:
    - A single deterministic formula: EPS compounds at a constant annual rate and
      each entry price is divided by the projected EPS.
    - "Define errors out of existence": a non-positive EPS is floored, non-positive
      entry prices are dropped, a negative horizon becomes zero. The calculator
      never raises for numeric input.
    - Degenerate results (EPS collapsing to zero under -100% growth) are returned
      as non-finite P/E values. Formatting them is the presentation layer's job.

Formula:
    g       = 1 + growth_pct / 100
    EPS_t   = EPS_0 * g^t                 for t = 0 .. horizon (inclusive)
    PE_i,t  = EntryPrice_i / EPS_t
"""

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple

import numpy as np
import pandas as pd

from src.core.config import EPS_FLOOR

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProjectionRequest:
    """
    Parameters of one projection.

    Frozen (and therefore hashable) so that a page can memoise `project` on it.
    """

    start_year: int
    current_eps: float
    growth_pct: float = 0.0
    entry_prices: Tuple[float, ...] = ()
    horizon_years: int = 10


@dataclass(frozen=True)
class ProjectionRow:
    year: int
    t: int
    eps: float
    pe_by_entry: Tuple[float, ...]


@dataclass(frozen=True)
class ProjectionSeries:
    """
    Ordered projection rows plus the entry prices their P/E columns refer to.

    `entry_prices` holds only the prices that survived filtering, aligned by
    index with every row's `pe_by_entry`.
    """

    rows: Tuple[ProjectionRow, ...]
    entry_prices: Tuple[float, ...]

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[ProjectionRow]:
        return iter(self.rows)

    def __getitem__(self, index: int) -> ProjectionRow:
        return self.rows[index]


def _finite_or(value, default: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


def effective_eps(current_eps) -> float:
    """Returns the EPS actually used as the base: never below `EPS_FLOOR`."""
    return max(_finite_or(current_eps, 0.0), EPS_FLOOR)


def surviving_entry_prices(entry_prices: Iterable) -> Tuple[float, ...]:
    """Keeps strictly positive, finite entry prices in their original order."""
    kept = []
    for price in entry_prices or ():
        value = _finite_or(price, 0.0)
        if value > 0:
            kept.append(value)
    return tuple(kept)


def project(request: ProjectionRequest) -> ProjectionSeries:
    """
    Projects EPS and P/E year by year from `start_year` to `start_year + horizon_years`.

    Args:
        request: The projection parameters. `growth_pct` is a percentage
                 (15 means +15% a year) and may be negative.

    Returns:
        A ProjectionSeries of `horizon_years + 1` rows in increasing `t`.
        Row 0 carries the (floored) current EPS unchanged.
    """
    eps_0 = effective_eps(request.current_eps)
    growth_pct = _finite_or(request.growth_pct, 0.0)
    horizon = max(int(_finite_or(request.horizon_years, 0.0)), 0)
    start_year = int(_finite_or(request.start_year, 0.0))
    prices = surviving_entry_prices(request.entry_prices)

    # 1. Growth multiplier
    g = 1.0 + growth_pct / 100.0

    # 2. EPS path, t = 0 .. horizon inclusive
    t = np.arange(horizon + 1)
    with np.errstate(over="ignore"):
        eps = eps_0 * np.power(g, t)

    # 3. P/E per entry price; EPS of zero yields inf and is left as such
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        pe = np.asarray(prices, dtype=np.float64)[np.newaxis, :] / eps[:, np.newaxis]

    rows = tuple(
        ProjectionRow(
            year=start_year + step,
            t=step,
            eps=float(eps[step]),
            pe_by_entry=tuple(float(x) for x in pe[step]),
        )
        for step in range(horizon + 1)
    )

    logger.debug(
        "Projected %d rows (eps_0=%s, g=%s, %d entry prices)",
        len(rows),
        eps_0,
        g,
        len(prices),
    )
    return ProjectionSeries(rows=rows, entry_prices=prices)


def horizon_summary(
    series: ProjectionSeries, horizons: Iterable[int]
) -> Tuple[ProjectionRow, ...]:
    """
    Selects the rows whose `t` is one of `horizons`.

    The series order is preserved, so the result is ascending in `t` whatever
    order (or duplicates) `horizons` comes in. Horizons past the end of the
    series are simply absent from the result.
    """
    selected = {int(h) for h in horizons}
    return tuple(row for row in series if row.t in selected)


def series_to_frame(series: ProjectionSeries) -> pd.DataFrame:
    """
    Flattens a series into one row per year: `year`, `t`, `eps`, `pe_0` .. `pe_{n-1}`.
    """
    records = []
    for row in series:
        record = {"year": row.year, "t": row.t, "eps": row.eps}
        for idx, value in enumerate(row.pe_by_entry):
            record[f"pe_{idx}"] = value
        records.append(record)

    columns = ["year", "t", "eps"] + [f"pe_{i}" for i in range(len(series.entry_prices))]
    return pd.DataFrame(records, columns=columns)
