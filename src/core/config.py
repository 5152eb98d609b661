"""
Widget defaults and limits for the EPS & P/E Forecaster.

Everything the pages need to start from lives here so neither page hardcodes
its own numbers.
"""

from dataclasses import dataclass, field
from typing import Tuple

# Smallest EPS the calculator will divide by.
EPS_FLOOR = 0.0001

# Upper bound of the chart horizon slider.
MAX_HORIZON_YEARS = 20


@dataclass(frozen=True)
class ForecasterSettings:
    current_price: float = 175.0
    current_eps: float = 3.0
    growth_pct: float = 15.0
    entry_prices: Tuple[float, ...] = (175.0, 160.0)
    summary_horizons: Tuple[int, ...] = (1, 3, 5, 10)
    chart_horizon: int = 10
    min_chart_horizon: int = 1
    max_chart_horizon: int = MAX_HORIZON_YEARS
    eps_floor: float = EPS_FLOOR
    pe_palette: Tuple[str, ...] = field(
        default=(
            "#2563eb",
            "#ef4444",
            "#10b981",
            "#f59e0b",
            "#8b5cf6",
            "#14b8a6",
            "#e11d48",
            "#22c55e",
        )
    )


DEFAULT_SETTINGS = ForecasterSettings()
