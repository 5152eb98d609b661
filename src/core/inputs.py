"""
Module for turning raw widget values into a ProjectionRequest.

Philosophy:
    - Validate at the boundary, keep the calculator typed: anything coming from a
      text field or a number input passes through here first.
    - Parse or default. Nothing the user types is reported as an error; an
      unparseable field falls back to its default and the projection carries on.
"""

import logging
import math
from typing import Iterable, Optional, Sequence, Tuple

import pandas as pd

from src.core.config import DEFAULT_SETTINGS, EPS_FLOOR, MAX_HORIZON_YEARS
from src.core.projection import ProjectionRequest

logger = logging.getLogger(__name__)


def parse_number(value, default: float = 0.0) -> float:
    """
    Parses a number from a widget value or text, returning `default` on failure.

    Accepts ints, floats and strings such as " 3.5 " or "$175". NaN and
    infinities count as failures.
    """
    if value is None:
        return default
    if isinstance(value, str):
        value = value.strip().lstrip("$").strip()
        if not value:
            return default

    number = pd.to_numeric(value, errors="coerce")
    try:
        number = float(number)
    except (TypeError, ValueError):
        return default

    if not math.isfinite(number):
        logger.debug("Could not parse %r as a number, using %s", value, default)
        return default
    return number


def parse_int(value, default: int = 0) -> int:
    """Same as `parse_number`, truncated to an integer."""
    number = parse_number(value, default=float("nan"))
    if math.isnan(number):
        return default
    return int(number)


def parse_entry_prices(text: Optional[str]) -> Tuple[float, ...]:
    """
    Splits a comma separated list of prices ("175, 160, abc") into numbers.

    Tokens that do not parse are dropped. Sign filtering is left to the
    calculator so that a zero or negative price still shows up as typed.
    """
    if not text:
        return ()

    prices = []
    for token in str(text).split(","):
        number = parse_number(token, default=float("nan"))
        if math.isnan(number):
            if token.strip():
                logger.debug("Dropping unparseable entry price %r", token)
            continue
        prices.append(number)
    return tuple(prices)


def clamp_horizon(years, max_years: int = MAX_HORIZON_YEARS) -> int:
    return min(max(parse_int(years, default=0), 0), max_years)


def build_request(
    start_year,
    current_eps,
    growth_pct,
    entry_prices: Iterable,
    horizon_years,
) -> ProjectionRequest:
    """
    Builds a ProjectionRequest from raw values, applying parse-or-default to each.

    Args:
        start_year: Calendar year of t = 0.
        current_eps: Current EPS; floored to `EPS_FLOOR` when missing or <= 0.
        growth_pct: Annual EPS growth in percent; 0 when missing.
        entry_prices: Iterable of prices or a comma separated string.
        horizon_years: Number of years to project, clamped to [0, MAX_HORIZON_YEARS].

    Returns:
        ProjectionRequest ready for `project`.
    """
    if isinstance(entry_prices, str):
        prices = parse_entry_prices(entry_prices)
    else:
        prices = tuple(parse_number(p, default=0.0) for p in entry_prices or ())

    eps = parse_number(current_eps, default=0.0)
    if eps <= 0:
        logger.debug("EPS %r is not positive, flooring to %s", current_eps, EPS_FLOOR)
        eps = EPS_FLOOR

    return ProjectionRequest(
        start_year=parse_int(start_year, default=0),
        current_eps=eps,
        growth_pct=parse_number(growth_pct, default=0.0),
        entry_prices=prices,
        horizon_years=clamp_horizon(horizon_years),
    )


def current_pe(price, current_eps) -> float:
    """Today's P/E for an entry price, dividing by the floored EPS."""
    return parse_number(price, default=0.0) / max(
        parse_number(current_eps, default=0.0), EPS_FLOOR
    )


# --- Entry price scenarios ---
# The interactive page keeps the list in session state; these return new tuples.


def add_entry_price(prices: Sequence[float], price=None) -> Tuple[float, ...]:
    if price is None:
        price = DEFAULT_SETTINGS.current_price
    return tuple(prices) + (parse_number(price, default=0.0),)


def remove_entry_price(prices: Sequence[float], index: int) -> Tuple[float, ...]:
    if not 0 <= index < len(prices):
        return tuple(prices)
    return tuple(p for i, p in enumerate(prices) if i != index)


def update_entry_price(prices: Sequence[float], index: int, value) -> Tuple[float, ...]:
    if not 0 <= index < len(prices):
        return tuple(prices)
    new_value = parse_number(value, default=0.0)
    return tuple(new_value if i == index else p for i, p in enumerate(prices))


def toggle_horizon(horizons: Sequence[int], horizon: int) -> Tuple[int, ...]:
    """Adds `horizon` to the summary selection, or removes it if already there."""
    if horizon in horizons:
        return tuple(h for h in horizons if h != horizon)
    return tuple(horizons) + (horizon,)
