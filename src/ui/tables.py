"""
Summary table and number formatting for the forecaster pages.

Non-finite values (P/E once EPS has been projected to zero) are displayed as "n/a".
"""

import math
from typing import Iterable, List, Sequence

import pandas as pd

from src.core.projection import ProjectionSeries, horizon_summary

NOT_AVAILABLE = "n/a"


def fmt_number(value, decimals: int = 2) -> str:
    """Thousands separators and at most `decimals` decimals: 1234.5 -> '1,234.5'."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return NOT_AVAILABLE
    if not math.isfinite(number):
        return NOT_AVAILABLE

    text = f"{number:,.{decimals}f}"
    if decimals > 0:
        text = text.rstrip("0").rstrip(".")
    # -0 after rounding
    return "0" if text == "-0" else text


def fmt_money(value, decimals: int = 2) -> str:
    text = fmt_number(value, decimals)
    return text if text == NOT_AVAILABLE else f"${text}"


def fmt_years(t: int) -> str:
    return f"{t} yr" if t == 1 else f"{t} yrs"


def scenario_labels(entry_prices: Sequence[float]) -> List[str]:
    """
    'P/E @ $175' per entry price. A repeated price gets its scenario number
    appended so labels stay unique.
    """
    labels = []
    for idx, price in enumerate(entry_prices):
        label = f"P/E @ ${fmt_number(price)}"
        if label in labels:
            label = f"{label} #{idx + 1}"
        labels.append(label)
    return labels


def summary_table(series: ProjectionSeries, horizons: Iterable[int]) -> pd.DataFrame:
    """
    Builds the horizon summary table, one row per selected horizon.

    Columns: 'Horizon', 'Year', 'EPS' and one 'P/E @ $price' per entry price,
    all already formatted as strings for display.
    """
    pe_headers = scenario_labels(series.entry_prices)
    columns = ["Horizon", "Year", "EPS"] + pe_headers

    records = []
    for row in horizon_summary(series, horizons):
        record = {
            "Horizon": fmt_years(row.t),
            "Year": str(row.year),
            "EPS": fmt_money(row.eps),
        }
        for header, pe in zip(pe_headers, row.pe_by_entry):
            record[header] = fmt_number(pe)
        records.append(record)

    return pd.DataFrame(records, columns=columns)
