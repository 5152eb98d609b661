"""
Module for generating Altair charts for the EPS & P/E Forecaster.

Philosophy:
    - "Deep Module": Hides the complexity of Altair configuration behind a simple interface.
    - "Information Hiding": The pages don't need to know about mark_line, encode, etc.
    - "Define Errors Out of Existence": Accept a ProjectionSeries and handle non-finite
      values internally (they become gaps in the line).
"""

from typing import Sequence

import altair as alt
import numpy as np
import pandas as pd

from src.core.config import DEFAULT_SETTINGS
from src.core.projection import ProjectionSeries, series_to_frame
from src.ui.tables import scenario_labels

# Common Axis Config
AXIS_CONFIG = {"titleFontSize": 14, "labelFontSize": 12, "titlePadding": 10}


def pe_color(idx: int, palette: Sequence[str] = DEFAULT_SETTINGS.pe_palette) -> str:
    """Colour of the idx-th entry price series, cycling through the palette."""
    return palette[idx % len(palette)]


def _finite_or_nan(frame: pd.DataFrame, columns: Sequence[str]) -> pd.DataFrame:
    out = frame.copy()
    for col in columns:
        values = out[col].to_numpy(dtype=np.float64)
        out[col] = np.where(np.isfinite(values), values, np.nan)
    return out


def plot_eps_projection(series: ProjectionSeries, height: int = 300) -> alt.Chart:
    """
    Line chart of projected EPS against years from now.

    Args:
        series: Output of `project`.
        height: Chart height in pixels.

    Returns:
        An Altair Chart.
    """
    eps_df = _finite_or_nan(series_to_frame(series), ["eps"])

    return (
        alt.Chart(eps_df)
        .mark_line(color="#111827", size=2)
        .encode(
            x=alt.X("t:Q", axis=alt.Axis(title="Years from now", tickMinStep=1, **AXIS_CONFIG)),
            y=alt.Y("eps:Q", scale=alt.Scale(zero=False), axis=alt.Axis(format="$,.2f", title="EPS", **AXIS_CONFIG)),
            tooltip=[
                alt.Tooltip("year:O", title="Year"),
                alt.Tooltip("t:Q", title="Years"),
                alt.Tooltip("eps:Q", title="EPS", format="$,.2f"),
            ],
        )
        .properties(
            width="container",
            height=height,
            title=alt.TitleParams(text="EPS Projection", fontSize=18, anchor="start"),
        )
    )


def plot_pe_projection(series: ProjectionSeries, height: int = 300) -> alt.Chart:
    """
    One P/E line per entry price, each price held constant while EPS grows.

    Non-finite P/E values (EPS projected to zero) are plotted as gaps.

    Args:
        series: Output of `project`.
        height: Chart height in pixels.

    Returns:
        An Altair Chart. With no entry prices the chart has no lines but still renders.
    """
    frame = series_to_frame(series)
    pe_columns = [f"pe_{i}" for i in range(len(series.entry_prices))]
    frame = _finite_or_nan(frame, pe_columns)

    labels = scenario_labels(series.entry_prices)
    if pe_columns:
        long_df = frame.melt(
            id_vars=["year", "t"],
            value_vars=pe_columns,
            var_name="column",
            value_name="PE",
        )
        long_df["Scenario"] = long_df["column"].map(dict(zip(pe_columns, labels)))
        long_df = long_df.drop(columns="column")
    else:
        long_df = pd.DataFrame(columns=["year", "t", "PE", "Scenario"])

    color_scale = alt.Scale(
        domain=labels,
        range=[pe_color(i) for i in range(len(labels))],
    )

    return (
        alt.Chart(long_df)
        .mark_line(size=2)
        .encode(
            x=alt.X("t:Q", axis=alt.Axis(title="Years from now", tickMinStep=1, **AXIS_CONFIG)),
            y=alt.Y("PE:Q", scale=alt.Scale(zero=False), axis=alt.Axis(format=",.2f", title="P/E", **AXIS_CONFIG)),
            color=alt.Color("Scenario:N", scale=color_scale, sort=labels, legend=alt.Legend(title="")),
            tooltip=[
                alt.Tooltip("Scenario:N"),
                alt.Tooltip("year:O", title="Year"),
                alt.Tooltip("PE:Q", title="P/E", format=",.2f"),
            ],
        )
        .properties(
            width="container",
            height=height,
            title=alt.TitleParams(text="Future P/E (constant entry price)", fontSize=18, anchor="start"),
        )
    )
