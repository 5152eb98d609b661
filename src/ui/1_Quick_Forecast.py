"""
Streamlit form for a one-shot forecast.
Type the parameters, list entry prices separated by commas, press Forecast.
"""

import streamlit as st
import sys
import os
from datetime import date

# Prioritize project root in path
sys.path.insert(0, os.getcwd())

from src.core.config import DEFAULT_SETTINGS
from src.core.inputs import build_request
from src.core.projection import project
from src.ui import charts

st.set_page_config(page_title="Quick Forecast", layout="wide", initial_sidebar_state="collapsed")

st.title("Quick EPS & P/E Forecast")

with st.form("forecast-form"):
    c1, c2, c3 = st.columns(3)
    eps_text = c1.text_input("Current EPS", str(DEFAULT_SETTINGS.current_eps))
    year_text = c2.text_input("Start Year", str(date.today().year))
    growth_text = c3.text_input("Growth (%/yr)", str(DEFAULT_SETTINGS.growth_pct))

    c4, c5 = st.columns([3, 1])
    prices_text = c4.text_input(
        "Entry Prices (comma separated)",
        ", ".join(f"{p:g}" for p in DEFAULT_SETTINGS.entry_prices),
    )
    years_text = c5.text_input("Years", str(DEFAULT_SETTINGS.chart_horizon))

    submitted = st.form_submit_button("Forecast", type="primary")

if submitted:
    request = build_request(
        start_year=year_text,
        current_eps=eps_text,
        growth_pct=growth_text,
        entry_prices=prices_text,
        horizon_years=years_text,
    )
    series = project(request)

    try:
        st.altair_chart(charts.plot_eps_projection(series), width="stretch")
        st.altair_chart(charts.plot_pe_projection(series), width="stretch")
    except Exception as e:
        st.error(f"Error: {e}")
