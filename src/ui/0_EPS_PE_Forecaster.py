"""
Streamlit UI for the EPS & P/E Forecaster.
Workflow:
1. Base parameters (EPS, growth, chart horizon)
2. Entry price scenarios (add / edit / remove)
3. Charts (EPS and P/E per entry price)
4. Summary table for the selected horizons
"""

import streamlit as st
import sys
import os
from datetime import date

# Prioritize project root in path
sys.path.insert(0, os.getcwd())

from src.core.config import DEFAULT_SETTINGS
from src.core.inputs import (
    add_entry_price,
    build_request,
    current_pe,
    remove_entry_price,
    toggle_horizon,
    update_entry_price,
)
from src.core.projection import ProjectionRequest, ProjectionSeries, project
from src.ui import charts
from src.ui.tables import fmt_money, fmt_number, summary_table

st.set_page_config(page_title="EPS & P/E Forecaster", layout="wide", initial_sidebar_state="collapsed")

# --- Custom CSS ---
st.markdown("""
<style>
    .block-container {
        max-width: 1200px;
        margin: 0 auto;
        padding: 2rem 1rem;
    }
    h1 {
        font-weight: 800;
        letter-spacing: -0.02em;
    }
</style>
""", unsafe_allow_html=True)


@st.cache_data(show_spinner=False)
def cached_projection(request: ProjectionRequest) -> ProjectionSeries:
    return project(request)


start_year = date.today().year

st.title("📈 EPS & P/E Forecaster")
st.caption(f"{start_year} Edition")

# --- Initialize Session State ---
if 'entry_prices' not in st.session_state:
    st.session_state['entry_prices'] = DEFAULT_SETTINGS.entry_prices
if 'horizons' not in st.session_state:
    st.session_state['horizons'] = DEFAULT_SETTINGS.summary_horizons

col_base, col_prices, col_horizons = st.columns(3)

# --- Step 1: Base parameters ---
with col_base:
    st.subheader("Base Parameters")
    current_eps = st.number_input("Current EPS ($)", min_value=0.0, value=DEFAULT_SETTINGS.current_eps, step=0.01)
    growth_pct = st.number_input("EPS Growth (%/yr)", value=DEFAULT_SETTINGS.growth_pct, step=0.1)
    max_years = st.slider(
        "Chart Horizon (years)",
        DEFAULT_SETTINGS.min_chart_horizon,
        DEFAULT_SETTINGS.max_chart_horizon,
        DEFAULT_SETTINGS.chart_horizon,
    )

# --- Step 2: Entry prices ---
with col_prices:
    st.subheader("Entry Prices & Current P/E")
    c1, c2 = st.columns([3, 1])
    current_price = c1.number_input("Current Price ($)", min_value=0.0, value=DEFAULT_SETTINGS.current_price, step=0.01)
    c2.markdown("<div style='height: 1.8rem'></div>", unsafe_allow_html=True)
    if c2.button("Add", help="Add the current price as a scenario"):
        st.session_state['entry_prices'] = add_entry_price(st.session_state['entry_prices'], current_price)
        st.rerun()

    prices = st.session_state['entry_prices']
    for idx, price in enumerate(prices):
        p1, p2, p3 = st.columns([3, 2, 1])
        new_price = p1.number_input(
            f"Scenario #{idx + 1}",
            value=float(price),
            min_value=0.0,
            step=0.01,
            key=f"entry_price_{idx}_{len(prices)}",
        )
        if new_price != price:
            st.session_state['entry_prices'] = update_entry_price(prices, idx, new_price)
            st.rerun()
        p2.markdown(f"<div style='padding-top: 2rem'>P/E now: <strong>{fmt_number(current_pe(price, current_eps))}</strong></div>", unsafe_allow_html=True)
        p3.markdown("<div style='height: 1.8rem'></div>", unsafe_allow_html=True)
        if p3.button("🗑", key=f"remove_{idx}_{len(prices)}", help="Remove"):
            st.session_state['entry_prices'] = remove_entry_price(prices, idx)
            st.rerun()

    if not prices:
        st.caption("Add one or more entry prices.")

# --- Step 3: Summary horizons ---
with col_horizons:
    st.subheader("Horizons (summary table)")
    h_cols = st.columns(len(DEFAULT_SETTINGS.summary_horizons))
    for h_col, h in zip(h_cols, DEFAULT_SETTINGS.summary_horizons):
        checked = h_col.checkbox(f"{h} yrs", value=h in st.session_state['horizons'], key=f"horizon_{h}")
        if checked != (h in st.session_state['horizons']):
            st.session_state['horizons'] = toggle_horizon(st.session_state['horizons'], h)
    st.caption(
        "The charts show every yearly step up to the chart horizon, while the table "
        "summarises the selected horizons."
    )

request = build_request(
    start_year=start_year,
    current_eps=current_eps,
    growth_pct=growth_pct,
    entry_prices=st.session_state['entry_prices'],
    horizon_years=max_years,
)
series = cached_projection(request)

# --- Step 4: Charts ---
st.markdown("---")
chart_eps, chart_pe = st.columns(2)
try:
    with chart_eps:
        st.altair_chart(charts.plot_eps_projection(series), width="stretch")
    with chart_pe:
        st.altair_chart(charts.plot_pe_projection(series), width="stretch")
except Exception as e:
    st.error(f"Error: {e}")

# --- Step 5: Summary table ---
st.subheader("Summary by Horizon")
st.caption("Assumption: P/E = entry price / projected EPS")
table = summary_table(series, st.session_state['horizons'])
if table.empty:
    st.info(f"No selected horizon falls within the {max_years}-year chart horizon.")
else:
    st.dataframe(table, width="stretch", hide_index=True)

m1, m2 = st.columns(2)
m1.metric("EPS today", fmt_money(series[0].eps))
m2.metric(f"EPS in {series[-1].year}", fmt_money(series[-1].eps))

st.markdown("---")
st.markdown(
    "<div style='text-align: center; color: #666; font-size: 0.8rem;'>"
    "⚠️ Educational tool. Projections depend entirely on the EPS growth assumption and are "
    "not investment advice. Future P/E assumes the entry price stays constant."
    "</div>",
    unsafe_allow_html=True
)
