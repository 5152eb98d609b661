import math

import altair as alt
import pytest
from src.core.projection import ProjectionRequest, project
from src.ui.charts import pe_color, plot_eps_projection, plot_pe_projection
from src.ui.tables import (
    NOT_AVAILABLE,
    fmt_money,
    fmt_number,
    scenario_labels,
    summary_table,
)


@pytest.fixture
def series():
    return project(
        ProjectionRequest(
            start_year=2024,
            current_eps=3.0,
            growth_pct=15.0,
            entry_prices=(175.0, 160.0),
            horizon_years=10,
        )
    )


@pytest.fixture
def collapsed_series():
    return project(
        ProjectionRequest(
            start_year=2024,
            current_eps=3.0,
            growth_pct=-100.0,
            entry_prices=(175.0,),
            horizon_years=3,
        )
    )


class TestFormatting:
    @pytest.mark.parametrize(
        "value, expected",
        [(58.3333, "58.33"), (3.0, "3"), (3.45, "3.45"), (1234.5, "1,234.5"), (100, "100"), (-0.001, "0")],
    )
    def test_fmt_number(self, value, expected):
        assert fmt_number(value) == expected

    @pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan"), None, "abc"])
    def test_fmt_number_non_finite(self, value):
        assert fmt_number(value) == NOT_AVAILABLE

    def test_fmt_money(self):
        assert fmt_money(3.45) == "$3.45"
        assert fmt_money(float("inf")) == NOT_AVAILABLE

    def test_scenario_labels_unique(self):
        assert scenario_labels([175.0, 160.0, 175.0]) == [
            "P/E @ $175",
            "P/E @ $160",
            "P/E @ $175 #3",
        ]


class TestSummaryTable:
    def test_columns_and_rows(self, series):
        table = summary_table(series, [10, 1, 5, 3])

        assert list(table.columns) == ["Horizon", "Year", "EPS", "P/E @ $175", "P/E @ $160"]
        assert table["Horizon"].tolist() == ["1 yr", "3 yrs", "5 yrs", "10 yrs"]
        assert table["Year"].tolist() == ["2025", "2027", "2029", "2034"]
        assert table.loc[0, "EPS"] == "$3.45"
        assert table.loc[0, "P/E @ $175"] == "50.72"
        assert table.loc[0, "P/E @ $160"] == "46.38"

    def test_non_finite_shown_as_na(self, collapsed_series):
        table = summary_table(collapsed_series, [1, 3])
        assert table["EPS"].tolist() == ["$0", "$0"]
        assert table["P/E @ $175"].tolist() == [NOT_AVAILABLE, NOT_AVAILABLE]

    def test_nothing_selected(self, series):
        table = summary_table(series, [])
        assert table.empty
        assert "EPS" in table.columns


class TestCharts:
    def test_eps_chart(self, series):
        chart = plot_eps_projection(series)

        assert isinstance(chart, alt.Chart)
        assert len(chart.data) == 11
        spec = chart.to_dict()
        assert spec["mark"]["type"] == "line"
        assert spec["encoding"]["y"]["field"] == "eps"

    def test_pe_chart_one_line_per_price(self, series):
        chart = plot_pe_projection(series)

        data = chart.data
        assert len(data) == 22
        assert sorted(data["Scenario"].unique()) == ["P/E @ $160", "P/E @ $175"]
        spec = chart.to_dict()
        assert spec["encoding"]["color"]["scale"]["range"] == [pe_color(0), pe_color(1)]

    def test_pe_chart_gaps_for_non_finite(self, collapsed_series):
        data = plot_pe_projection(collapsed_series).data

        assert math.isfinite(data.loc[data["t"] == 0, "PE"].iloc[0])
        assert data.loc[data["t"] > 0, "PE"].isna().all()

    def test_pe_chart_without_prices(self):
        empty = project(ProjectionRequest(start_year=2024, current_eps=3.0, entry_prices=(), horizon_years=2))
        chart = plot_pe_projection(empty)
        assert chart.data.empty

    def test_palette_cycles(self):
        assert pe_color(0) == pe_color(8)
        assert pe_color(1) != pe_color(0)
