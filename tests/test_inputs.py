"""
Tests for boundary parsing and entry price scenario editing.
"""

import pytest
from src.core.config import EPS_FLOOR, MAX_HORIZON_YEARS
from src.core.inputs import (
    add_entry_price,
    build_request,
    clamp_horizon,
    current_pe,
    parse_entry_prices,
    parse_int,
    parse_number,
    remove_entry_price,
    toggle_horizon,
    update_entry_price,
)
from src.core.projection import ProjectionRequest, project


class TestParsing:
    @pytest.mark.parametrize(
        "raw, expected",
        [(3, 3.0), (2.5, 2.5), ("3.45", 3.45), (" 15 ", 15.0), ("$175", 175.0), ("-20", -20.0), ("1e2", 100.0)],
    )
    def test_parse_number(self, raw, expected):
        assert parse_number(raw) == pytest.approx(expected)

    @pytest.mark.parametrize("raw", ["", "   ", "abc", None, float("nan"), float("inf"), "inf"])
    def test_parse_number_defaults(self, raw):
        assert parse_number(raw, default=7.0) == 7.0

    def test_parse_int(self):
        assert parse_int("2024") == 2024
        assert parse_int(10.9) == 10
        assert parse_int("ten", default=5) == 5

    def test_parse_entry_prices(self):
        assert parse_entry_prices("175, 160, abc, , -5") == (175.0, 160.0, -5.0)

    @pytest.mark.parametrize("text", ["", None, " , ,"])
    def test_parse_entry_prices_empty(self, text):
        assert parse_entry_prices(text) == ()

    @pytest.mark.parametrize("years, expected", [(10, 10), ("5", 5), (-3, 0), (99, MAX_HORIZON_YEARS), ("x", 0)])
    def test_clamp_horizon(self, years, expected):
        assert clamp_horizon(years) == expected


class TestBuildRequest:
    def test_from_text_fields(self):
        request = build_request("2024", "3", "15", "175, 160", "1")
        assert request == ProjectionRequest(
            start_year=2024,
            current_eps=3.0,
            growth_pct=15.0,
            entry_prices=(175.0, 160.0),
            horizon_years=1,
        )

    def test_from_widget_values(self):
        request = build_request(2024, 3.0, 15.0, [175.0, 160.0], 10)
        assert request.entry_prices == (175.0, 160.0)
        assert request.horizon_years == 10

    def test_defaults_for_garbage(self):
        request = build_request("", "abc", "", "", "")
        assert request.start_year == 0
        assert request.current_eps == EPS_FLOOR
        assert request.growth_pct == 0.0
        assert request.entry_prices == ()
        assert request.horizon_years == 0

    def test_negative_eps_is_floored(self):
        assert build_request(2024, -1, 10, [100], 3).current_eps == EPS_FLOOR

    def test_feeds_projection(self):
        series = project(build_request(2024, "3", "15", "175, -1, 160", "1"))
        assert len(series) == 2
        assert series.entry_prices == (175.0, 160.0)
        assert round(series[1].eps, 2) == 3.45


class TestScenarios:
    def test_add_entry_price(self):
        assert add_entry_price((175.0, 160.0), 150) == (175.0, 160.0, 150.0)

    def test_add_defaults_to_current_price(self):
        assert add_entry_price(()) == (175.0,)

    def test_remove_entry_price(self):
        assert remove_entry_price((175.0, 160.0, 150.0), 1) == (175.0, 150.0)

    @pytest.mark.parametrize("index", [-1, 3])
    def test_remove_out_of_range(self, index):
        assert remove_entry_price((175.0, 160.0, 150.0), index) == (175.0, 160.0, 150.0)

    def test_update_entry_price(self):
        assert update_entry_price((175.0, 160.0), 0, "180") == (180.0, 160.0)

    def test_update_out_of_range(self):
        assert update_entry_price((175.0,), 5, 10) == (175.0,)

    def test_current_pe(self):
        assert current_pe(175, 3) == pytest.approx(58.333333)
        assert current_pe(175, 0) == pytest.approx(175 / EPS_FLOOR)

    def test_toggle_horizon(self):
        assert toggle_horizon((1, 3, 5, 10), 3) == (1, 5, 10)
        assert toggle_horizon((1, 5), 3) == (1, 5, 3)
