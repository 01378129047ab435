"""Tests for the dashboard figure builders and refresh logic."""

import pandas as pd
import plotly.graph_objects as go
import pytest
from dash import Dash

import app as dashboard
from projector import cost_table_frame, project


def collect_ids(component):
    ids = set()
    component_id = getattr(component, "id", None)
    if component_id:
        ids.add(component_id)
    children = getattr(component, "children", None)
    if isinstance(children, (list, tuple)):
        for child in children:
            ids |= collect_ids(child)
    elif children is not None and hasattr(children, "children"):
        ids |= collect_ids(children)
    return ids


def test_build_app_exposes_controls_and_outputs():
    app = dashboard.build_app()

    assert isinstance(app, Dash)
    ids = collect_ids(app.layout)
    assert {
        "tariff-slider",
        "penalty-checklist",
        "projection-status",
        "kpi-container",
        "projection-chart",
        "cost-table",
        "china-curve-chart",
        "state-cost-chart",
        "factory-map",
    } <= ids


def test_factor_options_use_identifiers():
    values = [option["value"] for option in dashboard.FACTOR_OPTIONS]

    assert values == ["inflation", "supplyChainRebuild", "policyPenalty"]
    assert dashboard.FACTOR_OPTIONS[0]["label"] == "Inflation (+5%)"


def test_refresh_outputs_for_valid_input():
    status, cards, figure, records = dashboard.compute_dashboard_outputs(145, ["inflation", "policyPenalty"])

    assert status.startswith("Tariff 145%")
    assert len(cards) == 4
    assert isinstance(figure, go.Figure)
    assert len(figure.data) == 4
    assert len(records) == 30
    assert records[-1]["Tariff_pct"] == 145
    assert records[0]["USBaseCost_USD"] == pytest.approx(round(1500 * 2.45 * 1.13, 2))


def test_refresh_outputs_treat_missing_factors_as_empty():
    _, _, _, records = dashboard.compute_dashboard_outputs(0, None)

    assert records[0]["USProMaxCost_USD"] == 2000


@pytest.mark.parametrize("tariff, factors", [(200, []), (-5, []), (50, ["unknown"])])
def test_refresh_outputs_show_error_state(tariff, factors):
    status, cards, figure, records = dashboard.compute_dashboard_outputs(tariff, factors)

    assert status.startswith("Unable to project costs")
    assert cards == []
    assert records == []
    assert len(figure.data) == 0


def test_projection_chart_marks_selected_tariff():
    table_df = cost_table_frame(project(35, []))
    figure = dashboard.build_projection_chart(table_df, 35)

    assert [trace.name for trace in figure.data] == [
        "China-made iPhone",
        "U.S. iPhone",
        "U.S. iPhone Pro",
        "U.S. iPhone Pro Max",
    ]
    assert figure.layout.shapes[0].x0 == 35


def test_off_grid_tariff_renders_full_outputs():
    status, cards, figure, records = dashboard.compute_dashboard_outputs(37, [])

    assert status.startswith("Tariff 37%: China-made $805.56")
    assert len(cards) == 4
    assert len(figure.data) == 4
    assert len(records) == 30
    assert records[0]["USBaseCost_USD"] == pytest.approx(round(1500 * 1.37, 2))


def test_kpi_cards_for_off_grid_tariff():
    table_df = cost_table_frame(project(37, []))
    cards = dashboard.render_kpi_cards(table_df, 37)

    assert len(cards) == 4
    assert cards[0].children[1].children == "$805.56"
    assert dashboard.render_kpi_cards(pd.DataFrame(), 35) == []


def test_static_charts():
    china = dashboard.build_china_curve_chart()
    states = dashboard.build_state_cost_chart()

    assert list(china.data[0].y)[0] == 588
    assert len(china.data[0].x) == 30
    assert list(states.data[0].x) == ["California", "Texas", "Ohio"]


def test_factory_map_plots_each_location():
    figure = dashboard.build_factory_map()

    assert len(figure.data) == 1
    assert len(figure.data[0].lat) == 2


def test_factory_map_handles_no_locations():
    figure = dashboard.build_factory_map(pd.DataFrame(columns=["name", "lat", "lon"]))

    assert len(figure.data) == 0
