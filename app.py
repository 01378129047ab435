"""Dash application for iPhone manufacturing cost projections under tariffs."""
from __future__ import annotations

import logging
from typing import Iterable, List, Tuple

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from dash import Dash, Input, Output, dcc, html, dash_table
from dash.dash_table import FormatTemplate

from logging_config import setup_logging
from projector import (
    MAX_TARIFF_PCT,
    MIN_TARIFF_PCT,
    TARIFF_STEP_PCT,
    InvalidInput,
    PenaltyFactor,
    china_cost,
    cost_table_frame,
    project,
)
from reference_data import factory_frame, state_cost_frame
from settings import Config

logger = logging.getLogger(__name__)

US_VARIANT_COLUMNS = {
    "USBaseCost_USD": "U.S. iPhone",
    "USProCost_USD": "U.S. iPhone Pro",
    "USProMaxCost_USD": "U.S. iPhone Pro Max",
}
FACTOR_OPTIONS = [
    {"label": f"{factor.label} (+{factor.rate:.0%})", "value": factor.value}
    for factor in PenaltyFactor
]
EMPTY_OUTPUTS_MESSAGE = "Unable to project costs: {error}"


def empty_figure(title: str = "") -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title=title)
    return fig


def build_projection_chart(table_df: pd.DataFrame, selected_tariff: int) -> go.Figure:
    """Plot China cost across tariff levels against the flat U.S. cost lines."""
    if table_df.empty:
        return empty_figure("Projected manufacturing cost")

    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=table_df["Tariff_pct"],
            y=table_df["ChinaCost_USD"],
            mode="lines+markers",
            name="China-made iPhone",
        )
    )
    for column, label in US_VARIANT_COLUMNS.items():
        fig.add_trace(
            go.Scatter(
                x=table_df["Tariff_pct"],
                y=table_df[column],
                mode="lines",
                name=label,
                line=dict(dash="dash"),
            )
        )
    fig.add_vline(
        x=selected_tariff,
        line_dash="dot",
        line_color="#888888",
        annotation_text=f"Selected {selected_tariff}%",
    )
    fig.update_layout(
        title="Projected manufacturing cost",
        xaxis_title="Tariff (%)",
        yaxis_title="Cost per unit (USD)",
        hovermode="x unified",
    )
    return fig


def build_china_curve_chart() -> go.Figure:
    """Static chart of China-made unit cost over the full tariff range."""
    table_df = cost_table_frame(project(MIN_TARIFF_PCT))
    return px.line(
        table_df,
        x="Tariff_pct",
        y="ChinaCost_USD",
        markers=True,
        title="China-made iPhone cost vs tariff",
        labels={"Tariff_pct": "Tariff (%)", "ChinaCost_USD": "Cost per unit (USD)"},
    )


def build_state_cost_chart(states: pd.DataFrame | None = None) -> go.Figure:
    """Bar chart of the relative manufacturing cost index per U.S. state."""
    if states is None:
        states = state_cost_frame()
    if states.empty:
        return empty_figure("U.S. state manufacturing cost index")
    return px.bar(
        states,
        x="state",
        y="cost_index",
        title="U.S. state manufacturing cost index",
        labels={"state": "State", "cost_index": "Cost index"},
    )


def build_factory_map(factories: pd.DataFrame | None = None) -> go.Figure:
    """Create a marker map of the known factory locations."""
    if factories is None:
        factories = factory_frame()
    base_fig = go.Figure()
    if factories.empty:
        base_fig.update_layout(
            geo=dict(showframe=False, showcoastlines=True),
            margin=dict(l=0, r=0, t=0, b=0),
        )
        return base_fig

    base_fig.add_trace(
        go.Scattergeo(
            lon=factories["lon"],
            lat=factories["lat"],
            mode="markers+text",
            marker=dict(size=10, color="#2a3f5f"),
            text=factories["name"],
            textposition="top center",
            hoverinfo="text",
        )
    )
    base_fig.update_layout(
        geo=dict(
            showframe=False,
            showcoastlines=True,
            showcountries=True,
            projection_type="natural earth",
        ),
        margin=dict(l=0, r=0, t=0, b=0),
    )
    return base_fig


def render_kpi_cards(table_df: pd.DataFrame, selected_tariff: int) -> List[html.Div]:
    """Generate KPI cards for the China cost at the selected tariff and each U.S. variant."""
    cards: List[html.Div] = []
    if table_df.empty:
        return cards
    # U.S. costs are flat, so any row carries them
    row = table_df.iloc[0]
    entries = [("China-made iPhone", china_cost(selected_tariff))]
    entries.extend((label, row[column]) for column, label in US_VARIANT_COLUMNS.items())
    for title, value in entries:
        cards.append(
            html.Div(
                [
                    html.H4(title, className="kpi-title"),
                    html.P(f"${value:,.2f}"),
                ],
                className="kpi-card",
            )
        )
    return cards


def compute_dashboard_outputs(
    tariff_value: int,
    factor_values: Iterable[str] | None,
) -> Tuple[str, List[html.Div], go.Figure, List[dict]]:
    """Project costs for the current controls and build the projection tab outputs."""
    try:
        table = project(tariff_value, factor_values or [])
    except InvalidInput as exc:
        logger.warning("Rejected projection input tariff=%r factors=%r: %s", tariff_value, factor_values, exc)
        return (
            EMPTY_OUTPUTS_MESSAGE.format(error=exc),
            [],
            empty_figure("Projected manufacturing cost"),
            [],
        )

    table_df = cost_table_frame(table)
    status = (
        f"Tariff {tariff_value}%: China-made ${china_cost(tariff_value):,.2f}, "
        f"U.S.-made from ${table[0].us_base_cost:,.2f}"
    )
    return (
        status,
        render_kpi_cards(table_df, tariff_value),
        build_projection_chart(table_df, tariff_value),
        table_df.round(2).to_dict("records"),
    )


def build_app() -> Dash:
    """Create and configure the Dash application instance."""
    money = FormatTemplate.money(2)
    default_tariff = min(max(Config.DEFAULT_TARIFF_PCT, MIN_TARIFF_PCT), MAX_TARIFF_PCT)
    default_tariff -= default_tariff % TARIFF_STEP_PCT

    app = Dash(__name__)
    app.title = "iPhone Tariff Cost Dashboard"

    app.layout = html.Div(
        [
            html.Div(
                [
                    html.H2("iPhone tariff cost dashboard"),
                    html.Label("Tariff on imports (%)"),
                    dcc.Slider(
                        id="tariff-slider",
                        min=MIN_TARIFF_PCT,
                        max=MAX_TARIFF_PCT,
                        step=TARIFF_STEP_PCT,
                        value=default_tariff,
                        marks={level: f"{level}%" for level in range(MIN_TARIFF_PCT, MAX_TARIFF_PCT + 1, 25)},
                        className="control-slider",
                    ),
                    html.Label("Economic penalties"),
                    dcc.Checklist(
                        id="penalty-checklist",
                        options=FACTOR_OPTIONS,
                        value=[],
                        className="control-checkbox",
                    ),
                    html.P(
                        "Penalties add to the U.S. cost multiplier. The China cost "
                        "line always follows the full tariff curve."
                    ),
                    html.Div(id="projection-status", className="status-message"),
                ],
                className="sidebar",
            ),
            html.Div(
                [
                    dcc.Tabs(
                        [
                            dcc.Tab(
                                label="Projection",
                                children=[
                                    html.Div(id="kpi-container", className="kpi-container"),
                                    dcc.Graph(id="projection-chart"),
                                    dash_table.DataTable(
                                        id="cost-table",
                                        columns=[
                                            {"name": "Tariff (%)", "id": "Tariff_pct", "type": "numeric"},
                                            {"name": "China-made (USD)", "id": "ChinaCost_USD", "type": "numeric", "format": money},
                                            {"name": "U.S. iPhone (USD)", "id": "USBaseCost_USD", "type": "numeric", "format": money},
                                            {"name": "U.S. Pro (USD)", "id": "USProCost_USD", "type": "numeric", "format": money},
                                            {"name": "U.S. Pro Max (USD)", "id": "USProMaxCost_USD", "type": "numeric", "format": money},
                                        ],
                                        data=[],
                                        style_table={"maxHeight": "400px", "overflowY": "auto"},
                                        style_cell={"padding": "4px", "textAlign": "left"},
                                    ),
                                ],
                            ),
                            dcc.Tab(
                                label="China cost curve",
                                children=[
                                    dcc.Graph(id="china-curve-chart", figure=build_china_curve_chart()),
                                ],
                            ),
                            dcc.Tab(
                                label="State cost index",
                                children=[
                                    dcc.Graph(id="state-cost-chart", figure=build_state_cost_chart()),
                                ],
                            ),
                            dcc.Tab(
                                label="Factory map",
                                children=[
                                    dcc.Graph(id="factory-map", figure=build_factory_map()),
                                ],
                            ),
                        ]
                    )
                ],
                className="main-content",
            ),
        ],
        className="app-container",
    )

    @app.callback(
        Output("projection-status", "children"),
        Output("kpi-container", "children"),
        Output("projection-chart", "figure"),
        Output("cost-table", "data"),
        Input("tariff-slider", "value"),
        Input("penalty-checklist", "value"),
    )
    def refresh_dashboard(tariff_value: int, factor_values: List[str]):
        return compute_dashboard_outputs(tariff_value, factor_values)

    app.index_string = """
    <!DOCTYPE html>
    <html>
        <head>
            {%metas%}
            <title>{%title%}</title>
            {%favicon%}
            {%css%}
            <style>
                body { font-family: "Helvetica Neue", Helvetica, Arial, sans-serif; margin: 0; }
                .app-container { display: flex; min-height: 100vh; }
                .sidebar { width: 320px; padding: 20px; background-color: #f4f6f8; box-shadow: 2px 0 8px rgba(0,0,0,0.05); }
                .main-content { flex: 1; padding: 20px; }
                .kpi-container { display: flex; gap: 16px; flex-wrap: wrap; margin-bottom: 20px; }
                .kpi-card { background: white; border-radius: 8px; padding: 12px 16px; box-shadow: 0 2px 6px rgba(0,0,0,0.1); min-width: 180px; }
                .kpi-title { margin-bottom: 8px; }
                .control-slider, .control-checkbox { margin-bottom: 16px; }
                .status-message { margin-top: 16px; color: #2a3f5f; }
            </style>
        </head>
        <body>
            {%app_entry%}
            <footer>
                {%config%}
                {%scripts%}
                {%renderer%}
            </footer>
        </body>
    </html>
    """

    return app


setup_logging(Config.LOG_LEVEL)
app = build_app()
server = app.server


if __name__ == "__main__":
    app.run(host=Config.HOST, port=Config.PORT, debug=Config.DEBUG)
