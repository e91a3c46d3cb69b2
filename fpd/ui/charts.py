"""Chart rendering module for the Family Portfolio Dashboard.

Figure construction is kept separate from Streamlit rendering: the
``build_*`` functions take projection rows and return Plotly figures (unit
testable without a running app), and the ``render_*`` functions take the
Streamlit module explicitly and display them.

Functions
---------
build_total_value_figure(rows)
    Line chart of total portfolio value per year.

build_returns_figure(rows)
    Bar chart of investment returns per projected year (row 0 excluded).

build_composition_figure(rows)
    Stacked area chart of per-account balances.

render_summary_cards(summary, st_module)
    Five headline metrics.

render_projection_table(df, st_module)
    Full per-year table with currency formatting.
"""

from __future__ import annotations

from typing import Any, Sequence

import plotly.graph_objects as go

from fpd.core.config import ACCOUNT_LABELS
from fpd.core.engine import YearRow
from fpd.core.formatting import display_frame, format_currency, format_years
from fpd.core.summary import PortfolioSummary
from fpd.ui.theme import ACCOUNT_COLORS, RETURNS_COLOR, STACK_ORDER, TOTAL_COLOR, apply_plotly_theme

_MONEY_HOVER = "%{x}: $%{y:,.0f}<extra>%{fullData.name}</extra>"


def _years(rows: Sequence[YearRow]) -> list[int]:
    return [r.year for r in rows]


def _money_axis(fig: go.Figure) -> None:
    fig.update_yaxes(tickprefix="$", tickformat="~s", rangemode="tozero")


def build_total_value_figure(rows: Sequence[YearRow]) -> go.Figure:
    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=_years(rows),
            y=[r.total for r in rows],
            mode="lines+markers",
            name="Total",
            line=dict(color=TOTAL_COLOR, width=3, shape="spline"),
            marker=dict(color=TOTAL_COLOR, size=8),
            hovertemplate=_MONEY_HOVER,
        )
    )
    fig.update_layout(title="Total Portfolio Value Over Time", showlegend=False)
    _money_axis(fig)
    return apply_plotly_theme(fig, height=300)


def build_returns_figure(rows: Sequence[YearRow]) -> go.Figure:
    """Returns per projected year; the starting snapshot has none."""
    projected = list(rows[1:])
    fig = go.Figure()
    fig.add_trace(
        go.Bar(
            x=_years(projected),
            y=[r.investment_returns for r in projected],
            name="Investment Returns",
            marker_color=RETURNS_COLOR,
            hovertemplate=_MONEY_HOVER,
        )
    )
    fig.update_layout(title="Annual Investment Returns", showlegend=False)
    _money_axis(fig)
    return apply_plotly_theme(fig, height=300)


def build_composition_figure(rows: Sequence[YearRow]) -> go.Figure:
    fig = go.Figure()
    x = _years(rows)
    for account in STACK_ORDER:
        color = ACCOUNT_COLORS[account]
        fig.add_trace(
            go.Scatter(
                x=x,
                y=[getattr(r, account) for r in rows],
                mode="lines",
                name=ACCOUNT_LABELS[account],
                stackgroup="accounts",
                line=dict(color=color, shape="spline"),
                fillcolor=color,
                hovertemplate=_MONEY_HOVER,
            )
        )
    fig.update_layout(title="Account Growth Breakdown", legend_title="Account")
    _money_axis(fig)
    return apply_plotly_theme(fig, height=350)


def render_summary_cards(summary: PortfolioSummary, st_module: Any) -> None:
    """Render the five headline cards in one row."""
    c1, c2, c3, c4, c5 = st_module.columns(5, gap="small")
    with c1:
        st_module.metric("Current Total", format_currency(summary.current_total))
    with c2:
        st_module.metric(
            "Projected Total",
            format_currency(summary.projected_total),
            delta=format_currency(summary.total_growth),
        )
    with c3:
        st_module.metric("Total Returns", format_currency(summary.total_returns))
    with c4:
        st_module.metric("Contributions", format_currency(summary.total_contributions))
    with c5:
        st_module.metric("Years of Expenses", format_years(summary.final_years_of_expenses))
        st_module.caption(f"at {format_currency(summary.final_annual_expense)}/yr")


def render_charts(rows: Sequence[YearRow], st_module: Any) -> None:
    if not rows:
        st_module.info("No projection data to chart.")
        return
    st_module.plotly_chart(build_total_value_figure(rows), use_container_width=True)
    if len(rows) > 1:
        st_module.plotly_chart(build_returns_figure(rows), use_container_width=True)
    st_module.plotly_chart(build_composition_figure(rows), use_container_width=True)


def render_projection_table(df: Any, st_module: Any) -> None:
    """Render every projection field per year, money columns formatted."""
    if df is None or df.empty:
        st_module.info("No projection rows to display.")
        return
    st_module.subheader("Projection Details")
    st_module.dataframe(display_frame(df), use_container_width=True, hide_index=True)
