"""Sidebar input module for the Family Portfolio Dashboard.

Functions
---------
render_sidebar(st_module)
    Render the sidebar widgets and return a ``Configuration`` for
    ``fpd.core.engine.project``.
"""

from __future__ import annotations

from typing import Any, MutableMapping

from fpd.core.config import Configuration
from fpd.core.formatting import format_currency
from fpd.ui.defaults import (
    GROWTH_PRESETS,
    GROWTH_SLIDER,
    INFLATION_PRESETS,
    INFLATION_SLIDER,
    YEARS_SLIDER,
    apply_session_defaults,
    balance_input_fields,
    config_from_state,
    contribution_input_fields,
    preset_label,
)


def _set_state(state: MutableMapping[str, Any], key: str, value: Any) -> None:
    state[key] = value


def _preset_row(st_module: Any, key: str, presets: list[float]) -> None:
    """Quick-select buttons under a slider; clicking one sets the slider."""
    state = st_module.session_state
    cols = st_module.sidebar.columns(len(presets))
    for col, value in zip(cols, presets):
        col.button(
            preset_label(value),
            key=f"{key}_preset_{value:g}",
            on_click=_set_state,
            args=(state, key, float(value)),
            use_container_width=True,
        )


def render_sidebar(st_module: Any) -> Configuration:
    """Render the sidebar widgets and return the current configuration.

    Widget values live in ``st.session_state`` under the ``Configuration``
    field names, seeded once from ``fpd.ui.defaults``.  Every rerun builds a
    fresh configuration from those values; nothing is kept between
    sessions.
    """
    state = st_module.session_state
    apply_session_defaults(state)
    sb = st_module.sidebar
    sb.title("Family Portfolio")

    # ── Initial balances ────────────────────────────────────────────────────
    sb.header("Initial Balances")
    sb.number_input("Base year", step=1, format="%d", key="base_year")
    for key, label in balance_input_fields():
        sb.number_input(f"{label} ($)", min_value=0.0, step=100.0, format="%.0f", key=key)

    # ── Annual contributions ────────────────────────────────────────────────
    sb.header("Annual Contributions")
    for key, label in contribution_input_fields():
        sb.number_input(f"{label} ($/yr)", min_value=0.0, step=500.0, format="%.0f", key=key)

    # ── Projection settings ─────────────────────────────────────────────────
    sb.header("Projection Settings")
    # Labels stay fixed across reruns; values are echoed in captions.
    sb.number_input("Monthly Expenses ($)", min_value=0.0, step=100.0, format="%.0f", key="monthly_expense")
    sb.caption(f"Annual: {format_currency(float(state.get('monthly_expense') or 0.0) * 12.0)}")

    lo, hi, step = GROWTH_SLIDER
    sb.slider("Annual Growth Rate (%)", min_value=lo, max_value=hi, step=step, key="growth_rate")
    _preset_row(st_module, "growth_rate", GROWTH_PRESETS)

    lo, hi, step = INFLATION_SLIDER
    sb.slider("Annual Inflation Rate (%)", min_value=lo, max_value=hi, step=step, key="inflation_rate")
    _preset_row(st_module, "inflation_rate", INFLATION_PRESETS)

    y_lo, y_hi, y_step = YEARS_SLIDER
    sb.slider("Years to Project", min_value=y_lo, max_value=y_hi, step=y_step, key="years")

    sb.header("Down Payment")
    sb.number_input("Down Payment Amount ($)", min_value=0.0, step=1000.0, format="%.0f", key="down_payment")
    sb.number_input("Down Payment Year", step=1, format="%d", key="down_payment_year")

    return config_from_state(state)
