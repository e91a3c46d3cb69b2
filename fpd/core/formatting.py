"""Display formatting for currency, percentages and runway figures.

Amounts are Canadian dollars shown without cents.  These helpers have no
Streamlit dependency so the CLI and tests can share them.
"""

from __future__ import annotations

import math
from typing import Any

import pandas as pd

from .config import ACCOUNT_LABELS, ACCOUNTS

MISSING = "—"

CURRENCY_COLUMNS = [
    *[ACCOUNT_LABELS[a] for a in ACCOUNTS],
    "Total",
    "Investment Returns",
    "Adjusted Annual Expense",
]


def _finite(val: Any) -> float | None:
    if val is None or isinstance(val, bool):
        return None
    try:
        x = float(val)
    except (TypeError, ValueError):
        return None
    return x if math.isfinite(x) else None


def format_currency(val: Any) -> str:
    """``71000`` -> ``"$71,000"``; negatives as ``"-$1,200"``."""
    x = _finite(val)
    if x is None:
        return MISSING
    whole = math.floor(abs(x) + 0.5)
    if whole == 0:
        return "$0"
    sign = "-" if x < 0 else ""
    return f"{sign}${whole:,.0f}"


def format_axis_k(val: Any) -> str:
    """Compact axis tick, e.g. ``"$71k"``."""
    x = _finite(val)
    if x is None:
        return MISSING
    return f"${x / 1000:.0f}k"


def format_pct(val: Any, decimals: int = 2) -> str:
    x = _finite(val)
    if x is None:
        return MISSING
    return f"{x:.{decimals}f}%"


def format_years(val: Any) -> str:
    x = _finite(val)
    if x is None:
        return MISSING
    return f"{x:.1f} yrs"


def display_frame(df: pd.DataFrame) -> pd.DataFrame:
    """Copy of a projection frame with money and ROI columns as text."""
    out = df.copy()
    for col in CURRENCY_COLUMNS:
        if col in out.columns:
            out[col] = out[col].map(format_currency)
    if "ROI %" in out.columns:
        out["ROI %"] = out["ROI %"].map(format_pct)
    if "Years of Expenses" in out.columns:
        out["Years of Expenses"] = out["Years of Expenses"].map(lambda v: f"{float(v):.1f}")
    if "Year" in out.columns:
        out["Year"] = out["Year"].astype(int).astype(str)
    return out
