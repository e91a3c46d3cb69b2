"""Display formatting helpers."""

from __future__ import annotations

import math

from fpd.core.config import Configuration
from fpd.core.engine import project, projection_frame
from fpd.core.formatting import (
    MISSING,
    display_frame,
    format_axis_k,
    format_currency,
    format_pct,
    format_years,
)


def test_format_currency() -> None:
    assert format_currency(71000) == "$71,000"
    assert format_currency(1234567.4) == "$1,234,567"
    assert format_currency(0.4) == "$0"
    assert format_currency(-1200) == "-$1,200"
    assert format_currency(-0.2) == "$0"


def test_format_currency_missing() -> None:
    assert format_currency(None) == MISSING
    assert format_currency(math.nan) == MISSING
    assert format_currency("abc") == MISSING
    assert format_currency(True) == MISSING


def test_format_axis_k() -> None:
    assert format_axis_k(71000) == "$71k"
    assert format_axis_k(0) == "$0k"


def test_format_pct_and_years() -> None:
    assert format_pct(7) == "7.00%"
    assert format_pct(12.345, decimals=1) == "12.3%"
    assert format_years(3.34) == "3.3 yrs"
    assert format_years(None) == MISSING


def test_display_frame() -> None:
    df = projection_frame(project(Configuration(years=1)))
    out = display_frame(df)
    assert out.loc[0, "Total"] == "$200,878"
    assert out.loc[0, "Year"] == "2025"
    assert out.loc[1, "ROI %"] == "7.00%"
    assert out.loc[0, "Years of Expenses"] == "3.3"
    # Source frame is untouched.
    assert df.loc[0, "Total"] == 200878
