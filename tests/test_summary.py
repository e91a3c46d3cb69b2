"""Headline summary metrics."""

from __future__ import annotations

import pytest

from fpd.core.config import Configuration
from fpd.core.engine import project
from fpd.core.summary import summarize, summary_frame


def test_summary_defaults() -> None:
    cfg = Configuration()
    rows = project(cfg)
    s = summarize(cfg, rows)
    assert s.current_total == 200878
    assert s.projected_total == rows[-1].total
    assert s.total_growth == s.projected_total - s.current_total
    assert s.total_returns == sum(r.investment_returns for r in rows[1:])
    # 32,000 a year over ten years; the down payment does not reduce it.
    assert s.total_contributions == 320000.0
    assert s.final_annual_expense == float(rows[-1].adjusted_annual_expense)
    assert s.final_years_of_expenses == pytest.approx(rows[-1].total / rows[-1].adjusted_annual_expense)


def test_summary_zero_horizon() -> None:
    cfg = Configuration(years=0)
    s = summarize(cfg, project(cfg))
    assert s.projected_total == s.current_total
    assert s.total_growth == 0
    assert s.total_returns == 0
    assert s.total_contributions == 0.0


def test_summary_negative_horizon_has_no_contributions() -> None:
    cfg = Configuration(years=-4)
    assert summarize(cfg, project(cfg)).total_contributions == 0.0


def test_summary_zero_expense_runway() -> None:
    cfg = Configuration(monthly_expense=0.0, years=3)
    assert summarize(cfg, project(cfg)).final_years_of_expenses == 0.0


def test_summary_empty_rows() -> None:
    s = summarize(Configuration(), [])
    assert s.current_total == 0
    assert s.projected_total == 0
    assert s.total_returns == 0
    assert s.final_annual_expense == 60000.0


def test_summary_frame() -> None:
    cfg = Configuration(years=2)
    df = summary_frame(summarize(cfg, project(cfg)))
    assert list(df.columns) == ["Metric", "Value"]
    assert df["Metric"].tolist()[0] == "Current Total"
    assert len(df) == 7
