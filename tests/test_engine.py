"""Engine invariants for the year-by-year portfolio projection."""

from __future__ import annotations

import pytest

from fpd.core.config import ACCOUNTS, Configuration
from fpd.core.engine import FRAME_COLUMNS, _round_to, project, projection_frame, run_projection

_ZERO = dict(
    tfsa=0.0, partner_tfsa=0.0, rrsp=0.0, fhsa=0.0, non_registered=0.0, crypto=0.0,
    tfsa_contrib=0.0, partner_tfsa_contrib=0.0, rrsp_contrib=0.0,
    non_registered_contrib=0.0, crypto_contrib=0.0,
)


def _cfg(**kw) -> Configuration:
    base = dict(_ZERO, growth_rate=0.0, inflation_rate=0.0, monthly_expense=1000.0,
                down_payment=0.0, down_payment_year=2100, base_year=2025, years=1)
    base.update(kw)
    return Configuration(**base)


def test_row_count_and_consecutive_years() -> None:
    cfg = Configuration(years=10)
    rows = project(cfg)
    assert len(rows) == 11
    assert [r.year for r in rows] == list(range(2025, 2036))


@pytest.mark.parametrize("years", [0, -1, -10])
def test_non_positive_horizon_returns_snapshot_only(years: int) -> None:
    rows = project(Configuration(years=years))
    assert len(rows) == 1
    assert rows[0].year == 2025


def test_starting_snapshot_matches_inputs() -> None:
    row = project(Configuration())[0]
    assert row.balances() == {
        "tfsa": 71000, "partner_tfsa": 0, "rrsp": 71804,
        "fhsa": 37318, "non_registered": 20202, "crypto": 554,
    }
    assert row.total == 200878
    assert row.investment_returns == 0
    assert row.roi_percent == 0.0
    assert row.adjusted_annual_expense == 60000
    assert row.years_of_expenses == 3.3


def test_contribution_added_after_growth() -> None:
    rows = project(_cfg(rrsp_contrib=10000.0, growth_rate=10.0, years=2))
    assert rows[1].total == 10000
    assert rows[1].investment_returns == 0
    assert rows[1].roi_percent == 0.0
    assert rows[2].total == 21000
    assert rows[2].investment_returns == 1000
    assert rows[2].roi_percent == 10.0


def test_fhsa_receives_no_contribution() -> None:
    rows = project(_cfg(fhsa=1000.0, tfsa_contrib=500.0, years=3))
    assert [r.fhsa for r in rows] == [1000, 1000, 1000, 1000]
    assert [r.tfsa for r in rows] == [0, 500, 1000, 1500]


def test_total_is_sum_of_buckets_within_rounding() -> None:
    for row in project(Configuration(years=15)):
        assert abs(sum(row.balances().values()) - row.total) <= len(ACCOUNTS)


def test_roi_matches_growth_rate_when_previous_total_positive() -> None:
    rows = project(Configuration(growth_rate=6.5, years=5))
    for row in rows[1:]:
        assert row.roi_percent == pytest.approx(6.5, abs=0.01)


@pytest.mark.parametrize("account", ["tfsa", "rrsp", "fhsa", "crypto"])
@pytest.mark.parametrize("growth", [7.5, 0.5, -3.0])
def test_growth_only_compounds_single_bucket(account: str, growth: float) -> None:
    cfg = _cfg(**{account: 12345.0}, growth_rate=growth, years=30, down_payment_year=2100)
    rows = project(cfg)
    factor = 1.0 + growth / 100.0
    for i, row in enumerate(rows):
        assert abs(getattr(row, account) - 12345.0 * factor**i) <= 0.5 + 1e-6
        assert row.total == getattr(row, account)


def test_zero_growth_means_zero_returns() -> None:
    rows = project(Configuration(growth_rate=0.0, years=4))
    assert all(r.investment_returns == 0 for r in rows)
    assert all(r.roi_percent == 0.0 for r in rows)


def test_negative_growth_gives_negative_returns() -> None:
    rows = project(_cfg(tfsa=10000.0, growth_rate=-10.0, years=1))
    assert rows[1].tfsa == 9000
    assert rows[1].investment_returns == -1000
    assert rows[1].roi_percent == -10.0


def test_expense_compounds_from_first_projected_year() -> None:
    rows = project(_cfg(monthly_expense=1000.0, inflation_rate=10.0, years=3))
    assert [r.adjusted_annual_expense for r in rows] == [12000, 13200, 14520, 15972]


def test_zero_expense_gives_zero_runway() -> None:
    rows = project(_cfg(tfsa=5000.0, monthly_expense=0.0, years=2))
    assert all(r.years_of_expenses == 0.0 for r in rows)


def test_rounding_applies_to_output_only() -> None:
    rows = project(_cfg(tfsa=0.4, tfsa_contrib=0.4, years=3))
    assert [r.tfsa for r in rows] == [0, 1, 1, 2]


def test_half_dollars_round_up() -> None:
    rows = project(_cfg(tfsa=2.5, crypto=0.5, years=0))
    assert rows[0].tfsa == 3
    assert rows[0].crypto == 1
    assert rows[0].total == 3


def test_default_first_year_values() -> None:
    row = project(Configuration())[1]
    assert row.year == 2026
    assert row.fhsa == 0
    assert row.rrsp == 34761
    assert row.tfsa == 82970
    assert row.partner_tfsa == 7000
    assert row.total == 146939
    assert row.investment_returns == 14061
    assert row.roi_percent == 7.0
    assert row.adjusted_annual_expense == 61800
    assert row.years_of_expenses == 2.4


def test_projection_is_deterministic() -> None:
    cfg = Configuration(years=20, growth_rate=8.25, inflation_rate=2.75)
    assert project(cfg) == project(cfg)


def test_run_projection_keeps_config() -> None:
    cfg = Configuration(years=3)
    assert run_projection(cfg).config is cfg


def test_projection_frame_columns_and_values() -> None:
    rows = project(Configuration(years=2))
    df = projection_frame(rows)
    assert list(df.columns) == FRAME_COLUMNS
    assert len(df) == 3
    assert df["Year"].tolist() == [2025, 2026, 2027]
    assert df["My FHSA"].tolist()[1:] == [0, 0]
    assert df.loc[0, "Total"] == 200878


def test_projection_frame_empty() -> None:
    df = projection_frame([])
    assert df.empty
    assert list(df.columns) == FRAME_COLUMNS


def test_runway_ties_round_away_from_zero() -> None:
    # 3000 / 12000 is exactly 0.25.
    row = project(_cfg(tfsa=3000.0, years=0))[0]
    assert row.years_of_expenses == 0.3


@pytest.mark.parametrize(
    "value, digits, expected",
    [
        (0.25, 1, 0.3),
        (0.125, 2, 0.13),
        (-0.125, 2, -0.13),
        (1.75, 1, 1.8),
        # 2.675 is stored just below the tie.
        (2.675, 2, 2.67),
        (-0.04, 1, 0.0),
        (1e30, 1, 1e30),
    ],
)
def test_round_to(value: float, digits: int, expected: float) -> None:
    got = _round_to(value, digits)
    assert got == expected
    assert str(got) != "-0.0"
