#!/usr/bin/env python3
"""Truth-table QA: small, exact, model-level invariants.

These checks are intentionally numeric and explicit. They exist to prove that:
- A zero horizon yields only the starting snapshot.
- The down payment drains the FHSA before the RRSP and closes the FHSA.
- ROI and runway are 0 rather than undefined when their denominators are not positive.
- Contributions are added after growth, so they earn nothing in their first year.

Run:
  python -m fpd.qa.qa_truth_tables
"""

from __future__ import annotations

import math
import sys
from pathlib import Path


# Ensure repo root is on sys.path regardless of where this script is invoked from.
_REPO_ROOT = Path(__file__).resolve().parents[2]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))


def _die(msg: str, code: int = 1) -> None:
    print(f"\n[TRUTH TABLES FAILED] {msg}\n")
    raise SystemExit(code)


def _assert_close(name: str, got: float, exp: float, *, atol: float = 1e-9) -> None:
    g = float(got)
    e = float(exp)
    if not (math.isfinite(g) and math.isfinite(e)):
        _die(f"{name}: non-finite (got={g}, exp={e})")
    if abs(g - e) > atol:
        _die(f"{name}: got {g:.12g} expected {e:.12g} (atol={atol})")


def _base_cfg(**overrides):
    from fpd.core.config import Configuration

    zero = dict(
        tfsa=0.0, partner_tfsa=0.0, rrsp=0.0, fhsa=0.0, non_registered=0.0, crypto=0.0,
        tfsa_contrib=0.0, partner_tfsa_contrib=0.0, rrsp_contrib=0.0,
        non_registered_contrib=0.0, crypto_contrib=0.0,
        growth_rate=0.0, inflation_rate=0.0, monthly_expense=1000.0,
        down_payment=0.0, down_payment_year=2100, base_year=2025, years=1,
    )
    zero.update(overrides)
    return Configuration(**zero)


def _tt_zero_horizon() -> None:
    from fpd.core.engine import run_projection

    cfg = _base_cfg(years=0, tfsa=6000.0, down_payment=1000.0, down_payment_year=2025, fhsa=5000.0)
    result = run_projection(cfg)
    if len(result.rows) != 1:
        _die(f"TT-H1: zero horizon returned {len(result.rows)} rows")
    row = result.rows[0]
    if row.year != 2025 or row.total != 11000:
        _die(f"TT-H1: unexpected snapshot {row}")
    _assert_close("TT-H1 runway", row.years_of_expenses, 0.9, atol=1e-12)
    if result.withdrawal is not None:
        _die("TT-H1: down payment fired in the starting snapshot")

    neg = run_projection(_base_cfg(years=-3))
    if len(neg.rows) != 1:
        _die("TT-H2: negative horizon should behave like zero")


def _tt_withdrawal_priority() -> None:
    from fpd.core.engine import run_projection

    cfg = _base_cfg(fhsa=5000.0, rrsp=3000.0, down_payment=6000.0, down_payment_year=2026)
    result = run_projection(cfg)
    row = result.rows[1]
    if (row.fhsa, row.rrsp, row.total) != (0, 2000, 2000):
        _die(f"TT-W1: FHSA-then-RRSP order broken: fhsa={row.fhsa} rrsp={row.rrsp} total={row.total}")
    w = result.withdrawal
    _assert_close("TT-W1 from_fhsa", w.from_fhsa, 5000.0)
    _assert_close("TT-W1 from_rrsp", w.from_rrsp, 1000.0)
    _assert_close("TT-W1 shortfall", w.shortfall, 0.0)

    # Down payment smaller than the FHSA: leftover is forfeited, RRSP untouched.
    cfg = _base_cfg(fhsa=50000.0, rrsp=10000.0, down_payment=20000.0, down_payment_year=2026)
    result = run_projection(cfg)
    row = result.rows[1]
    if (row.fhsa, row.rrsp) != (0, 10000):
        _die(f"TT-W2: FHSA not closed or RRSP touched: fhsa={row.fhsa} rrsp={row.rrsp}")
    _assert_close("TT-W2 forfeited", result.withdrawal.fhsa_forfeited, 30000.0)

    # Shortfall is dropped, not carried.
    cfg = _base_cfg(fhsa=1000.0, rrsp=2000.0, tfsa=500.0, down_payment=5000.0, down_payment_year=2026, years=2)
    result = run_projection(cfg)
    if [r.total for r in result.rows] != [3500, 500, 500]:
        _die(f"TT-W3: shortfall leaked into later years: {[r.total for r in result.rows]}")
    _assert_close("TT-W3 shortfall", result.withdrawal.shortfall, 2000.0)


def _tt_denominator_guards() -> None:
    from fpd.core.engine import run_projection

    # Empty portfolio with contributions: previous total is 0 in year 1.
    result = run_projection(_base_cfg(growth_rate=10.0, rrsp_contrib=10000.0, years=2))
    r1, r2 = result.rows[1], result.rows[2]
    _assert_close("TT-G1 roi year1", r1.roi_percent, 0.0)
    _assert_close("TT-G1 roi year2", r2.roi_percent, 10.0, atol=1e-12)
    if (r1.total, r2.total, r2.investment_returns) != (10000, 21000, 1000):
        _die(f"TT-G1: contribution timing broken: {r1.total}, {r2.total}, {r2.investment_returns}")

    # Zero expense: runway reported as 0 everywhere.
    result = run_projection(_base_cfg(tfsa=1000.0, monthly_expense=0.0, years=3))
    if any(r.years_of_expenses != 0.0 for r in result.rows):
        _die("TT-G2: runway should be 0 when expenses are 0")


def _tt_rounding_is_output_only() -> None:
    from fpd.core.engine import run_projection

    # 0.4 per year would vanish if the running balance were rounded each period.
    result = run_projection(_base_cfg(tfsa=0.4, tfsa_contrib=0.4, years=3))
    if [r.tfsa for r in result.rows] != [0, 1, 1, 2]:
        _die(f"TT-R1: running state appears to be rounded: {[r.tfsa for r in result.rows]}")


def main(argv: list[str] | None = None) -> None:
    _tt_zero_horizon()
    _tt_withdrawal_priority()
    _tt_denominator_guards()
    _tt_rounding_is_output_only()

    print("\n[TRUTH TABLES OK]\n")


if __name__ == "__main__":
    main()
