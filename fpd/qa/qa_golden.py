#!/usr/bin/env python3
"""Golden regression snapshots for the portfolio projection engine.

Purpose
- Catch unintended model/output drift via a small set of canonical scenarios.
- These are not unit tests for every formula; they are end-to-end sanity anchors.

Run
  python -m fpd.qa.qa_golden
  python run_all_qa.py --only golden

Notes
- Values are asserted per row within tolerances (currency ±1, ROI ±0.01,
  runway ±0.05) so half-dollar float noise does not cause false failures.
- If you intentionally change core math/assumptions, re-baseline by running:
      python -m fpd.qa.qa_golden --print-baseline
  and then copy the printed dict into _EXPECTED.
"""

from __future__ import annotations

import argparse
import pprint
import sys
from pathlib import Path
from typing import Any, Dict, List

# Ensure repo root is on sys.path regardless of where this script is invoked from.
_REPO_ROOT = Path(__file__).resolve().parents[2]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

from fpd.core.config import Configuration
from fpd.core.engine import run_projection

_ZERO = dict(
    tfsa=0.0, partner_tfsa=0.0, rrsp=0.0, fhsa=0.0, non_registered=0.0, crypto=0.0,
    tfsa_contrib=0.0, partner_tfsa_contrib=0.0, rrsp_contrib=0.0,
    non_registered_contrib=0.0, crypto_contrib=0.0,
)

_SCENARIOS: Dict[str, Configuration] = {
    # Dashboard defaults, first three rows.
    "defaults": Configuration(years=2),
    "contribution_only": Configuration(
        **{**_ZERO, "rrsp_contrib": 10000.0},
        growth_rate=10.0, inflation_rate=0.0, years=2, monthly_expense=1000.0,
        down_payment=0.0, down_payment_year=2100,
    ),
    "down_payment_partial_rrsp": Configuration(
        **{**_ZERO, "tfsa": 20000.0, "rrsp": 50000.0, "fhsa": 10000.0,
           "tfsa_contrib": 1000.0, "rrsp_contrib": 2000.0},
        growth_rate=5.0, inflation_rate=2.0, years=3, monthly_expense=2000.0,
        down_payment=30000.0, down_payment_year=2027,
    ),
    "down_payment_shortfall": Configuration(
        **{**_ZERO, "tfsa": 10000.0, "rrsp": 2000.0, "fhsa": 1000.0},
        growth_rate=0.0, inflation_rate=0.0, years=1, monthly_expense=1000.0,
        down_payment=5000.0, down_payment_year=2026,
    ),
}

_FIELDS = (
    "year", "tfsa", "partner_tfsa", "rrsp", "fhsa", "non_registered", "crypto",
    "total", "investment_returns", "roi_percent", "adjusted_annual_expense", "years_of_expenses",
)

# Row tuples follow _FIELDS.
_EXPECTED: Dict[str, Dict[str, Any]] = {
    "defaults": {
        "rows": [
            (2025, 71000, 0, 71804, 37318, 20202, 554, 200878, 0, 0.0, 60000, 3.3),
            (2026, 82970, 7000, 34761, 0, 21616, 593, 146939, 14061, 7.0, 61800, 2.4),
            (2027, 95778, 14490, 55194, 0, 23129, 634, 189225, 10286, 7.0, 63654, 3.0),
        ],
        "withdrawal": {"year": 2026, "from_fhsa": 39930.26, "from_rrsp": 60069.74, "shortfall": 0.0},
    },
    "contribution_only": {
        "rows": [
            (2025, 0, 0, 0, 0, 0, 0, 0, 0, 0.0, 12000, 0.0),
            (2026, 0, 0, 10000, 0, 0, 0, 10000, 0, 0.0, 12000, 0.8),
            (2027, 0, 0, 21000, 0, 0, 0, 21000, 1000, 10.0, 12000, 1.8),
        ],
        "withdrawal": None,
    },
    "down_payment_partial_rrsp": {
        "rows": [
            (2025, 20000, 0, 50000, 10000, 0, 0, 80000, 0, 0.0, 24000, 3.3),
            (2026, 22000, 0, 54500, 10500, 0, 0, 87000, 4000, 5.0, 24480, 3.6),
            (2027, 24100, 0, 40250, 0, 0, 0, 64350, 4350, 5.0, 24970, 2.6),
            (2028, 26305, 0, 44263, 0, 0, 0, 70568, 3218, 5.0, 25469, 2.8),
        ],
        "withdrawal": {"year": 2027, "from_fhsa": 11025.0, "from_rrsp": 18975.0, "shortfall": 0.0},
    },
    "down_payment_shortfall": {
        "rows": [
            (2025, 10000, 0, 2000, 1000, 0, 0, 13000, 0, 0.0, 12000, 1.1),
            (2026, 10000, 0, 0, 0, 0, 0, 10000, 0, 0.0, 12000, 0.8),
        ],
        "withdrawal": {"year": 2026, "from_fhsa": 1000.0, "from_rrsp": 2000.0, "shortfall": 2000.0},
    },
}

_TOL = {"roi_percent": 0.01, "years_of_expenses": 0.05}
_CURRENCY_TOL = 1.0


def _actual(name: str) -> Dict[str, Any]:
    result = run_projection(_SCENARIOS[name])
    rows = [tuple(getattr(r, f) for f in _FIELDS) for r in result.rows]
    w = result.withdrawal
    withdrawal = None
    if w is not None:
        withdrawal = {"year": w.year, "from_fhsa": w.from_fhsa, "from_rrsp": w.from_rrsp, "shortfall": w.shortfall}
    return {"rows": rows, "withdrawal": withdrawal}


def _compare(name: str, expected: Dict[str, Any], actual: Dict[str, Any]) -> List[str]:
    errors: List[str] = []
    exp_rows, act_rows = expected["rows"], actual["rows"]
    if len(exp_rows) != len(act_rows):
        return [f"{name}: expected {len(exp_rows)} rows, got {len(act_rows)}"]
    for exp, act in zip(exp_rows, act_rows):
        for field, e, a in zip(_FIELDS, exp, act):
            if field == "year":
                ok = e == a
            else:
                ok = abs(float(a) - float(e)) <= _TOL.get(field, _CURRENCY_TOL)
            if not ok:
                errors.append(f"{name} {exp[0]} {field}: expected {e}, got {a}")

    exp_w, act_w = expected["withdrawal"], actual["withdrawal"]
    if (exp_w is None) != (act_w is None):
        errors.append(f"{name}: withdrawal expected {exp_w}, got {act_w}")
    elif exp_w is not None:
        for key, e in exp_w.items():
            a = act_w[key]
            if abs(float(a) - float(e)) > 0.01:
                errors.append(f"{name} withdrawal {key}: expected {e}, got {a}")
    return errors


def main(argv: list[str] | None = None) -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--print-baseline", action="store_true", help="Print current outputs as a baseline dict.")
    args = ap.parse_args(argv)

    if args.print_baseline:
        pprint.pprint({name: _actual(name) for name in _SCENARIOS}, width=120)
        return

    errors: List[str] = []
    for name, expected in _EXPECTED.items():
        errors.extend(_compare(name, expected, _actual(name)))

    if errors:
        print("\n[QA GOLDEN FAILED]")
        for e in errors:
            print(f" - {e}")
        raise SystemExit(1)

    print(f"[QA GOLDEN OK] {len(_EXPECTED)} scenarios")


if __name__ == "__main__":
    main()
