#!/usr/bin/env python3
"""Quick smoke checks for the Family Portfolio Dashboard.

Run:
  python -m fpd.qa.smoke_check
"""

from __future__ import annotations
import sys
from pathlib import Path

# Ensure repo root is on sys.path regardless of where this script is invoked from.
_REPO_ROOT = Path(__file__).resolve().parents[2]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

import os
import compileall


def die(msg: str, code: int = 1) -> None:
    print(f"\n[SMOKE CHECK FAILED] {msg}\n")
    raise SystemExit(code)


def main(argv: list[str] | None = None) -> None:
    # Use repo root (two levels above fpd/qa/) so paths resolve consistently.
    root = str(Path(__file__).resolve().parents[2])

    app_py = os.path.join(root, "app.py")
    pkg_dir = os.path.join(root, "fpd")

    if not os.path.exists(app_py):
        die("app.py not found (run from the repo root).")

    ok_app = compileall.compile_file(app_py, quiet=1)
    ok_pkg = compileall.compile_dir(pkg_dir, quiet=1)
    if not ok_app:
        die("app.py failed to compile.")
    if not ok_pkg:
        die("fpd/ package failed to compile.")

    try:
        from fpd.core.config import Configuration
        from fpd.core.engine import projection_frame, run_projection
        from fpd.core.summary import summarize
        from fpd.ui.charts import build_composition_figure
    except ImportError as e:
        die(f"Import failure: {e}")

    config = Configuration()
    result = run_projection(config)
    rows = result.rows

    if len(rows) != config.years + 1:
        die(f"Expected {config.years + 1} rows, got {len(rows)}.")
    if result.withdrawal is None:
        die("Default down payment did not fire.")

    df = projection_frame(rows)
    if list(df["Year"]) != list(range(config.base_year, config.base_year + config.years + 1)):
        die("Projection years are not consecutive.")

    summary = summarize(config, rows)
    fig = build_composition_figure(rows)
    if len(fig.data) != 6:
        die(f"Composition chart has {len(fig.data)} traces, expected 6.")

    print("\n[SMOKE CHECK OK]")
    print(f"Rows: {len(rows)}")
    print(f"Projected total: ${summary.projected_total:,}")
    print(f"Years of expenses: {summary.final_years_of_expenses:.1f}\n")


if __name__ == "__main__":
    main()
