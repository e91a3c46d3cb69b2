#!/usr/bin/env python3
"""Run the portfolio QA gates (smoke + truth tables + golden).

Usage:
  python run_all_qa.py
  python run_all_qa.py --only smoke,golden
  python run_all_qa.py --skip truth_tables
  python run_all_qa.py --list

Exit codes:
  0 = all selected suites passed
  1 = at least one selected suite failed
"""

from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

# Suite name -> module exposing main(argv).  Order is run order.
SUITES = {
    "smoke": "fpd.qa.smoke_check",
    "truth_tables": "fpd.qa.qa_truth_tables",
    "golden": "fpd.qa.qa_golden",
}


def _ensure_repo_root_on_syspath() -> Path:
    repo_root = Path(__file__).resolve().parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))
    return repo_root


def _exit_code(exc: SystemExit) -> int:
    if exc.code is None:
        return 0
    if isinstance(exc.code, int):
        return exc.code
    # SystemExit("message") prints the message and means failure.
    return 1


def _run_suite(name: str) -> int:
    """Run a suite by name. Returns exit code."""
    module = importlib.import_module(SUITES[name])
    try:
        module.main([])  # keep run_all_qa flags away from the suite's argparser
    except SystemExit as e:
        return _exit_code(e)
    except Exception as e:
        print(f"\n[RUN_ALL_QA] Unhandled exception in '{name}': {e!r}\n")
        return 1
    return 0


def _split(raw: str) -> set[str]:
    return {x.strip() for x in raw.split(",") if x.strip()}


def _select(only: str, skip: str) -> list[str]:
    """Resolve --only/--skip into an ordered suite list; unknown names raise ValueError."""
    requested = _split(only) or set(SUITES)
    skipped = _split(skip)
    unknown = sorted((requested | skipped).difference(SUITES))
    if unknown:
        raise ValueError(f"Unknown suite(s): {unknown}")
    return [s for s in SUITES if s in requested and s not in skipped]


def main(argv: list[str] | None = None) -> int:
    _ensure_repo_root_on_syspath()

    ap = argparse.ArgumentParser(add_help=True)
    ap.add_argument("--list", action="store_true", help="List available suites and exit.")
    ap.add_argument("--only", type=str, default="", help="Comma-separated suites to run (subset).")
    ap.add_argument("--skip", type=str, default="", help="Comma-separated suites to skip.")
    args = ap.parse_args(argv)

    if args.list:
        print("Available suites:")
        for s in SUITES:
            print(f" - {s}")
        return 0

    try:
        ordered = _select(args.only, args.skip)
    except ValueError as e:
        print(f"[RUN_ALL_QA] {e}")
        return 1

    if not ordered:
        print("[RUN_ALL_QA] Nothing to run (selection is empty).")
        return 0

    print("\n[RUN_ALL_QA] Running suites:", ", ".join(ordered), "\n")

    failures: list[tuple[str, int]] = []
    for s in ordered:
        print(f"--- {s.upper()} ---")
        code = _run_suite(s)
        status = "passed" if code == 0 else f"failed with exit code {code}"
        print(f"[RUN_ALL_QA] Suite '{s}' {status}.\n")
        if code != 0:
            failures.append((s, code))

    if failures:
        print("=== RUN_ALL_QA FAILED ===")
        for s, code in failures:
            print(f" - {s}: exit code {code}")
        return 1

    print("=== RUN_ALL_QA PASS ===\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
