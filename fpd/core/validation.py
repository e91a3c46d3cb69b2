"""Validation helpers for the Family Portfolio Dashboard.

The projection engine never rejects input: it only guards its own
divisions.  This module is the caller-side layer that catches values the
engine would happily accept but that probably do not mean what the user
intended.  None of the functions here raise; they either clamp (emitting a
``warnings.warn`` per adjustment) or accumulate human-readable messages.

Implemented checks:

* **Down payment never fires** – the withdrawal only runs inside the
  yearly loop, so a down payment year at or before the base year, or past
  the end of the horizon, silently does nothing.

* **Down payment shortfall** – the FHSA and RRSP together may hold less
  than the requested amount in the triggering year.  The unmet part is
  dropped by the engine; the user is told how much.

* **FHSA forfeiture** – when the down payment is smaller than the FHSA
  balance the leftover is discarded because the account is closed.

* **Zero expenses** – the runway metric is reported as 0 when there is no
  expense to cover.

* **Out-of-range rates** – growth and inflation outside the dashboard's
  slider ranges are allowed but flagged.
"""

from __future__ import annotations

import warnings as _warnings
from typing import List

from .config import ACCOUNT_LABELS, ACCOUNTS, CONTRIBUTING_ACCOUNTS, Configuration
from .engine import run_projection
from .formatting import format_currency

MAX_YEARS = 100

GROWTH_RANGE = (0.0, 20.0)
INFLATION_RANGE = (0.0, 10.0)


def get_validation_warnings(config: Configuration) -> List[str]:
    """Return a list of human-readable notices for a configuration.

    Args:
        config: The configuration to inspect.  It is not modified.

    Returns:
        A list of warning strings, empty when nothing looks off.
    """
    warnings: List[str] = []

    years = max(0, int(config.years))
    first_year = int(config.base_year) + 1
    last_year = int(config.base_year) + years
    dp_year = int(config.down_payment_year)

    if config.down_payment > 0.0:
        if dp_year <= int(config.base_year):
            warnings.append(
                f"Down payment year {dp_year} is not after the base year {config.base_year}; "
                "the withdrawal will not be applied."
            )
        elif dp_year > last_year:
            warnings.append(
                f"Down payment year {dp_year} is beyond the projection horizon "
                f"({first_year}–{last_year}); the withdrawal will not be applied."
            )

    result = run_projection(config)
    event = result.withdrawal
    if event is not None:
        if event.shortfall > 0.005:
            warnings.append(
                f"Down payment of ${event.requested:,.0f} in {event.year} exceeds the FHSA and RRSP balances; "
                f"${event.shortfall:,.0f} cannot be funded from these accounts."
            )
        if event.fhsa_forfeited > 0.005:
            warnings.append(
                f"${event.fhsa_forfeited:,.0f} left in the FHSA after the {event.year} down payment "
                "is dropped when the account is closed."
            )

    if config.monthly_expense <= 0.0:
        warnings.append("Monthly expenses are zero; years of expenses will be reported as 0.")

    lo, hi = GROWTH_RANGE
    if not (lo <= config.growth_rate <= hi):
        warnings.append(
            f"Growth rate of {config.growth_rate:.1f}% is outside the usual {lo:.0f}–{hi:.0f}% range."
        )
    lo, hi = INFLATION_RANGE
    if not (lo <= config.inflation_rate <= hi):
        warnings.append(
            f"Inflation rate of {config.inflation_rate:.1f}% is outside the usual {lo:.0f}–{hi:.0f}% range."
        )

    return warnings


# ---------------------------------------------------------------------------
# Clamping helpers
# ---------------------------------------------------------------------------

def clamp_rate(value: float, name: str, *, min_val: float = -100.0, max_val: float = 100.0) -> float:
    """Clamp an annual percentage rate, warning if adjusted. -100% is a total loss."""
    if value > max_val:
        _warnings.warn(f"{name} of {value:g}% is above the {max_val:g}% ceiling; projecting at {max_val:g}%.")
        return max_val
    if value < min_val:
        _warnings.warn(f"{name} of {value:g}% is below the {min_val:g}% floor; projecting at {min_val:g}%.")
        return min_val
    return value


def clamp_positive(value: float, name: str, *, max_val: float | None = None) -> float:
    """Floor a dollar amount at $0 (and optionally cap it), warning if adjusted."""
    if value < 0:
        _warnings.warn(f"{name} of {format_currency(value)} is negative; using $0.")
        return 0.0
    if max_val is not None and value > max_val:
        _warnings.warn(f"{name} of {format_currency(value)} exceeds {format_currency(max_val)}; using the cap.")
        return max_val
    return value


def clamp_years(value: int, *, max_years: int = MAX_YEARS) -> int:
    """Keep the horizon within ``[0, max_years]``, warning if adjusted."""
    if value < 0:
        _warnings.warn(f"Projection horizon of {value} years is negative; projecting the starting balances only.")
        return 0
    if value > max_years:
        _warnings.warn(f"Projection horizon of {value} years exceeds the {max_years}-year limit; projecting {max_years} years.")
        return max_years
    return value


def sanitize_config(config: Configuration) -> Configuration:
    """Return a copy of ``config`` with out-of-domain values clamped.

    Balances, contributions, expenses and the down payment are floored at 0;
    the horizon is kept within ``[0, MAX_YEARS]``; rates stay within
    ±100%.  Each adjustment emits a warning.
    """
    changes: dict = {}
    for a in ACCOUNTS:
        changes[a] = clamp_positive(float(getattr(config, a)), f"{ACCOUNT_LABELS[a]} balance")
    for a in CONTRIBUTING_ACCOUNTS:
        key = f"{a}_contrib"
        changes[key] = clamp_positive(float(getattr(config, key)), f"{ACCOUNT_LABELS[a]} contribution")
    changes["monthly_expense"] = clamp_positive(float(config.monthly_expense), "Monthly expense")
    changes["down_payment"] = clamp_positive(float(config.down_payment), "Down payment")
    changes["growth_rate"] = clamp_rate(float(config.growth_rate), "Growth rate")
    changes["inflation_rate"] = clamp_rate(float(config.inflation_rate), "Inflation rate")
    changes["years"] = clamp_years(int(config.years))
    return config.with_overrides(**changes)
