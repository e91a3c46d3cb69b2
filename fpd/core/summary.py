"""Headline metrics for the dashboard summary cards.

These are derived from an already-computed projection; nothing here re-runs
the simulation.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Sequence

import numpy as np
import pandas as pd

from .config import Configuration
from .engine import YearRow


@dataclass(frozen=True)
class PortfolioSummary:
    current_total: int
    projected_total: int
    total_growth: int
    total_returns: int
    total_contributions: float
    final_annual_expense: float
    final_years_of_expenses: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def summarize(config: Configuration, rows: Sequence[YearRow]) -> PortfolioSummary:
    """Summarize a projection for the headline cards.

    Contributions are the five annual amounts times the horizon; they are
    not reduced by the down payment.  The runway figure is left unrounded
    (the card formats it) and is 0 when the final expense is not positive.
    """
    if rows:
        current_total = int(rows[0].total)
        projected_total = int(rows[-1].total)
        final_expense = float(rows[-1].adjusted_annual_expense)
    else:
        current_total = projected_total = 0
        final_expense = float(config.monthly_expense) * 12.0

    returns = np.array([r.investment_returns for r in rows[1:]], dtype=float)
    total_returns = int(returns.sum()) if returns.size else 0

    years = max(0, int(config.years))
    total_contributions = config.annual_contribution_total() * years

    runway = projected_total / final_expense if final_expense > 0.0 else 0.0
    if not np.isfinite(runway):
        runway = 0.0

    return PortfolioSummary(
        current_total=current_total,
        projected_total=projected_total,
        total_growth=projected_total - current_total,
        total_returns=total_returns,
        total_contributions=float(total_contributions),
        final_annual_expense=final_expense,
        final_years_of_expenses=float(runway),
    )


_SUMMARY_LABELS = [
    ("current_total", "Current Total"),
    ("projected_total", "Projected Total"),
    ("total_growth", "Total Growth"),
    ("total_returns", "Total Returns"),
    ("total_contributions", "Contributions"),
    ("final_annual_expense", "Final Annual Expense"),
    ("final_years_of_expenses", "Years of Expenses"),
]


def summary_frame(summary: PortfolioSummary) -> pd.DataFrame:
    """Two-column Metric/Value frame for display or export."""
    data = summary.to_dict()
    return pd.DataFrame(
        [{"Metric": label, "Value": data[key]} for key, label in _SUMMARY_LABELS],
        columns=["Metric", "Value"],
    )
