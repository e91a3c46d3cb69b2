import math
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Dict, List, Optional

import pandas as pd

from .config import (
    ACCOUNT_LABELS,
    ACCOUNTS,
    HOME_SAVINGS_ACCOUNT,
    RETIREMENT_ACCOUNT,
    Configuration,
)


FRAME_COLUMNS = [
    "Year",
    *[ACCOUNT_LABELS[a] for a in ACCOUNTS],
    "Total",
    "Investment Returns",
    "ROI %",
    "Adjusted Annual Expense",
    "Years of Expenses",
]


def _round_currency(x: float) -> int:
    """Nearest whole dollar; halves go up (toward +inf)."""
    return int(math.floor(float(x) + 0.5))


# Wide enough for any finite float.
_ROUNDING = Context(prec=400, rounding=ROUND_HALF_UP)


def _round_to(x: float, digits: int) -> float:
    """Round the exact binary value, ties away from zero."""
    x = float(x)
    if not math.isfinite(x):
        return x
    v = float(Decimal(x).quantize(Decimal(1).scaleb(-digits), context=_ROUNDING))
    # Collapse -0.0 so identical scenarios print identically.
    return v + 0.0


def _safe_ratio(numerator: float, denominator: float) -> float:
    if numerator > 0.0 and denominator > 0.0:
        return numerator / denominator
    return 0.0


@dataclass(frozen=True)
class YearRow:
    year: int
    tfsa: int
    partner_tfsa: int
    rrsp: int
    fhsa: int
    non_registered: int
    crypto: int
    total: int
    investment_returns: int
    roi_percent: float
    adjusted_annual_expense: int
    years_of_expenses: float

    def balances(self) -> Dict[str, int]:
        return {a: getattr(self, a) for a in ACCOUNTS}

    def to_dict(self) -> Dict[str, float]:
        """Row keyed by the display column names used in tables and CSV."""
        out: Dict[str, float] = {"Year": self.year}
        for a in ACCOUNTS:
            out[ACCOUNT_LABELS[a]] = getattr(self, a)
        out["Total"] = self.total
        out["Investment Returns"] = self.investment_returns
        out["ROI %"] = self.roi_percent
        out["Adjusted Annual Expense"] = self.adjusted_annual_expense
        out["Years of Expenses"] = self.years_of_expenses
        return out


@dataclass(frozen=True)
class DownPaymentWithdrawal:
    """What the one-time down payment actually drew, in unrounded dollars."""

    year: int
    requested: float
    from_fhsa: float
    from_rrsp: float
    shortfall: float
    fhsa_forfeited: float

    @property
    def withdrawn(self) -> float:
        return self.from_fhsa + self.from_rrsp

    def to_dict(self) -> Dict[str, float]:
        return {
            "year": self.year,
            "requested": self.requested,
            "from_fhsa": self.from_fhsa,
            "from_rrsp": self.from_rrsp,
            "shortfall": self.shortfall,
            "fhsa_forfeited": self.fhsa_forfeited,
        }


@dataclass(frozen=True)
class ProjectionResult:
    config: Configuration
    rows: List[YearRow] = field(default_factory=list)
    withdrawal: Optional[DownPaymentWithdrawal] = None


def _emit_row(
    year: int,
    balances: Dict[str, float],
    total: float,
    returns: float,
    roi: float,
    expense: float,
    years_of_expenses: float,
) -> YearRow:
    rounded = {a: _round_currency(balances[a]) for a in ACCOUNTS}
    return YearRow(
        year=int(year),
        total=_round_currency(total),
        investment_returns=_round_currency(returns),
        roi_percent=_round_to(roi, 2),
        adjusted_annual_expense=_round_currency(expense),
        years_of_expenses=_round_to(years_of_expenses, 1),
        **rounded,
    )


def _withdraw_down_payment(balances: Dict[str, float], year: int, amount: float) -> DownPaymentWithdrawal:
    """Drain the FHSA first, then the RRSP.  Mutates ``balances``.

    Whatever both buckets cannot cover is left unmet.  The FHSA is closed
    afterwards, so any balance left in it is forfeited.
    """
    remaining = float(amount)

    from_fhsa = 0.0
    if balances[HOME_SAVINGS_ACCOUNT] > 0.0:
        from_fhsa = min(balances[HOME_SAVINGS_ACCOUNT], remaining)
        balances[HOME_SAVINGS_ACCOUNT] -= from_fhsa
        remaining -= from_fhsa

    from_rrsp = 0.0
    if remaining > 0.0 and balances[RETIREMENT_ACCOUNT] > 0.0:
        from_rrsp = min(balances[RETIREMENT_ACCOUNT], remaining)
        balances[RETIREMENT_ACCOUNT] -= from_rrsp
        remaining -= from_rrsp

    forfeited = balances[HOME_SAVINGS_ACCOUNT]
    balances[HOME_SAVINGS_ACCOUNT] = 0.0

    return DownPaymentWithdrawal(
        year=int(year),
        requested=float(amount),
        from_fhsa=from_fhsa,
        from_rrsp=from_rrsp,
        shortfall=max(0.0, remaining),
        fhsa_forfeited=forfeited,
    )


def run_projection(config: Configuration) -> ProjectionResult:
    """Simulate the portfolio year by year and record the withdrawal event.

    Period 0 is the starting snapshot.  Each later period compounds the
    expense, grows every bucket, applies the down payment when the calendar
    year matches, then adds contributions.  Running state stays unrounded;
    only the emitted rows are rounded.
    """
    growth = 1.0 + float(config.growth_rate) / 100.0
    inflation = 1.0 + float(config.inflation_rate) / 100.0
    contributions = config.contributions()
    balances = config.balances()
    n_years = max(0, int(config.years))
    year = int(config.base_year)

    expense = float(config.monthly_expense) * 12.0
    initial_total = sum(balances.values())
    rows = [
        _emit_row(year, balances, initial_total, 0.0, 0.0, expense, _safe_ratio(initial_total, expense))
    ]
    withdrawal: Optional[DownPaymentWithdrawal] = None

    for _ in range(n_years):
        year += 1
        expense *= inflation

        previous_total = sum(balances.values())
        for a in ACCOUNTS:
            balances[a] *= growth
        yearly_returns = sum(balances.values()) - previous_total

        if year == int(config.down_payment_year):
            withdrawal = _withdraw_down_payment(balances, year, config.down_payment)

        for a, amount in contributions.items():
            balances[a] += amount

        current_total = sum(balances.values())
        roi = (yearly_returns / previous_total * 100.0) if previous_total > 0.0 else 0.0
        rows.append(
            _emit_row(
                year,
                balances,
                current_total,
                yearly_returns,
                roi,
                expense,
                _safe_ratio(current_total, expense),
            )
        )

    return ProjectionResult(config=config, rows=rows, withdrawal=withdrawal)


def project(config: Configuration) -> List[YearRow]:
    """Return the ordered year-by-year projection rows (``years + 1`` of them)."""
    return run_projection(config).rows


def projection_frame(rows: List[YearRow]) -> pd.DataFrame:
    """Tabulate projection rows into a DataFrame with display column names."""
    if not rows:
        return pd.DataFrame(columns=FRAME_COLUMNS)
    df = pd.DataFrame([r.to_dict() for r in rows], columns=FRAME_COLUMNS)
    return df.reset_index(drop=True)
