"""Projection configuration for the Family Portfolio Dashboard.

A :class:`Configuration` is an immutable snapshot of every user-editable
field the projection engine reads.  It is frozen (hashable, structural
equality) so callers can memoize projections on it directly.

The six account buckets are identified by short keys used throughout the
package; ``ACCOUNT_LABELS`` maps them to the display names used in tables
and charts.
"""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Tuple

# Ordered bucket keys.  Order drives table columns and chart stacking.
ACCOUNTS: Tuple[str, ...] = (
    "tfsa",
    "partner_tfsa",
    "rrsp",
    "fhsa",
    "non_registered",
    "crypto",
)

ACCOUNT_LABELS: Dict[str, str] = {
    "tfsa": "My TFSA",
    "partner_tfsa": "Partner TFSA",
    "rrsp": "My RRSP",
    "fhsa": "My FHSA",
    "non_registered": "Non-Registered",
    "crypto": "Crypto",
}

# The FHSA receives no ongoing contribution in this model.
CONTRIBUTING_ACCOUNTS: Tuple[str, ...] = tuple(a for a in ACCOUNTS if a != "fhsa")

HOME_SAVINGS_ACCOUNT = "fhsa"
RETIREMENT_ACCOUNT = "rrsp"

_INT_FIELDS = frozenset({"years", "down_payment_year", "base_year"})


@dataclass(frozen=True)
class Configuration:
    # Starting balances
    tfsa: float = 71000.0
    partner_tfsa: float = 0.0
    rrsp: float = 71804.0
    fhsa: float = 37318.0
    non_registered: float = 20202.0
    crypto: float = 554.0

    # Annual contributions
    tfsa_contrib: float = 7000.0
    partner_tfsa_contrib: float = 7000.0
    rrsp_contrib: float = 18000.0
    non_registered_contrib: float = 0.0
    crypto_contrib: float = 0.0

    # Projection settings
    monthly_expense: float = 5000.0
    growth_rate: float = 7.0        # percent
    inflation_rate: float = 3.0     # percent
    years: int = 10
    down_payment: float = 100000.0
    down_payment_year: int = 2026
    base_year: int = 2025

    def balances(self) -> Dict[str, float]:
        """Starting balances keyed by account."""
        return {a: float(getattr(self, a)) for a in ACCOUNTS}

    def contributions(self) -> Dict[str, float]:
        """Annual contributions keyed by account (FHSA excluded)."""
        return {a: float(getattr(self, f"{a}_contrib")) for a in CONTRIBUTING_ACCOUNTS}

    def annual_contribution_total(self) -> float:
        return sum(self.contributions().values())

    def with_overrides(self, **changes: Any) -> "Configuration":
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)

    @classmethod
    def field_names(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in dataclasses.fields(cls))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "Configuration":
        """Build a configuration from a mapping, filling gaps with defaults.

        Unknown keys are ignored.  Values are coerced to the field's numeric
        type; anything that cannot be coerced (or is not finite) raises
        ``ValueError`` naming the offending field.
        """
        values: Dict[str, Any] = {}
        src = dict(data or {})
        for name in cls.field_names():
            if name not in src or src[name] is None:
                continue
            values[name] = _coerce_field(name, src[name])
        return cls(**values)


def _coerce_field(name: str, raw: Any) -> int | float:
    if isinstance(raw, bool):
        raise ValueError(f"{name}: expected a number, got {raw!r}")
    try:
        value = float(str(raw).strip()) if isinstance(raw, str) else float(raw)
    except (TypeError, ValueError):
        raise ValueError(f"{name}: expected a number, got {raw!r}") from None
    if not math.isfinite(value):
        raise ValueError(f"{name}: value must be finite, got {raw!r}")
    if name in _INT_FIELDS:
        if value != int(value):
            raise ValueError(f"{name}: expected a whole number, got {raw!r}")
        return int(value)
    return value


DEFAULT_CONFIG = Configuration()


def default_config_dict() -> Dict[str, Any]:
    """Return the default configuration as a JSON-serializable dict."""
    return DEFAULT_CONFIG.to_dict()
