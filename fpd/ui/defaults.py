"""UI defaults, slider bounds and quick-select presets.

This module is intentionally free of Streamlit imports so QA can validate
that first-load defaults match the engine's defaults (single source of
truth: ``fpd.core.config.DEFAULT_CONFIG``).
"""

from __future__ import annotations

from typing import Any, Dict, List, MutableMapping, Tuple

from fpd.core.config import ACCOUNT_LABELS, CONTRIBUTING_ACCOUNTS, DEFAULT_CONFIG, Configuration

# Slider bounds: (min, max, step).  These are UI affordances only; the
# engine accepts any real value.
GROWTH_SLIDER: Tuple[float, float, float] = (0.0, 20.0, 0.5)
INFLATION_SLIDER: Tuple[float, float, float] = (0.0, 10.0, 0.5)
YEARS_SLIDER: Tuple[int, int, int] = (1, 30, 1)

GROWTH_PRESETS: List[float] = [7.0, 10.0, 15.0]
INFLATION_PRESETS: List[float] = [2.0, 3.0, 4.0]

# Contribution inputs use their own labels; the RRSP figure is household-wide.
CONTRIBUTION_LABELS: Dict[str, str] = {
    "tfsa": "My TFSA",
    "partner_tfsa": "Partner TFSA",
    "rrsp": "RRSP (Combined)",
    "non_registered": "Non-Registered",
    "crypto": "Crypto",
}

# Sidebar order differs from table order: it follows the statements the
# balances are usually copied from.
BALANCE_INPUT_ORDER: List[str] = ["tfsa", "fhsa", "rrsp", "non_registered", "crypto", "partner_tfsa"]


def balance_input_fields() -> List[Tuple[str, str]]:
    """(session key, label) for each starting balance input."""
    return [(a, ACCOUNT_LABELS[a]) for a in BALANCE_INPUT_ORDER]


def contribution_input_fields() -> List[Tuple[str, str]]:
    """(session key, label) for each annual contribution input."""
    return [(f"{a}_contrib", CONTRIBUTION_LABELS[a]) for a in CONTRIBUTING_ACCOUNTS]


def build_session_defaults() -> Dict[str, Any]:
    """Return first-load session_state defaults.

    Keys are exactly the ``Configuration`` field names so a session state
    can be turned into a configuration with ``Configuration.from_dict``.
    """
    defaults = DEFAULT_CONFIG.to_dict()
    # Rates are widget values; keep them floats so the sliders accept them.
    defaults["growth_rate"] = float(defaults["growth_rate"])
    defaults["inflation_rate"] = float(defaults["inflation_rate"])
    return defaults


def apply_session_defaults(state: MutableMapping[str, Any]) -> List[str]:
    """Seed missing keys in ``state``; return the keys that were added."""
    added: List[str] = []
    for k, v in build_session_defaults().items():
        if k not in state:
            state[k] = v
            added.append(k)
    return added


def config_from_state(state: MutableMapping[str, Any]) -> Configuration:
    """Build a ``Configuration`` from widget values held in ``state``."""
    return Configuration.from_dict({k: state.get(k) for k in Configuration.field_names()})


def preset_label(value: float) -> str:
    return f"{value:g}%"
