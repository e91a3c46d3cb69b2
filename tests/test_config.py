"""Configuration construction and coercion."""

from __future__ import annotations

import math

import pytest

from fpd.core.config import (
    ACCOUNTS,
    CONTRIBUTING_ACCOUNTS,
    DEFAULT_CONFIG,
    Configuration,
    default_config_dict,
)


class TestDefaults:
    def test_default_balances(self):
        assert DEFAULT_CONFIG.balances() == {
            "tfsa": 71000.0, "partner_tfsa": 0.0, "rrsp": 71804.0,
            "fhsa": 37318.0, "non_registered": 20202.0, "crypto": 554.0,
        }

    def test_default_contributions_exclude_fhsa(self):
        contrib = DEFAULT_CONFIG.contributions()
        assert "fhsa" not in contrib
        assert set(contrib) == set(CONTRIBUTING_ACCOUNTS)
        assert DEFAULT_CONFIG.annual_contribution_total() == 32000.0

    def test_default_settings(self):
        cfg = DEFAULT_CONFIG
        assert (cfg.monthly_expense, cfg.growth_rate, cfg.inflation_rate) == (5000.0, 7.0, 3.0)
        assert (cfg.years, cfg.down_payment, cfg.down_payment_year, cfg.base_year) == (10, 100000.0, 2026, 2025)

    def test_default_dict_is_json_ready(self):
        d = default_config_dict()
        assert set(d) == set(Configuration.field_names())
        assert all(isinstance(v, (int, float)) for v in d.values())

    def test_accounts_order(self):
        assert ACCOUNTS == ("tfsa", "partner_tfsa", "rrsp", "fhsa", "non_registered", "crypto")


class TestFromDict:
    def test_round_trip(self):
        cfg = Configuration(years=7, growth_rate=5.5)
        assert Configuration.from_dict(cfg.to_dict()) == cfg

    def test_missing_and_none_use_defaults(self):
        cfg = Configuration.from_dict({"years": None, "tfsa": 5})
        assert cfg.years == 10
        assert cfg.tfsa == 5.0

    def test_unknown_keys_ignored(self):
        assert Configuration.from_dict({"nope": 1}) == DEFAULT_CONFIG

    def test_empty_or_none(self):
        assert Configuration.from_dict(None) == DEFAULT_CONFIG
        assert Configuration.from_dict({}) == DEFAULT_CONFIG

    def test_numeric_strings_coerced(self):
        cfg = Configuration.from_dict({"growth_rate": " 6.5 ", "years": "12", "base_year": 2030.0})
        assert cfg.growth_rate == 6.5
        assert cfg.years == 12
        assert isinstance(cfg.years, int)
        assert cfg.base_year == 2030

    @pytest.mark.parametrize(
        "data",
        [
            {"tfsa": "lots"},
            {"tfsa": True},
            {"growth_rate": math.inf},
            {"monthly_expense": float("nan")},
            {"years": 2.5},
            {"crypto": [1, 2]},
        ],
    )
    def test_invalid_values_raise(self, data):
        with pytest.raises(ValueError):
            Configuration.from_dict(data)

    def test_error_names_field(self):
        with pytest.raises(ValueError, match="down_payment_year"):
            Configuration.from_dict({"down_payment_year": "soon"})


def test_with_overrides_returns_new_instance():
    cfg = DEFAULT_CONFIG.with_overrides(years=3)
    assert cfg.years == 3
    assert DEFAULT_CONFIG.years == 10


def test_configuration_is_hashable():
    assert hash(Configuration()) == hash(Configuration())
