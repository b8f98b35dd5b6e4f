"""Tests for legal rules loading.

Uses isolated directories via tmp_path and ROL_PAGOS_CONFIG_PATH
so settings overrides never come from the real user config.
"""

import json
from decimal import Decimal

import pytest
from pydantic import ValidationError

from rolpagos.sdk.rules import get_available_years, load_legal_rules


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Set up isolated config directory."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv("ROL_PAGOS_CONFIG_PATH", str(config_dir))
    return {"config_dir": config_dir}


def write_settings(config_dir, settings: dict):
    (config_dir / "settings.json").write_text(json.dumps(settings))


def test_bundled_years():
    years = get_available_years()

    assert {2024, 2025, 2026} <= set(years)
    assert years == sorted(years, reverse=True)


def test_load_2025(isolated_env):
    rules = load_legal_rules(2025)

    assert rules.year == 2025
    assert rules.aporte_personal_rate == Decimal("0.0945")
    assert rules.salario_basico_unificado == Decimal("470.00")
    assert rules.horas_por_dia == 8
    assert rules.recargo_50 == Decimal("1.5")
    assert rules.recargo_100 == Decimal("2")


def test_year_accepts_string(isolated_env):
    assert load_legal_rules("2024").salario_basico_unificado == Decimal("460")


def test_falls_back_to_prior_year(isolated_env):
    latest = max(get_available_years())

    rules = load_legal_rules(latest + 3)

    assert rules.year == latest + 3
    assert rules.salario_basico_unificado == load_legal_rules(latest).salario_basico_unificado


def test_no_rules_before_first_year(isolated_env):
    with pytest.raises(FileNotFoundError):
        load_legal_rules(1999)


def test_explicit_overrides(isolated_env):
    rules = load_legal_rules(2025, overrides={"aporte_personal_rate": "0.10"})

    assert rules.aporte_personal_rate == Decimal("0.10")
    assert rules.salario_basico_unificado == Decimal("470")


def test_settings_overrides(isolated_env):
    write_settings(isolated_env["config_dir"], {
        "legal_rules": {"salario_basico_unificado": "475.00"},
    })

    rules = load_legal_rules(2025)

    assert rules.salario_basico_unificado == Decimal("475.00")


def test_explicit_overrides_ignore_settings(isolated_env):
    write_settings(isolated_env["config_dir"], {
        "legal_rules": {"salario_basico_unificado": "475.00"},
    })

    rules = load_legal_rules(2025, overrides={})

    assert rules.salario_basico_unificado == Decimal("470")


def test_invalid_override_rejected(isolated_env):
    with pytest.raises(ValidationError):
        load_legal_rules(2025, overrides={"aporte_personal_rate": "1.5"})


def test_unknown_key_rejected(isolated_env):
    with pytest.raises(ValidationError):
        load_legal_rules(2025, overrides={"tasa_magica": "1"})
